from datetime import date, datetime
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import BookingStatus
from ..services.countries import get_countries
from ..services.data_service import DataService

router = APIRouter(prefix="/api/v1", tags=["data-api"])

# ==== Schemas ====

class CabinSummaryOut(BaseModel):
    id: int
    name: str
    max_capacity: int
    regular_price: float
    discount: float
    image: Optional[str] = None

    class Config:
        from_attributes = True

class CabinOut(CabinSummaryOut):
    created_at: datetime
    description: Optional[str] = None

class CabinPriceOut(BaseModel):
    regular_price: float
    discount: float

    class Config:
        from_attributes = True

class GuestOut(BaseModel):
    id: int
    created_at: datetime
    full_name: str
    email: str
    nationality: Optional[str] = None
    national_id: Optional[str] = None
    country_flag: Optional[str] = None

    class Config:
        from_attributes = True

class GuestCreateIn(BaseModel):
    full_name: str
    email: str
    nationality: Optional[str] = None
    national_id: Optional[str] = None
    country_flag: Optional[str] = None

class GuestUpdateIn(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    nationality: Optional[str] = None
    national_id: Optional[str] = None
    country_flag: Optional[str] = None

class BookingOut(BaseModel):
    id: int
    created_at: datetime
    start_date: date
    end_date: date
    num_nights: int
    num_guests: int
    cabin_price: Optional[float] = None
    extras_price: Optional[float] = None
    total_price: Optional[float] = None
    status: BookingStatus
    has_breakfast: bool
    is_paid: bool
    observations: Optional[str] = None
    cabin_id: int
    guest_id: int

    class Config:
        use_enum_values = True
        from_attributes = True

class BookingCabinOut(BaseModel):
    name: str
    image: Optional[str] = None

    class Config:
        from_attributes = True

class GuestBookingOut(BookingOut):
    cabin: Optional[BookingCabinOut] = None

class BookingCreateIn(BaseModel):
    start_date: date
    end_date: date
    num_nights: Optional[int] = None
    num_guests: int = Field(ge=1)
    cabin_price: Optional[float] = None
    extras_price: Optional[float] = None
    total_price: Optional[float] = None
    status: BookingStatus = Field(default=BookingStatus.UNCONFIRMED)
    has_breakfast: bool = False
    is_paid: bool = False
    observations: Optional[str] = None
    cabin_id: int
    guest_id: int

class BookingUpdateIn(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    num_nights: Optional[int] = None
    num_guests: Optional[int] = Field(default=None, ge=1)
    cabin_price: Optional[float] = None
    extras_price: Optional[float] = None
    total_price: Optional[float] = None
    status: Optional[BookingStatus] = None
    has_breakfast: Optional[bool] = None
    is_paid: Optional[bool] = None
    observations: Optional[str] = None
    cabin_id: Optional[int] = None

class SettingsOut(BaseModel):
    min_booking_length: int
    max_booking_length: int
    max_guests_per_booking: int
    breakfast_price: float

    class Config:
        from_attributes = True

class CountryOut(BaseModel):
    name: str
    flag: str

# ==== Helpers ====

def get_data_service(db: Session = Depends(get_db)) -> DataService:
    return DataService(db)

# ==== Cabins ====

@router.get("/cabins", response_model=List[CabinSummaryOut])
def api_cabins(svc: DataService = Depends(get_data_service)):
    return svc.get_cabins()

@router.get("/cabins/{cabin_id}", response_model=CabinOut)
def api_cabin(cabin_id: int, svc: DataService = Depends(get_data_service)):
    cabin = svc.get_cabin(cabin_id)
    if not cabin:
        raise HTTPException(status_code=404, detail="Cabin not found")
    return cabin

@router.get("/cabins/{cabin_id}/price", response_model=CabinPriceOut)
def api_cabin_price(cabin_id: int, svc: DataService = Depends(get_data_service)):
    price = svc.get_cabin_price(cabin_id)
    if not price:
        raise HTTPException(status_code=404, detail="Cabin not found")
    return price

@router.get("/cabins/{cabin_id}/booked-dates", response_model=List[date])
def api_booked_dates(cabin_id: int, svc: DataService = Depends(get_data_service)):
    return svc.get_booked_dates_by_cabin_id(cabin_id)

# ==== Settings & countries ====

@router.get("/settings", response_model=SettingsOut)
def api_settings(svc: DataService = Depends(get_data_service)):
    return svc.get_settings()

@router.get("/countries", response_model=List[CountryOut])
def api_countries():
    return get_countries()

# ==== Guests ====

@router.get("/guests", response_model=GuestOut)
def api_guest(email: str, svc: DataService = Depends(get_data_service)):
    guest = svc.get_guest(email)
    if not guest:
        raise HTTPException(status_code=404, detail="Guest not found")
    return guest

@router.post("/guests", response_model=GuestOut, status_code=201)
def api_create_guest(payload: GuestCreateIn, svc: DataService = Depends(get_data_service)):
    return svc.create_guest(payload.model_dump(exclude_unset=True))

@router.patch("/guests/{guest_id}", response_model=GuestOut)
def api_update_guest(guest_id: int, payload: GuestUpdateIn, svc: DataService = Depends(get_data_service)):
    # Only fields present in the request body are written
    return svc.update_guest(guest_id, payload.model_dump(exclude_unset=True))

@router.get("/guests/{guest_id}/bookings", response_model=List[GuestBookingOut])
def api_guest_bookings(guest_id: int, svc: DataService = Depends(get_data_service)):
    return svc.get_bookings(guest_id)

# ==== Bookings ====

@router.get("/bookings/{booking_id}", response_model=BookingOut)
def api_booking(booking_id: int, svc: DataService = Depends(get_data_service)):
    return svc.get_booking(booking_id)

@router.post("/bookings", response_model=BookingOut, status_code=201)
def api_create_booking(payload: BookingCreateIn, svc: DataService = Depends(get_data_service)):
    return svc.create_booking(payload.model_dump(exclude_unset=True))

@router.patch("/bookings/{booking_id}", response_model=BookingOut)
def api_update_booking(booking_id: int, payload: BookingUpdateIn, svc: DataService = Depends(get_data_service)):
    return svc.update_booking(booking_id, payload.model_dump(exclude_unset=True))

@router.delete("/bookings/{booking_id}", response_model=BookingOut)
def api_delete_booking(booking_id: int, svc: DataService = Depends(get_data_service)):
    return svc.delete_booking(booking_id)
