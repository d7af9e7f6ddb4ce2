import logging
from typing import Dict, List

import requests

from ..config import settings

logger = logging.getLogger(__name__)


class CountriesFetchError(Exception):
    pass


def get_countries() -> List[Dict[str, str]]:
    """Fetch the country list as [{"name": ..., "flag": ...}] from the public countries API."""
    try:
        response = requests.get(settings.COUNTRIES_API_URL, timeout=settings.COUNTRIES_TIMEOUT_SECONDS)
        response.raise_for_status()
        countries = response.json()
        return [{"name": c["name"], "flag": c["flag"]} for c in countries]
    except (requests.exceptions.RequestException, ValueError, KeyError, TypeError) as e:
        logger.error("Failed to fetch countries from %s: %s", settings.COUNTRIES_API_URL, e)
        raise CountriesFetchError("Could not fetch countries") from None
