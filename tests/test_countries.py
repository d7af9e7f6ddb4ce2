"""
Tests for the country list client.
"""

import pytest
import requests

from app.services import countries
from app.services.countries import CountriesFetchError, get_countries


class FakeResponse:

    def __init__(self, payload=None, status_code=200, bad_json=False):
        self.payload = payload
        self.status_code = status_code
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f'{self.status_code} Server Error')

    def json(self):
        if self.bad_json:
            raise ValueError('Expecting value')
        return self.payload


def test_returns_name_and_flag(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse([
            {'name': 'Portugal', 'flag': 'https://flagcdn.com/pt.svg'},
            {'name': 'Spain', 'flag': 'https://flagcdn.com/es.svg', 'independent': True},
        ])

    monkeypatch.setattr(countries.requests, 'get', fake_get)
    assert get_countries() == [
        {'name': 'Portugal', 'flag': 'https://flagcdn.com/pt.svg'},
        {'name': 'Spain', 'flag': 'https://flagcdn.com/es.svg'},
    ]
    assert calls == [(countries.settings.COUNTRIES_API_URL, countries.settings.COUNTRIES_TIMEOUT_SECONDS)]


@pytest.mark.parametrize('response', [
    FakeResponse(status_code=503),
    FakeResponse(bad_json=True),
    FakeResponse([{'flag': 'no name'}]),
])
def test_bad_responses_are_wrapped(monkeypatch, response):
    monkeypatch.setattr(countries.requests, 'get', lambda url, timeout: response)
    with pytest.raises(CountriesFetchError, match='Could not fetch countries'):
        get_countries()


def test_network_error_is_wrapped(monkeypatch):
    def fake_get(url, timeout):
        raise requests.exceptions.ConnectionError('connection refused')

    monkeypatch.setattr(countries.requests, 'get', fake_get)
    with pytest.raises(CountriesFetchError, match='Could not fetch countries'):
        get_countries()
