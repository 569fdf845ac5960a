"""
Pytest configuration and fixtures for the METAR decoder tests.
"""
import pytest

from config import Settings
from models.weather import CheckWxMetar


@pytest.fixture
def klax_payload():
    """KLAX observation as returned by /metar/KLAX/decoded (no ceiling, no category)."""
    return {
        'icao': 'KLAX',
        'observed': '2024-01-01T12:00:00',
        'raw_text': 'KLAX 011200Z 27010KT 10SM CLR 20/10 A2992',
        'station': {'name': 'Los Angeles International'},
        'wind': {'degrees': 270, 'speed_kts': 10},
        'visibility': {'miles': '10', 'miles_float': 10},
        'clouds': [],
        'temperature': {'celsius': 20, 'fahrenheit': 68},
        'dewpoint': {'celsius': 10, 'fahrenheit': 50},
        'barometer': {'hg': 29.92, 'hpa': 1013},
    }


@pytest.fixture
def klax_metar(klax_payload):
    return CheckWxMetar.model_validate(klax_payload)


@pytest.fixture
def settings():
    return Settings(checkwx_api_key='test-key', checkwx_base_url='https://checkwx.test')


