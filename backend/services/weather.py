import logging
from typing import Optional

import requests
from pydantic import ValidationError

from config import Settings
from models.response import DecodedSummary
from models.weather import CheckWxFlightCategoryResponse, CheckWxMetar, CheckWxMetarResponse
from services.metar_decoder import decode_metar

logger = logging.getLogger(__name__)


class CheckWxError(Exception):
    """Any failure talking to CheckWX; status_code is what the HTTP layer should answer with."""

    status_code = 502

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(CheckWxError):
    status_code = 500


class InvalidIcaoError(CheckWxError):
    status_code = 400


class StationNotFoundError(CheckWxError):
    status_code = 404


def normalize_icao(icao: str) -> str:
    code = (icao or "").strip()
    if len(code) < 3 or len(code) > 4:
        raise InvalidIcaoError("Invalid ICAO code format.")
    return code.upper()


class CheckWxClient:
    """Fetches decoded METARs from the CheckWX API, authenticating with X-API-Key."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    def _get(self, endpoint: str) -> dict:
        if not self.settings.checkwx_api_key:
            raise ConfigurationError("CheckWX API key is not configured (set CHECKWX_API_KEY)")

        url = f"{self.settings.checkwx_base_url}{endpoint}"
        headers = {
            "X-API-Key": self.settings.checkwx_api_key,
            "Accept": "application/json",
        }
        logger.info(f"Fetching CheckWX endpoint: {endpoint}")

        try:
            r = self.session.get(url, headers=headers, timeout=self.settings.request_timeout)
        except requests.RequestException as e:
            logger.error(f"CheckWX request to {endpoint} failed: {e}")
            raise CheckWxError(f"CheckWX request failed: {e}") from e

        try:
            data = r.json()
        except ValueError:
            data = None

        if not r.ok:
            message = None
            if isinstance(data, dict):
                message = data.get("error")
            message = message or f"CheckWX API request failed with status {r.status_code}"
            logger.error(f"CheckWX API error ({r.status_code}) for {endpoint}: {message}")
            raise CheckWxError(message, status_code=r.status_code)

        if not isinstance(data, dict):
            raise CheckWxError(f"Unexpected CheckWX response for {endpoint}")
        return data

    def fetch_metar(self, icao: str) -> CheckWxMetar:
        code = normalize_icao(icao)
        data = self._get(f"/metar/{code}/decoded")

        try:
            response = CheckWxMetarResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Malformed METAR payload for {code}: {e}")
            raise CheckWxError(f"Malformed METAR payload for {code}") from e

        if not response.data:
            logger.warning(f"CheckWX returned 0 results for {code}")
            raise StationNotFoundError(f"No METAR found for {code}")
        return response.data[0]

    def fetch_flight_category(self, icao: str) -> Optional[str]:
        code = normalize_icao(icao)
        data = self._get(f"/metar/{code}/flight/category")

        try:
            response = CheckWxFlightCategoryResponse.model_validate(data)
        except ValidationError as e:
            raise CheckWxError(f"Malformed flight category payload for {code}") from e

        if not response.data:
            raise StationNotFoundError(f"No flight category found for {code}")
        return response.data[0].flight_category

    def decode(self, icao: str) -> DecodedSummary:
        return decode_metar(self.fetch_metar(icao))
