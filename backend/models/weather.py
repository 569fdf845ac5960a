from pydantic import BaseModel
from typing import List, Optional

# Shapes of the CheckWX "decoded" payloads. Every block the provider may omit
# is Optional so a sparse report still validates.


class StationInfo(BaseModel):
    name: Optional[str] = None


class Condition(BaseModel):
    code: str
    text: str


class Wind(BaseModel):
    degrees: Optional[int] = None
    speed_kts: Optional[float] = None
    speed_mps: Optional[float] = None
    speed_mph: Optional[float] = None
    gust_kts: Optional[float] = None


class Visibility(BaseModel):
    miles: Optional[str] = None  # exact value, may be a fraction like "1/4"
    miles_float: Optional[float] = None
    meters: Optional[str] = None
    meters_float: Optional[float] = None


class Cloud(BaseModel):
    code: Optional[str] = None  # FEW, SCT, BKN, OVC ...
    text: Optional[str] = None
    base_feet_agl: Optional[float] = None
    base_meters_agl: Optional[float] = None


class Ceiling(Cloud):
    pass


class Temperature(BaseModel):
    celsius: Optional[float] = None
    fahrenheit: Optional[float] = None


class Humidity(BaseModel):
    percent: Optional[float] = None


class Barometer(BaseModel):
    hg: Optional[float] = None
    hpa: Optional[float] = None
    kpa: Optional[float] = None
    mb: Optional[float] = None


class Elevation(BaseModel):
    feet: Optional[float] = None
    meters: Optional[float] = None


class CheckWxMetar(BaseModel):
    """One station's observation as returned by /metar/<ICAO>/decoded."""
    icao: str
    observed: str  # ISO 8601, UTC even without a zone suffix
    raw_text: str = ""
    station: Optional[StationInfo] = None
    conditions: Optional[List[Condition]] = None
    wind: Optional[Wind] = None
    visibility: Optional[Visibility] = None
    ceiling: Optional[Ceiling] = None
    clouds: List[Cloud] = []
    temperature: Optional[Temperature] = None
    dewpoint: Optional[Temperature] = None
    humidity: Optional[Humidity] = None
    barometer: Optional[Barometer] = None
    elevation: Optional[Elevation] = None
    flight_category: Optional[str] = None
    remarks: Optional[str] = None


class CheckWxMetarResponse(BaseModel):
    results: int = 0  # provider count; data is authoritative
    data: List[CheckWxMetar] = []


class CheckWxFlightCategory(BaseModel):
    icao: str
    flight_category: Optional[str] = None


class CheckWxFlightCategoryResponse(BaseModel):
    results: int = 0  # provider count; data is authoritative
    data: List[CheckWxFlightCategory] = []
