from pydantic import BaseModel
from typing import Dict, Literal, Optional

FlightCategory = Literal["VFR", "MVFR", "IFR", "LIFR", "Unknown"]
TagType = Literal["success", "info", "warning", "error", "default"]

NO_REMARKS = "No Remarks"


class DecodedRemarks(BaseModel):
    plain_language: str = NO_REMARKS
    # category name -> explanation, in the order the tokens appeared
    decoded: Dict[str, str] = {}


class DecodedSummary(BaseModel):
    airport_name: str
    icao: str
    raw_text: str
    observed_time: str
    report_age_minutes: int
    flight_category: str
    wind: str
    visibility: str
    ceiling_and_clouds: str
    temperature: str
    dewpoint: str
    altimeter: str
    humidity: str
    density_altitude: str
    weather: Optional[str] = None
    remarks: DecodedRemarks = DecodedRemarks()


class MetarReport(DecodedSummary):
    flight_category_tag: TagType = "default"


class FlightCategoryResult(BaseModel):
    icao: str
    flight_category: str
    tag: TagType
