"""Turn a CheckWX decoded METAR into display strings.

Every function here is total: absent or malformed fields degrade to a fixed
fallback string ("N/A", "Not Reported", "Calm" ...) instead of raising.
"""

import logging
import math
from datetime import datetime, timezone
from fractions import Fraction
from typing import List, Optional

from models.response import DecodedSummary, FlightCategory, TagType
from models.weather import (
    Barometer,
    Ceiling,
    CheckWxMetar,
    Cloud,
    Condition,
    Elevation,
    Humidity,
    Temperature,
    Visibility,
    Wind,
)
from services.remarks import decode_remarks

logger = logging.getLogger(__name__)

INVALID_DATE = "Invalid Date"
STANDARD_ALTIMETER_INHG = 29.92
ISA_SEA_LEVEL_TEMP_C = 15.0
ISA_LAPSE_RATE_C_PER_1000FT = 1.98
DENSITY_ALTITUDE_FT_PER_C = 120

# Visibility and ceiling assumed when the report does not give one
UNLIMITED_VISIBILITY_SM = 99
UNLIMITED_CEILING_FT = 99999

FLIGHT_CATEGORY_TAGS = {
    "VFR": "success",
    "MVFR": "warning",
    "IFR": "error",
    "LIFR": "error",
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _num(value: float) -> str:
    """Render a provider number the way it was sent: 20.0 -> '20', 29.5 -> '29.5'."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_altitude(feet: float) -> str:
    """2437.6 -> 2,438'"""
    return f"{_round_half_up(feet):,}'"


def _parse_utc(observed: str) -> Optional[datetime]:
    if not isinstance(observed, str):
        return None
    utc_string = observed if observed.endswith("Z") else observed + "Z"
    try:
        return datetime.fromisoformat(utc_string[:-1] + "+00:00")
    except ValueError:
        return None


def calculate_report_age(observed: str, now: Optional[datetime] = None) -> int:
    """Minutes elapsed since the observation, rounded, never negative.

    Unparsable timestamps count as zero minutes old.
    """
    observed_at = _parse_utc(observed)
    if observed_at is None:
        return 0

    now = now or datetime.now(timezone.utc)
    age_minutes = _round_half_up((now - observed_at).total_seconds() / 60)
    return max(0, age_minutes)


def format_observed_time(observed: str) -> str:
    """'2024-01-01T22:54:00' -> '3:54 PM (Local) / 22:54Z' (local per host timezone)."""
    observed_at = _parse_utc(observed)
    if observed_at is None:
        logger.warning(f"Invalid date string provided: {observed!r}")
        return INVALID_DATE

    local = observed_at.astimezone()
    hours12 = local.hour % 12 or 12
    ampm = "PM" if local.hour >= 12 else "AM"
    return f"{hours12}:{local.minute:02d} {ampm} (Local) / {observed_at:%H:%M}Z"


def format_wind(wind: Optional[Wind]) -> str:
    if wind is None:
        return "Variable, Calm"

    degrees = wind.degrees or 0
    speed = _num(wind.speed_kts or 0)
    gust = f", gusting to {_num(wind.gust_kts)} knots" if wind.gust_kts else ""

    if degrees == 0 and not wind.speed_kts:
        return "Calm"
    if degrees == 0:
        return f"Variable at {speed} knots{gust}"
    return f"{degrees}° at {speed} knots{gust}"


def _visibility_miles(visibility: Visibility) -> Optional[float]:
    if visibility.miles_float is not None:
        return visibility.miles_float
    # "10", "10+", "1/4", "1 1/2"
    text = (visibility.miles or "").strip().rstrip("+")
    if not text:
        return None
    try:
        return float(sum(Fraction(part) for part in text.split()))
    except (ValueError, ZeroDivisionError):
        return None


def format_visibility(visibility: Optional[Visibility]) -> str:
    if visibility is None:
        return "Not Reported"
    miles = _visibility_miles(visibility)
    if miles is None or math.isnan(miles):
        return "Not Reported"

    # 10 SM and beyond is reported as clear whatever the exact figure was
    if miles >= 10:
        vis_str = "10+ statute miles (Clear)"
    else:
        exact = visibility.miles if visibility.miles else _num(miles)
        vis_str = f"{exact} statute mile(s)"
    if visibility.meters_float:
        vis_str += f" ({_num(visibility.meters_float)} meters)"
    return vis_str


def _layer_text(layer: Cloud) -> str:
    return layer.text or layer.code or "Unknown"


def format_ceiling_and_clouds(ceiling: Optional[Ceiling], clouds: Optional[List[Cloud]]) -> str:
    layers: List[str] = []
    heights: List[Optional[float]] = []

    for layer in clouds or []:
        layer_str = _layer_text(layer)
        if layer.base_feet_agl is not None:
            layer_str += f" at {format_altitude(layer.base_feet_agl)} AGL"
        layers.append(layer_str)
        heights.append(layer.base_feet_agl)

    if ceiling is not None:
        if ceiling.base_feet_agl is not None:
            ceiling_str = f"{_layer_text(ceiling)} at {format_altitude(ceiling.base_feet_agl)} AGL (Ceiling)"
        else:
            ceiling_str = f"{_layer_text(ceiling)} (Ceiling)"

        if ceiling.base_feet_agl is not None and ceiling.base_feet_agl in heights:
            layers[heights.index(ceiling.base_feet_agl)] += " (Ceiling)"
        else:
            layers.append(ceiling_str)

    if not layers:
        return "Clear below 12,000 ft"
    return "; ".join(layers)


def format_temperature(temp: Optional[Temperature]) -> str:
    if temp is None or temp.celsius is None or temp.fahrenheit is None:
        return "N/A"
    return f"{_num(temp.celsius)}°C ({_num(temp.fahrenheit)}°F)"


def format_altimeter(barometer: Optional[Barometer]) -> str:
    if barometer is None:
        return "N/A"
    if barometer.hg:
        if barometer.hpa is None:
            return f"{barometer.hg:.2f} inHg"
        return f"{barometer.hg:.2f} inHg ({_num(barometer.hpa)} hPa)"
    if barometer.hpa is None:
        return "N/A"
    return f"{_num(barometer.hpa)} hPa"


def format_humidity(humidity: Optional[Humidity]) -> str:
    if humidity is None or humidity.percent is None:
        return "N/A"
    return f"{_round_half_up(humidity.percent)}%"


def format_conditions(conditions: Optional[List[Condition]]) -> Optional[str]:
    if not conditions:
        return None
    return ", ".join(c.text for c in conditions)


def determine_flight_category(
    visibility: Optional[Visibility], ceiling: Optional[Ceiling]
) -> FlightCategory:
    """Classify by visibility (SM) and ceiling (ft AGL), lower bounds inclusive.

    VFR:  vis >= 5 and ceiling >= 3000
    MVFR: vis >= 3 and ceiling >= 1000
    IFR:  vis >= 1 and ceiling >= 500
    LIFR: vis < 1 or ceiling < 500
    """
    vis_miles = None
    if visibility is not None:
        vis_miles = visibility.miles_float
    ceil_feet = ceiling.base_feet_agl if ceiling is not None else None
    return classify_flight_category(
        UNLIMITED_VISIBILITY_SM if vis_miles is None else vis_miles,
        UNLIMITED_CEILING_FT if ceil_feet is None else ceil_feet,
    )


def classify_flight_category(vis_miles: float, ceil_feet: float) -> FlightCategory:
    if vis_miles >= 5 and ceil_feet >= 3000:
        return "VFR"
    elif vis_miles >= 3 and ceil_feet >= 1000:
        return "MVFR"
    elif vis_miles >= 1 and ceil_feet >= 500:
        return "IFR"
    elif vis_miles < 1 or ceil_feet < 500:
        return "LIFR"
    # only reachable with NaN inputs
    return "Unknown"


def calculate_density_altitude(
    elevation: Optional[Elevation],
    temperature: Optional[Temperature],
    barometer: Optional[Barometer],
) -> str:
    elevation_ft = elevation.feet if elevation is not None else None
    temp_c = temperature.celsius if temperature is not None else None
    altimeter_hg = barometer.hg if barometer is not None else None

    values = (elevation_ft, temp_c, altimeter_hg)
    if any(v is None or not isinstance(v, (int, float)) or math.isnan(v) for v in values):
        return "N/A"

    pressure_altitude = elevation_ft + (STANDARD_ALTIMETER_INHG - altimeter_hg) * 1000
    isa_temp_c = ISA_SEA_LEVEL_TEMP_C - ISA_LAPSE_RATE_C_PER_1000FT * (pressure_altitude / 1000)
    density_altitude = pressure_altitude + DENSITY_ALTITUDE_FT_PER_C * (temp_c - isa_temp_c)
    return format_altitude(density_altitude)


def flight_category_tag(category: Optional[str]) -> TagType:
    """Style tag for a flight category; anything unrecognised gets 'default'."""
    if not category:
        return "default"
    return FLIGHT_CATEGORY_TAGS.get(category.upper(), "default")


def decode_metar(metar: Optional[CheckWxMetar], now: Optional[datetime] = None) -> Optional[DecodedSummary]:
    """Build the display summary for one station; None when there is nothing to decode."""
    if metar is None:
        return None

    derived_category = determine_flight_category(metar.visibility, metar.ceiling)
    airport_name = metar.station.name if metar.station and metar.station.name else "Unknown Station"

    return DecodedSummary(
        airport_name=airport_name,
        icao=metar.icao,
        raw_text=metar.raw_text,
        observed_time=format_observed_time(metar.observed),
        report_age_minutes=calculate_report_age(metar.observed, now=now),
        # the provider's own category wins over the derived one
        flight_category=metar.flight_category or derived_category,
        wind=format_wind(metar.wind),
        visibility=format_visibility(metar.visibility),
        ceiling_and_clouds=format_ceiling_and_clouds(metar.ceiling, metar.clouds),
        temperature=format_temperature(metar.temperature),
        dewpoint=format_temperature(metar.dewpoint),
        altimeter=format_altimeter(metar.barometer),
        humidity=format_humidity(metar.humidity),
        density_altitude=calculate_density_altitude(metar.elevation, metar.temperature, metar.barometer),
        weather=format_conditions(metar.conditions),
        remarks=decode_remarks(metar.remarks),
    )
