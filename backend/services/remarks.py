import re
from typing import Callable, Dict, List, Optional, Tuple

from models.response import NO_REMARKS, DecodedRemarks

RE_SLP = re.compile(r"^SLP(.*)$")
RE_PRECISE_TEMP = re.compile(r"^T.{8}$")
RE_PEAK_WIND = re.compile(r"^PK WND (\d{3})(\d{2,3})/(\d{2})(\d{2})$")
RE_VAR_VIS = re.compile(r"^VIS (\d+/?\d*V\d+/?\d*)$")
RE_DIGITS = re.compile(r"[0-9]+")

# Remark groups written as several words. The tokenizer glues them back
# together, but only when the glued text is a well-formed group.
MULTI_WORD_GROUPS = (
    (("PK", "WND"), RE_PEAK_WIND),
    (("VIS",), RE_VAR_VIS),
)


def _decode_automated(token: str) -> str:
    if token == "AO1":
        return "Automated station without precipitation discriminator"
    return "Automated station with precipitation discriminator"


def _decode_sea_level_pressure(token: str) -> str:
    """SLP123 -> 1012.3 hPa, SLP876 -> 987.6 hPa (tenths of hPa, decade implied)."""
    digits = token[3:]
    if not RE_DIGITS.fullmatch(digits):
        return f"Unknown format ({token})"
    value = int(digits)
    hpa = value / 10 + (1000 if value < 500 else 900)
    return f"{hpa:.1f} hPa"


def _decode_precise_temp(token: str) -> str:
    """T11280067 -> Temp: -12.8°C, Dewpoint: 6.7°C (sign digit 1 means negative)."""
    temp_digits, dew_digits = token[2:5], token[6:9]
    if not (RE_DIGITS.fullmatch(temp_digits) and RE_DIGITS.fullmatch(dew_digits)):
        return f"Unknown format ({token})"
    temp_sign = "-" if token[1] == "1" else ""
    dew_sign = "-" if token[5] == "1" else ""
    temp = int(temp_digits) / 10
    dew = int(dew_digits) / 10
    return f"Temp: {temp_sign}{temp:.1f}°C, Dewpoint: {dew_sign}{dew:.1f}°C"


def _decode_peak_wind(token: str) -> str:
    match = RE_PEAK_WIND.match(token)
    direction, speed, hour, minute = match.groups()
    return f"Peak wind {direction}° at {speed} knots occurred at {hour}{minute} Zulu"


def _decode_variable_visibility(token: str) -> str:
    bounds = RE_VAR_VIS.match(token).group(1)
    low, high = bounds.split("V", 1)
    return f"Visibility variable between {low} and {high} statute miles"


# (category, matcher, decoder). A token matches at most one rule; a later token
# for the same category overwrites the earlier entry.
RemarkRule = Tuple[str, Callable[[str], bool], Callable[[str], str]]

REMARK_RULES: List[RemarkRule] = [
    ("AutomatedObservationType", lambda t: t in ("AO1", "AO2"), _decode_automated),
    ("SeaLevelPressure", lambda t: RE_SLP.match(t) is not None, _decode_sea_level_pressure),
    ("PreciseTempDewpoint", lambda t: RE_PRECISE_TEMP.match(t) is not None, _decode_precise_temp),
    ("PeakWind", lambda t: RE_PEAK_WIND.match(t) is not None, _decode_peak_wind),
    ("VariableVisibility", lambda t: RE_VAR_VIS.match(t) is not None, _decode_variable_visibility),
]


def tokenize_remarks(remarks: str) -> List[str]:
    """Split remarks on whitespace, keeping multi-word groups like 'PK WND 28045/1515' whole."""
    words = remarks.split()
    tokens: List[str] = []
    i = 0
    while i < len(words):
        for prefix, pattern in MULTI_WORD_GROUPS:
            end = i + len(prefix) + 1
            if tuple(words[i:i + len(prefix)]) == prefix and end <= len(words):
                candidate = " ".join(words[i:end])
                if pattern.match(candidate):
                    tokens.append(candidate)
                    i = end
                    break
        else:
            tokens.append(words[i])
            i += 1
    return tokens


def classify_token(token: str) -> Optional[Tuple[str, str]]:
    for category, matches, decode in REMARK_RULES:
        if matches(token):
            return category, decode(token)
    return None


def decode_remarks(remarks: Optional[str]) -> DecodedRemarks:
    """Decode the recognised remark groups; the plain-language text is always the input as-is."""
    if not remarks:
        return DecodedRemarks(plain_language=NO_REMARKS, decoded={})

    decoded: Dict[str, str] = {}
    for token in tokenize_remarks(remarks):
        result = classify_token(token)
        if result is None:
            continue
        category, explanation = result
        decoded[category] = explanation

    return DecodedRemarks(plain_language=remarks, decoded=decoded)
