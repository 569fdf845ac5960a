import pytest

from services.remarks import classify_token, decode_remarks, tokenize_remarks


def test_no_remarks():
    result = decode_remarks(None)
    assert result.plain_language == "No Remarks"
    assert result.decoded == {}


def test_empty_remarks():
    assert decode_remarks("").plain_language == "No Remarks"


@pytest.mark.parametrize("remarks", [
    "AO2 SLP123 T01280067",
    "AO1 PK WND 28045/1515 SLPNO $",
    "  RAB15  TSNO  ",
])
def test_plain_language_is_input_verbatim(remarks):
    assert decode_remarks(remarks).plain_language == remarks


def test_automated_station_types():
    assert decode_remarks("AO1").decoded == {
        "AutomatedObservationType": "Automated station without precipitation discriminator"
    }
    assert decode_remarks("AO2").decoded == {
        "AutomatedObservationType": "Automated station with precipitation discriminator"
    }


@pytest.mark.parametrize("token, expected", [
    ("SLP123", "1012.3 hPa"),
    ("SLP876", "987.6 hPa"),
    ("SLP500", "950.0 hPa"),
    ("SLP499", "1049.9 hPa"),
    ("SLPNO", "Unknown format (SLPNO)"),
    ("SLP12³", "Unknown format (SLP12³)"),
    ("SLP²²²", "Unknown format (SLP²²²)"),
])
def test_sea_level_pressure(token, expected):
    assert decode_remarks(token).decoded == {"SeaLevelPressure": expected}


def test_precise_temperature_and_dewpoint():
    decoded = decode_remarks("T01280067").decoded
    assert decoded == {"PreciseTempDewpoint": "Temp: 12.8°C, Dewpoint: 6.7°C"}


def test_precise_temperature_negative_sign():
    decoded = decode_remarks("T11280067").decoded
    assert decoded["PreciseTempDewpoint"] == "Temp: -12.8°C, Dewpoint: 6.7°C"


def test_precise_temperature_both_negative():
    decoded = decode_remarks("T10051012").decoded
    assert decoded["PreciseTempDewpoint"] == "Temp: -0.5°C, Dewpoint: -1.2°C"


def test_precise_temperature_non_digits():
    decoded = decode_remarks("TABCDEFGH").decoded
    assert decoded["PreciseTempDewpoint"] == "Unknown format (TABCDEFGH)"


def test_peak_wind():
    decoded = decode_remarks("AO2 PK WND 28045/1515 SLP210").decoded
    assert decoded["PeakWind"] == "Peak wind 280° at 45 knots occurred at 1515 Zulu"


def test_variable_visibility():
    decoded = decode_remarks("VIS 1/2V2").decoded
    assert decoded == {"VariableVisibility": "Visibility variable between 1/2 and 2 statute miles"}


def test_unrecognized_tokens_are_skipped():
    assert decode_remarks("RAB15 TSNO $ FROIN").decoded == {}


def test_last_match_wins_but_order_follows_first_token():
    decoded = decode_remarks("SLP123 AO2 SLP876").decoded
    assert list(decoded) == ["SeaLevelPressure", "AutomatedObservationType"]
    assert decoded["SeaLevelPressure"] == "987.6 hPa"


def test_tokenizer_keeps_multi_word_groups():
    assert tokenize_remarks("AO2 PK WND 28045/1515 VIS 1V3 SLP123") == [
        "AO2", "PK WND 28045/1515", "VIS 1V3", "SLP123",
    ]


def test_tokenizer_leaves_incomplete_groups_split():
    assert tokenize_remarks("PK WND VIS") == ["PK", "WND", "VIS"]
    assert tokenize_remarks("VIS NE 2") == ["VIS", "NE", "2"]


def test_classify_token_unmatched():
    assert classify_token("RMK") is None


def test_precise_temperature_non_ascii_digits():
    decoded = decode_remarks("T0¹²³0067").decoded
    assert decoded["PreciseTempDewpoint"] == "Unknown format (T0¹²³0067)"


def test_peak_wind_speed_echoed_as_reported():
    decoded = decode_remarks("PK WND 280045/1515").decoded
    assert decoded["PeakWind"] == "Peak wind 280° at 045 knots occurred at 1515 Zulu"
