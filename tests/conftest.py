"""Pytest configuration and shared fixtures"""
import pytest

from climatedash.ingest import normalize


def make_record(timestamp="10/02/26 10:42:57", **overrides):
    """Raw spreadsheet record shaped like the live endpoint's rows"""
    record = {
        "Timestamp": timestamp,
        "Temperature Filtered(F)": "71,86",
        "Temperature CSV(F)": "72,00",
        "CO2 Rechts": 71860,
        "CO2 Links": "70500",
        "CO2 CSV(%)": "70,0",
        "Cooling(V)": "6,5",
        "Heating(PWM)": 3.0,
        "Ventilation(V)": "6.0",
        "Fan 1(V)": "4,2",
        "Fan 2(V)": 4.4,
        "Fan 3(V)": "4,6",
        "Stuursignaal debiet(Pa)": "350",
        "Opmerking": "unknown extra column",
    }
    record.update(overrides)
    return record


class FakeSheetClient:
    """Stand-in for SheetClient returning canned results without network"""

    data_url = "https://example.invalid/exec"

    def __init__(self, result=None, error=None):
        self.result = result if result is not None else []
        self.error = error
        self.calls = 0

    def fetch_series(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.result)


@pytest.fixture
def raw_records():
    """Three valid records, deliberately out of chronological order"""
    return [
        make_record("10/02/26 10:44:57", **{"Temperature Filtered(F)": "73,10"}),
        make_record("10/02/26 10:42:57"),
        make_record("10/02/26 10:43:57", **{"Cooling(V)": None, "Heating(PWM)": ""}),
    ]


@pytest.fixture
def sample_points(raw_records):
    """Normalized series built from raw_records"""
    return normalize(raw_records)


@pytest.fixture
def fake_client(sample_points):
    return FakeSheetClient(result=sample_points)


@pytest.fixture
def record_factory():
    """Build raw records with field overrides"""
    return make_record


@pytest.fixture
def client_factory():
    """Build FakeSheetClient instances"""
    return FakeSheetClient
