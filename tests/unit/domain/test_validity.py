from datetime import date

from certhub.domain.value_objects import ValidityStatus, validity_of

TODAY = date(2024, 6, 1)


def test_no_expiry_is_valid():
    assert validity_of(None, TODAY) == ValidityStatus.VALID


def test_expiring_today_is_still_valid():
    assert validity_of(TODAY, TODAY) == ValidityStatus.VALID


def test_future_expiry_is_valid():
    assert validity_of(date(2025, 1, 1), TODAY) == ValidityStatus.VALID


def test_past_expiry_is_expired():
    assert validity_of(date(2024, 5, 31), TODAY) == ValidityStatus.EXPIRED


def test_status_serializes_as_label():
    assert ValidityStatus.EXPIRED.value == "Expired"
