from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from signout_tracker.core.enums import SignoutStatus
from signout_tracker.core.exceptions import ValidationError
from signout_tracker.signouts.model import SignoutRecord

OUT_AT = datetime(2026, 3, 14, 8, 0, 0)


def _record(**overrides) -> SignoutRecord:
    values = dict(
        signout_id="SO260314-1001",
        soldier_rank="PVT",
        soldier_first_name="John",
        soldier_last_name="Doe",
        soldier_dod_id="1234567890",
        location="PX",
        sign_out_time=OUT_AT,
        sign_in_time=OUT_AT + timedelta(hours=1),
        signed_out_by_id=1,
        signed_out_by_name="LT Miller",
        signed_in_by_id=10,
        signed_in_by_name="SSG Lee",
        status=SignoutStatus.IN,
        notes=None,
    )
    values.update(overrides)
    return SignoutRecord(**values)


def test_completed_record_is_valid():
    rec = _record()
    assert rec.is_out is False


def test_out_record_without_sign_in_is_valid():
    rec = _record(status=SignoutStatus.OUT, sign_in_time=None, signed_in_by_id=None, signed_in_by_name=None)
    assert rec.is_out is True


def test_out_record_rejects_sign_in_data():
    with pytest.raises(ValidationError):
        _record(status=SignoutStatus.OUT, signed_in_by_id=None)


def test_in_record_requires_sign_in_commander():
    with pytest.raises(ValidationError):
        _record(signed_in_by_id=None)


def test_in_record_rejects_sign_in_before_sign_out():
    with pytest.raises(ValidationError, match="precedes"):
        _record(sign_in_time=OUT_AT - timedelta(seconds=1))


def test_in_record_requires_sign_in_commander_name():
    with pytest.raises(ValidationError, match="needs sign-in time and commander"):
        _record(signed_in_by_name=None)


def test_out_record_rejects_sign_in_commander_name():
    with pytest.raises(ValidationError, match="cannot carry sign-in data"):
        _record(status=SignoutStatus.OUT, sign_in_time=None, signed_in_by_id=None)
