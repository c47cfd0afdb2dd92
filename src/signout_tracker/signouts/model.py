from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import SignoutStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class SignoutRecord:
    """One person on one sign-out event.

    Identity and commander fields are denormalized snapshots; there is no
    foreign key back to a soldier table. ``status`` is fixed at creation.
    """

    signout_id: str
    soldier_rank: str
    soldier_first_name: str
    soldier_last_name: str
    soldier_dod_id: Optional[str]
    location: str
    sign_out_time: datetime
    sign_in_time: Optional[datetime]
    signed_out_by_id: int
    signed_out_by_name: str
    signed_in_by_id: Optional[int]
    signed_in_by_name: Optional[str]
    status: SignoutStatus
    notes: Optional[str] = None

    def __post_init__(self):
        if self.status == SignoutStatus.OUT:
            if any(v is not None for v in (self.sign_in_time, self.signed_in_by_id, self.signed_in_by_name)):
                raise ValidationError(f"{self.signout_id}: OUT record cannot carry sign-in data")
        else:
            if any(v is None for v in (self.sign_in_time, self.signed_in_by_id, self.signed_in_by_name)):
                raise ValidationError(f"{self.signout_id}: IN record needs sign-in time and commander")
            if self.sign_in_time < self.sign_out_time:
                raise ValidationError(f"{self.signout_id}: sign-in precedes sign-out")

    @property
    def is_out(self) -> bool:
        return self.status == SignoutStatus.OUT
