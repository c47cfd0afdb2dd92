"""Synthetic sign-out data for development and demos.

Groups of 2-4 people share one signout_id, one location, one pair of
timestamps and one pair of authorizing commanders. Every third group is
left OUT. Nothing here retries or deduplicates; a failed insert ends the run.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Iterator, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import (
    COMPLETED_WINDOW_HOURS,
    DEFAULT_FIXTURE_GROUPS,
    FIXTURE_NOTES,
    MAX_SIGN_IN_OFFSET_HOURS,
    SIGNOUT_SEQUENCE_BASE,
    STILL_OUT_WINDOW_HOURS,
)
from ..core.enums import SignoutStatus
from .model import SignoutRecord
from .repository import SignoutRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterEntry:
    rank: str
    first_name: str
    last_name: str
    dod_id: str


@dataclass(frozen=True)
class Commander:
    id: int
    name: str


ROSTER: tuple[RosterEntry, ...] = (
    RosterEntry("PVT", "John", "Doe", "1234567890"),
    RosterEntry("SGT", "Jane", "Smith", "2345678901"),
    RosterEntry("CPL", "Mike", "Johnson", "3456789012"),
    RosterEntry("SPC", "Sara", "Brown", "4567890123"),
    RosterEntry("LT", "Chris", "Davis", "5678901234"),
    RosterEntry("SGT", "Amy", "Wilson", "6789012345"),
    RosterEntry("PFC", "Tom", "Lee", "7890123456"),
    RosterEntry("SSG", "Emma", "Clark", "8901234567"),
    RosterEntry("MSG", "Ben", "Hall", "9012345678"),
    RosterEntry("CPT", "Nina", "Adams", "0123456789"),
)

LOCATIONS: tuple[str, ...] = ("Motor Pool", "PX", "Barracks", "Gym", "DFAC", "Range")

COMMANDERS: tuple[Commander, ...] = (
    Commander(1, "LT Miller"),
    Commander(10, "SSG Lee"),
)

MIN_GROUP_SIZE = 2
MAX_GROUP_SIZE = 4


def generate_signout_id(group_number: int, now: datetime) -> str:
    """SO{YY}{MM}{DD}-{1000+n}, dated by generation time.

    Only unique within one run: the same date and index always give the same id.
    """
    return f"SO{now:%y%m%d}-{SIGNOUT_SEQUENCE_BASE + group_number}"


def is_still_out(group_number: int) -> bool:
    return group_number % 3 == 0


def random_time_within_hours(rng: random.Random, now: datetime, hours: float) -> datetime:
    past = now - timedelta(hours=rng.random() * hours)
    return past.replace(microsecond=0)


@dataclass(frozen=True)
class FixtureGroup:
    signout_id: str
    members: tuple[RosterEntry, ...]
    location: str
    sign_out_time: datetime
    sign_in_time: Optional[datetime]
    signed_out_by: Commander
    signed_in_by: Optional[Commander]

    @property
    def still_out(self) -> bool:
        return self.sign_in_time is None

    def records(self, notes: str = FIXTURE_NOTES) -> list[SignoutRecord]:
        in_by = self.signed_in_by
        return [
            SignoutRecord(
                signout_id=self.signout_id,
                soldier_rank=m.rank,
                soldier_first_name=m.first_name,
                soldier_last_name=m.last_name,
                soldier_dod_id=m.dod_id,
                location=self.location,
                sign_out_time=self.sign_out_time,
                sign_in_time=self.sign_in_time,
                signed_out_by_id=self.signed_out_by.id,
                signed_out_by_name=self.signed_out_by.name,
                signed_in_by_id=in_by.id if in_by else None,
                signed_in_by_name=in_by.name if in_by else None,
                status=SignoutStatus.OUT if self.still_out else SignoutStatus.IN,
                notes=notes,
            )
            for m in self.members
        ]


class FixtureGenerator:
    """Builds randomized sign-out groups.

    ``rng`` and ``clock`` are injectable so tests get reproducible output.
    """

    def __init__(
        self,
        *,
        roster: Sequence[RosterEntry] = ROSTER,
        locations: Sequence[str] = LOCATIONS,
        commanders: Sequence[Commander] = COMMANDERS,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        if len(roster) < MAX_GROUP_SIZE:
            raise ValueError(f"roster needs at least {MAX_GROUP_SIZE} people")
        if not locations or not commanders:
            raise ValueError("locations and commanders must not be empty")
        self._roster = tuple(roster)
        self._locations = tuple(locations)
        self._commanders = tuple(commanders)
        self._rng = rng or random.Random()
        self._clock = clock

    def build_group(self, group_number: int, now: datetime) -> FixtureGroup:
        rng = self._rng
        still_out = is_still_out(group_number)

        size = rng.randint(MIN_GROUP_SIZE, MAX_GROUP_SIZE)
        members = tuple(rng.sample(self._roster, size))

        window = STILL_OUT_WINDOW_HOURS if still_out else COMPLETED_WINDOW_HOURS
        sign_out_time = random_time_within_hours(rng, now, window)
        sign_in_time = None
        if not still_out:
            offset = timedelta(hours=rng.random() * MAX_SIGN_IN_OFFSET_HOURS)
            sign_in_time = (sign_out_time + offset).replace(microsecond=0)

        signed_out_by = rng.choice(self._commanders)
        signed_in_by = None if still_out else rng.choice(self._commanders)
        location = rng.choice(self._locations)

        return FixtureGroup(
            signout_id=generate_signout_id(group_number, now),
            members=members,
            location=location,
            sign_out_time=sign_out_time,
            sign_in_time=sign_in_time,
            signed_out_by=signed_out_by,
            signed_in_by=signed_in_by,
        )

    def iter_groups(self, count: int = DEFAULT_FIXTURE_GROUPS) -> Iterator[FixtureGroup]:
        now = self._clock().replace(microsecond=0)
        for group_number in range(1, count + 1):
            yield self.build_group(group_number, now)

    def populate(self, repo: SignoutRepository, count: int = DEFAULT_FIXTURE_GROUPS) -> int:
        """Write ``count`` groups through ``repo``; returns rows inserted."""
        written = 0
        for group in self.iter_groups(count):
            for record in group.records():
                repo.insert(record)
                written += 1
            logger.debug(
                "Group %s: %d member(s) at %s, %s",
                group.signout_id,
                len(group.members),
                group.location,
                "OUT" if group.still_out else "IN",
            )
        logger.info("Populated signouts with test data.")
        return written
