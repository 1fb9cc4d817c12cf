"""Chapter roles and the permission checks built on them.

Identity is established elsewhere; this module only answers "may this
profile do X". The treasurer manages money (approvals, imports, the balance,
committee budgets). Officers are the four single-holder positions; any number
of people can be members.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_db.models.ledger import LedgerProfile


class Role(StrEnum):
    TREASURER = "treasurer"
    PRESIDENT = "president"
    VICE_PRESIDENT = "vice_president"
    SECRETARY = "secretary"
    MEMBER = "member"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


OFFICER_ROLES: frozenset[Role] = frozenset(
    {Role.TREASURER, Role.PRESIDENT, Role.VICE_PRESIDENT, Role.SECRETARY}
)


class PermissionDeniedError(Exception):
    """Raised when a profile attempts an action its role does not allow."""


@dataclass(frozen=True, slots=True)
class UserProfile:
    id: str
    email: str
    full_name: str
    role: Role = Role.MEMBER


@dataclass(frozen=True, slots=True)
class PositionAvailability:
    available: bool
    taken_by: str | None = None


def is_treasurer(profile: UserProfile | None) -> bool:
    return profile is not None and profile.role is Role.TREASURER


def is_officer(profile: UserProfile | None) -> bool:
    return profile is not None and profile.role in OFFICER_ROLES


def require_treasurer(profile: UserProfile | None, action: str) -> UserProfile:
    """Return ``profile`` when it belongs to the treasurer, else raise."""

    if profile is None:
        raise PermissionDeniedError(f"{action} requires a signed-in treasurer")
    if not is_treasurer(profile):
        raise PermissionDeniedError(
            f"{action} requires the Treasurer role ({profile.full_name} is {profile.role.label})"
        )
    return profile


def check_position_availability(session: Session, role: Role | str) -> PositionAvailability:
    """Officer positions have a single holder; membership is unlimited."""

    role = Role(role)
    if role is Role.MEMBER:
        return PositionAvailability(available=True)
    holder = session.execute(
        select(LedgerProfile.full_name).where(LedgerProfile.role == role.value).limit(1)
    ).scalar_one_or_none()
    if holder is None:
        return PositionAvailability(available=True)
    return PositionAvailability(available=False, taken_by=holder)


__all__ = [
    "OFFICER_ROLES",
    "PermissionDeniedError",
    "PositionAvailability",
    "Role",
    "UserProfile",
    "check_position_availability",
    "is_officer",
    "is_treasurer",
    "require_treasurer",
]
