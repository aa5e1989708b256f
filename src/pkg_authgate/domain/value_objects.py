# src/pkg_authgate/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


# --- Identity value objects ----------------------------------------------


@dataclass(frozen=True, slots=True)
class Subject:
    """
    Represents the authenticated principal (the `sub` claim).

    For this gateway the subject is the username that logged in.
    """
    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Subject cannot be empty")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class LoginCredentials:
    """
    Username/password pair presented at login.

    No validation here: empty fields are an InvalidRequestError, raised by
    the login use case, not a ValueError.
    """
    username: str
    password: str

    def __repr__(self) -> str:
        return f"LoginCredentials(username={self.username!r}, password='***')"

    @property
    def is_complete(self) -> bool:
        return bool(self.username) and bool(self.password)


# --- Token lifetime --------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ValidityPeriod:
    """
    How long an issued token stays valid.

    Always a positive `timedelta`; build it from minutes with `from_minutes`.
    """
    duration: timedelta

    def __post_init__(self) -> None:
        if self.duration <= timedelta(0):
            raise ValueError(f"Validity period must be positive, got {self.duration!r}")

    @classmethod
    def from_minutes(cls, minutes: int) -> "ValidityPeriod":
        return cls(timedelta(minutes=minutes))

    @property
    def minutes(self) -> float:
        return self.duration.total_seconds() / 60
