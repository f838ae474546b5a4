"""Status records and request payload models.

Timestamps are kept as text in a fixed-width UTC encoding
(``2026-01-01T00:00:00.000000Z``) so the stored value is exactly what is
served, and string order matches chronological order.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domainstatus._constants import DOMAIN_PATTERN, MAX_DOMAIN_LENGTH, TIMESTAMP_FORMAT


def format_timestamp(value: datetime) -> str:
    """Encode *value* as a UTC timestamp string (naive values are taken as UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """Inverse of :func:`format_timestamp`.

    Raises :class:`ValueError` if *value* is not in the stored encoding.
    """
    return datetime.strptime(value, TIMESTAMP_FORMAT).replace(tzinfo=UTC)


def is_valid_domain(value: str) -> bool:
    """Return ``True`` for 1-255 characters of letters, digits, ``.`` and ``-``."""
    return 0 < len(value) <= MAX_DOMAIN_LENGTH and DOMAIN_PATTERN.fullmatch(value) is not None


class StatusUpdate(BaseModel):
    """A single status report, stamped when it was stored."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    status: str
    observed_at: str = Field(serialization_alias="timestamp")

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class UpdateRequest(BaseModel):
    """Body of ``POST /update``."""

    model_config = ConfigDict(strict=True, extra="ignore")

    domain: str
    status: str

    @field_validator("domain")
    @classmethod
    def _check_domain(cls, value: str) -> str:
        if not value:
            raise ValueError("domain must be non-empty")
        if not is_valid_domain(value):
            raise ValueError("domain must be at most 255 characters of letters, digits, '.' or '-'")
        return value

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str) -> str:
        if not value:
            raise ValueError("status must be non-empty")
        return value
