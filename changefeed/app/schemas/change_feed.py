from __future__ import annotations

from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from changefeed.app.core.errors import InvalidRetentionDurationError

ONE_MINUTE = timedelta(minutes=1)


def to_retention_minutes(value: timedelta) -> int:
    """Convert a retention duration to the whole number of minutes stored on the wire.

    Durations carrying seconds (or anything finer) are rejected, as are negative ones.
    """
    if not isinstance(value, timedelta):
        raise TypeError(f"Retention duration must be a timedelta, got {type(value).__name__}")
    if value < timedelta(0):
        raise InvalidRetentionDurationError(value, "Retention duration cannot be negative.")
    if value % ONE_MINUTE:
        raise InvalidRetentionDurationError(value)
    # Truncates; the remainder is already known to be zero.
    return int(value // ONE_MINUTE)


class ChangeFeedPolicy(BaseModel):
    """Change feed policy of a container.

    The retention is persisted as a whole number of minutes under
    ``logRetentionDuration`` and is omitted from the serialized form while it is
    not configured. Callers work with it as a ``timedelta`` through
    :attr:`retention_duration`::

        policy = ChangeFeedPolicy()
        policy.retention_duration = timedelta(minutes=5)
        policy.to_wire()  # {"logRetentionDuration": 5}
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    log_retention_minutes: int | None = Field(
        default=None,
        ge=0,
        strict=True,
        alias="logRetentionDuration",
        description="How long change feed logs are retained, in minutes",
    )

    @property
    def retention_duration(self) -> timedelta:
        if self.log_retention_minutes is None:
            return timedelta(0)
        return timedelta(minutes=self.log_retention_minutes)

    @retention_duration.setter
    def retention_duration(self, value: timedelta) -> None:
        self.log_retention_minutes = to_retention_minutes(value)

    @property
    def is_configured(self) -> bool:
        return self.log_retention_minutes is not None

    @classmethod
    def from_duration(cls, value: timedelta) -> ChangeFeedPolicy:
        return cls(log_retention_minutes=to_retention_minutes(value))

    def with_retention(self, value: timedelta) -> ChangeFeedPolicy:
        """Return a copy holding ``value``; ``self`` is left untouched."""
        return self.model_copy(update={"log_retention_minutes": to_retention_minutes(value)})

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
