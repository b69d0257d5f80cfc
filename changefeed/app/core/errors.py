from __future__ import annotations

from typing import Any


class InvalidRetentionDurationError(ValueError):
    """Raised when a retention duration cannot be stored as whole minutes."""

    def __init__(self, value: Any, message: str = "Retention duration's minimum granularity is minutes.") -> None:
        super().__init__(f"{message} Got {value!r}.")
        self.value = value


class ContainerNotFoundError(LookupError):
    def __init__(self, container_id: str) -> None:
        super().__init__(f"Container {container_id!r} is not registered")
        self.container_id = container_id


class ContainerAlreadyExistsError(ValueError):
    def __init__(self, container_id: str) -> None:
        super().__init__(f"Container {container_id!r} is already registered")
        self.container_id = container_id


class ContainerPropertiesDecodeError(ValueError):
    """Raised when a serialized container document cannot be parsed."""
