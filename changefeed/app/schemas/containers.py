from __future__ import annotations

from datetime import timedelta
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from changefeed.app.schemas.change_feed import ChangeFeedPolicy


class PartitionKeyDefinition(BaseModel):
    paths: list[str] = Field(..., min_length=1, examples=[["/country"]])
    kind: Literal["Hash", "Range", "MultiHash"] = "Hash"

    @field_validator("paths")
    @classmethod
    def _validate_paths(cls, value: list[str]) -> list[str]:
        cleaned: list[str] = []
        for path in value:
            token = path.strip()
            if not token.startswith("/") or token == "/":
                raise ValueError(f"Partition key path must start with '/' and name a property, got {path!r}")
            cleaned.append(token)
        return cleaned


class ContainerProperties(BaseModel):
    """Properties record of a container, as exchanged with the database service."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str = Field(..., min_length=1, examples=["MyCollection"])
    partition_key: PartitionKeyDefinition = Field(..., alias="partitionKey")
    default_time_to_live: int | None = Field(
        default=None,
        alias="defaultTtl",
        description="Item time to live in seconds; -1 keeps items until explicitly deleted",
    )
    change_feed_policy: ChangeFeedPolicy = Field(default_factory=ChangeFeedPolicy, alias="changeFeedPolicy")

    @field_validator("partition_key", mode="before")
    @classmethod
    def _parse_partition_key(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"paths": [value]}
        return value

    @field_validator("default_time_to_live")
    @classmethod
    def _validate_ttl(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value == -1 or value > 0:
            return value
        raise ValueError("defaultTtl must be -1 or a positive number of seconds")

    @property
    def partition_key_path(self) -> str:
        return self.partition_key.paths[0]

    @property
    def change_feed_retention(self) -> timedelta:
        return self.change_feed_policy.retention_duration

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
