"""JSON rendering of container documents.

Unset optional fields, the change feed retention included, are left out of the
output instead of being written as ``null``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from changefeed.app.core.config import settings
from changefeed.app.core.errors import ContainerPropertiesDecodeError
from changefeed.app.schemas.change_feed import ChangeFeedPolicy
from changefeed.app.schemas.containers import ContainerProperties

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _dumps(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=settings.json_indent)


def _loads(model: type[ModelT], raw: str | bytes | bytearray) -> ModelT:
    try:
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode()
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Malformed %s document: %s", model.__name__, exc)
        raise ContainerPropertiesDecodeError(f"Malformed {model.__name__} document: {exc}") from exc
    if not isinstance(data, dict):
        logger.warning("Expected a JSON object for %s, got %s", model.__name__, type(data).__name__)
        raise ContainerPropertiesDecodeError(f"Expected a JSON object for {model.__name__}")
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.warning("Invalid %s document: %s", model.__name__, exc)
        raise ContainerPropertiesDecodeError(f"Invalid {model.__name__} document: {exc}") from exc


def dump_change_feed_policy(policy: ChangeFeedPolicy) -> str:
    return _dumps(policy.to_wire())


def load_change_feed_policy(raw: str | bytes | bytearray) -> ChangeFeedPolicy:
    return _loads(ChangeFeedPolicy, raw)


def dump_container_properties(properties: ContainerProperties) -> str:
    return _dumps(properties.to_wire())


def load_container_properties(raw: str | bytes | bytearray) -> ContainerProperties:
    return _loads(ContainerProperties, raw)
