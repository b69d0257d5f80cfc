from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from changefeed.app.core.config import settings
from changefeed.app.core.errors import (
    ContainerAlreadyExistsError,
    ContainerNotFoundError,
    InvalidRetentionDurationError,
)
from changefeed.app.models.containers import ContainerRecord
from changefeed.app.schemas.change_feed import ChangeFeedPolicy
from changefeed.app.schemas.containers import ContainerProperties, PartitionKeyDefinition

logger = logging.getLogger(__name__)


def _to_properties(record: ContainerRecord) -> ContainerProperties:
    return ContainerProperties(
        id=record.container_id,
        partition_key=PartitionKeyDefinition(paths=list(record.partition_key_paths), kind=record.partition_key_kind),
        default_time_to_live=record.default_time_to_live,
        change_feed_policy=ChangeFeedPolicy(log_retention_minutes=record.log_retention_minutes),
    )


async def _find_record(session: AsyncSession, container_id: str) -> ContainerRecord | None:
    result = await session.execute(
        select(ContainerRecord).where(ContainerRecord.container_id == container_id).limit(1)
    )
    return result.scalars().first()


async def _get_record(session: AsyncSession, container_id: str) -> ContainerRecord:
    record = await _find_record(session, container_id)
    if record is None:
        raise ContainerNotFoundError(container_id)
    return record


async def register_container(session: AsyncSession, properties: ContainerProperties) -> ContainerProperties:
    if await _find_record(session, properties.id) is not None:
        raise ContainerAlreadyExistsError(properties.id)

    retention_minutes = properties.change_feed_policy.log_retention_minutes
    if retention_minutes is None:
        retention_minutes = settings.default_log_retention_minutes

    record = ContainerRecord(
        container_id=properties.id,
        partition_key_paths=list(properties.partition_key.paths),
        partition_key_kind=properties.partition_key.kind,
        default_time_to_live=properties.default_time_to_live,
        log_retention_minutes=retention_minutes,
    )
    session.add(record)
    try:
        await session.commit()
    except IntegrityError as exc:
        # Another writer registered the same id between the lookup and the insert
        await session.rollback()
        logger.warning("Container %s was registered concurrently: %s", properties.id, exc)
        raise ContainerAlreadyExistsError(properties.id) from exc
    await session.refresh(record)
    logger.info("Registered container %s (change feed retention: %s minutes)", record.container_id, retention_minutes)
    return _to_properties(record)


async def get_container_properties(session: AsyncSession, container_id: str) -> ContainerProperties:
    record = await _get_record(session, container_id)
    return _to_properties(record)


async def list_container_properties(session: AsyncSession) -> list[ContainerProperties]:
    result = await session.execute(select(ContainerRecord).order_by(ContainerRecord.container_id))
    return [_to_properties(record) for record in result.scalars().all()]


async def get_change_feed_retention(session: AsyncSession, container_id: str) -> timedelta:
    properties = await get_container_properties(session, container_id)
    return properties.change_feed_retention


async def update_change_feed_retention(
    session: AsyncSession, container_id: str, retention: timedelta
) -> ContainerProperties:
    record = await _get_record(session, container_id)
    policy = ChangeFeedPolicy(log_retention_minutes=record.log_retention_minutes)
    try:
        policy.retention_duration = retention
    except InvalidRetentionDurationError as exc:
        logger.warning("Rejected change feed retention for container %s: %s", container_id, exc)
        raise

    record.log_retention_minutes = policy.log_retention_minutes
    session.add(record)
    await session.commit()
    await session.refresh(record)
    logger.info("Updated change feed retention for container %s to %s minutes", container_id, policy.log_retention_minutes)
    return _to_properties(record)


async def clear_change_feed_retention(session: AsyncSession, container_id: str) -> ContainerProperties:
    record = await _get_record(session, container_id)
    record.log_retention_minutes = None
    session.add(record)
    await session.commit()
    await session.refresh(record)
    logger.info("Cleared change feed retention for container %s", container_id)
    return _to_properties(record)
