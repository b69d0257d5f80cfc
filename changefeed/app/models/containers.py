from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from changefeed.app.models.base import Base, TimestampMixin


class ContainerRecord(TimestampMixin, Base):
    __tablename__ = "containers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    container_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # Ordered partition key paths; more than one only for MultiHash keys
    partition_key_paths: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    partition_key_kind: Mapped[str] = mapped_column(String(20), nullable=False, default="Hash")
    default_time_to_live: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # NULL means the change feed retention was never configured
    log_retention_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
