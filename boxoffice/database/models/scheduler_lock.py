"""SchedulerLock model for exclusive ingestion runs."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from boxoffice.database.models.base import Base


class SchedulerLock(Base):
    """Advisory lock row held while a collection run writes.

    Attributes:
        lock_name: Lock identifier (primary key).
        locked_at: Acquisition time; older than the timeout means stale.
        process_id: Owner identifier, required to release.
    """

    __tablename__ = "scheduler_locks"

    lock_name: Mapped[str] = mapped_column(String(100), primary_key=True)
    locked_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    process_id: Mapped[str | None] = mapped_column(String(100))

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<SchedulerLock(lock_name='{self.lock_name}', process_id='{self.process_id}')>"
