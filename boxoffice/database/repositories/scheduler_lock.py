"""Scheduler lock repository.

A lock is a row in `scheduler_locks`. Acquiring inserts the row
unless a fresh one exists; a lock older than the timeout is
considered abandoned and replaced.
"""

from datetime import UTC, datetime, timedelta

from sqlalchemy import delete
from sqlalchemy.orm import Session

from boxoffice.database.models import SchedulerLock
from boxoffice.database.upsert import insert_ignore


class SchedulerLockRepository:
    """Acquire and release named advisory locks."""

    def __init__(self, session: Session) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session instance.
        """
        self._session = session

    def acquire(
        self,
        lock_name: str,
        process_id: str,
        timeout: timedelta,
        now: datetime | None = None,
    ) -> bool:
        """Try to take the lock, replacing it if stale.

        Commits so that other processes see the lock immediately.

        Args:
            lock_name: Lock identifier.
            process_id: Identifier of the caller.
            timeout: Age after which a held lock is stale.
            now: Current time (defaults to UTC now).

        Returns:
            True if the caller now holds the lock.
        """
        now = now or datetime.now(UTC)
        self._delete_older_than(now - timeout, lock_name)
        inserted = insert_ignore(
            self._session,
            SchedulerLock,
            [{"lock_name": lock_name, "locked_at": now, "process_id": process_id}],
            ["lock_name"],
        )
        self._session.commit()
        return inserted == 1

    def release(self, lock_name: str, process_id: str) -> bool:
        """Release the lock if the caller owns it.

        Returns:
            True if a lock row was removed.
        """
        stmt = delete(SchedulerLock).where(
            SchedulerLock.lock_name == lock_name,
            SchedulerLock.process_id == process_id,
        )
        removed = self._session.execute(stmt).rowcount
        self._session.commit()
        return removed > 0

    def cleanup_stale(self, timeout: timedelta, now: datetime | None = None) -> int:
        """Remove every lock older than the timeout.

        Returns:
            Number of locks removed.
        """
        now = now or datetime.now(UTC)
        removed = self._delete_older_than(now - timeout)
        self._session.commit()
        return removed

    def _delete_older_than(self, cutoff: datetime, lock_name: str | None = None) -> int:
        stmt = delete(SchedulerLock).where(SchedulerLock.locked_at < cutoff)
        if lock_name is not None:
            stmt = stmt.where(SchedulerLock.lock_name == lock_name)
        return self._session.execute(stmt).rowcount
