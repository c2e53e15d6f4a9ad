"""In-memory progress store with SSE subscribers."""

import asyncio
from datetime import datetime, timedelta, timezone
from functools import lru_cache

from stackforge.config import settings
from stackforge.core.exceptions import ProgressNotFoundError
from stackforge.models.progress import (
    GenerationProgress,
    GenerationStep,
    ProgressEvent,
    ProgressStatus,
)
from stackforge.utils.logging import get_logger

logger = get_logger(__name__)


class ProgressStore:
    """Tracks progress records in memory.

    Records expire ``ttl_minutes`` after creation. Each update is also pushed
    to every subscriber queue for the record so the API can stream it.
    """

    def __init__(self, ttl_minutes: int = 30):
        self._records: dict[str, GenerationProgress] = {}
        self._subscribers: dict[str, list[asyncio.Queue[ProgressEvent]]] = {}
        self._ttl = timedelta(minutes=ttl_minutes)

    def create(self, progress_id: str) -> GenerationProgress:
        """Start tracking a new operation."""
        self.cleanup_expired()
        record = GenerationProgress(id=progress_id)
        self._records[progress_id] = record
        return record

    def get(self, progress_id: str) -> GenerationProgress | None:
        """Get a record, or ``None`` if unknown or expired."""
        record = self._records.get(progress_id)
        if record and datetime.now(timezone.utc) - record.created_at > self._ttl:
            self.delete(progress_id)
            return None
        return record

    def require(self, progress_id: str) -> GenerationProgress:
        record = self.get(progress_id)
        if record is None:
            raise ProgressNotFoundError(progress_id)
        return record

    def update(
        self,
        progress_id: str,
        step: GenerationStep,
        message: str,
        progress: int,
    ) -> ProgressEvent:
        """Append an event and move the record to ``step``."""
        record = self.require(progress_id)
        event = ProgressEvent(step=step, message=message, progress=progress)
        record.events.append(event)
        record.current_step = step
        record.progress = progress
        record.updated_at = event.timestamp
        if step == GenerationStep.COMPLETE:
            record.status = ProgressStatus.COMPLETE
        elif step == GenerationStep.ERROR:
            record.status = ProgressStatus.ERROR
        else:
            record.status = ProgressStatus.IN_PROGRESS

        logger.debug(
            "progress.updated",
            progress_id=progress_id,
            step=step.value,
            progress=progress,
        )
        self._notify(progress_id, event)
        return event

    def set_error(self, progress_id: str, error: str) -> ProgressEvent:
        """Mark the record as failed, keeping the last reported percentage."""
        record = self.require(progress_id)
        record.error = error
        return self.update(progress_id, GenerationStep.ERROR, error, record.progress)

    def set_result_url(self, progress_id: str, url: str) -> None:
        record = self.require(progress_id)
        record.result_url = url
        record.updated_at = datetime.now(timezone.utc)

    def delete(self, progress_id: str) -> None:
        self._records.pop(progress_id, None)
        self._subscribers.pop(progress_id, None)

    def cleanup_expired(self) -> int:
        """Remove expired records. Returns count of removed records."""
        now = datetime.now(timezone.utc)
        expired = [
            pid for pid, record in self._records.items() if now - record.created_at > self._ttl
        ]
        for pid in expired:
            self.delete(pid)
        return len(expired)

    def subscribe(self, progress_id: str) -> asyncio.Queue[ProgressEvent]:
        """Register a queue that receives every later event for the record."""
        self.require(progress_id)
        queue: asyncio.Queue[ProgressEvent] = asyncio.Queue()
        self._subscribers.setdefault(progress_id, []).append(queue)
        return queue

    def unsubscribe(self, progress_id: str, queue: asyncio.Queue[ProgressEvent]) -> None:
        queues = self._subscribers.get(progress_id, [])
        if queue in queues:
            queues.remove(queue)

    def _notify(self, progress_id: str, event: ProgressEvent) -> None:
        for queue in self._subscribers.get(progress_id, []):
            queue.put_nowait(event)


class ProgressTracker:
    """Reports steps for a single operation."""

    def __init__(self, store: ProgressStore, progress_id: str):
        self.store = store
        self.id = progress_id

    def update(self, step: GenerationStep, message: str, progress: int) -> None:
        self.store.update(self.id, step, message, progress)

    def fail(self, error: str) -> None:
        self.store.set_error(self.id, error)

    def complete(self, message: str, result_url: str | None = None) -> None:
        if result_url:
            self.store.set_result_url(self.id, result_url)
        self.store.update(self.id, GenerationStep.COMPLETE, message, 100)


@lru_cache
def get_progress_store() -> ProgressStore:
    """Get the progress store singleton."""
    return ProgressStore(ttl_minutes=settings.progress_ttl_minutes)
