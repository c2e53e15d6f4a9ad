"""Progress polling and streaming endpoints."""

import asyncio

from fastapi import APIRouter
from sse_starlette.sse import EventSourceResponse

from stackforge.api.deps import ProgressDep
from stackforge.models.progress import GenerationProgress, ProgressEvent

router = APIRouter()

KEEPALIVE_SECONDS = 15.0


def _sse(event: ProgressEvent) -> dict:
    return {"event": event.step.value, "data": event.model_dump_json()}


@router.get(
    "/{generation_id}",
    response_model=GenerationProgress,
    summary="Get progress for a generation",
)
async def get_progress(generation_id: str, store: ProgressDep) -> GenerationProgress:
    """Return the current progress record."""
    return store.require(generation_id)


@router.get(
    "/{generation_id}/stream",
    summary="Stream progress events (SSE)",
)
async def stream_progress(generation_id: str, store: ProgressDep) -> EventSourceResponse:
    """Replay recorded events, then stream new ones until completion."""
    record = store.require(generation_id)

    async def event_generator():
        queue = store.subscribe(generation_id)
        try:
            for event in list(record.events):
                yield _sse(event)
                if event.is_terminal:
                    return

            while True:
                try:
                    event = await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
                except asyncio.TimeoutError:
                    yield {"event": "keepalive", "data": "{}"}
                    continue
                yield _sse(event)
                if event.is_terminal:
                    break
        finally:
            store.unsubscribe(generation_id, queue)

    return EventSourceResponse(event_generator())
