"""Unit tests for progress tracking, rate limiting and archive packaging."""

import asyncio
import io
import zipfile
from datetime import timedelta

import pytest

from stackforge.core.exceptions import ProgressNotFoundError
from stackforge.core.progress import ProgressStore, ProgressTracker
from stackforge.core.rate_limit import RateLimiter
from stackforge.models.generation import (
    GeneratedFile,
    GenerationMetadata,
    GenerationResult,
)
from stackforge.models.progress import GenerationStep, ProgressStatus
from stackforge.packaging.archive import archive_filename, build_archive


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestProgressStore:
    """Tests for ProgressStore and ProgressTracker."""

    def test_create_and_update(self, progress_store: ProgressStore):
        progress_store.create("gen-1")

        progress_store.update("gen-1", GenerationStep.VALIDATING, "Validating", 5)
        record = progress_store.require("gen-1")

        assert record.status == ProgressStatus.IN_PROGRESS
        assert record.current_step == GenerationStep.VALIDATING
        assert record.progress == 5
        assert len(record.events) == 1

    def test_events_are_appended_in_order(self, progress_store: ProgressStore):
        tracker = ProgressTracker(progress_store, "gen-2")
        progress_store.create("gen-2")

        tracker.update(GenerationStep.VALIDATING, "Validating", 5)
        tracker.update(GenerationStep.GENERATING_FILES, "Rendering", 30)
        tracker.complete("Done", result_url="https://github.com/octocat/app")

        record = progress_store.require("gen-2")
        assert [e.step for e in record.events] == [
            GenerationStep.VALIDATING,
            GenerationStep.GENERATING_FILES,
            GenerationStep.COMPLETE,
        ]
        assert record.status == ProgressStatus.COMPLETE
        assert record.progress == 100
        assert record.result_url == "https://github.com/octocat/app"
        assert record.events[-1].is_terminal

    def test_fail_keeps_last_percentage(self, progress_store: ProgressStore):
        progress_store.create("gen-3")
        tracker = ProgressTracker(progress_store, "gen-3")
        tracker.update(GenerationStep.CREATING_BLOBS, "Uploading", 55)

        tracker.fail("GitHub is unavailable")

        record = progress_store.require("gen-3")
        assert record.status == ProgressStatus.ERROR
        assert record.error == "GitHub is unavailable"
        assert record.progress == 55
        assert record.events[-1].step == GenerationStep.ERROR

    def test_unknown_record(self, progress_store: ProgressStore):
        assert progress_store.get("missing") is None
        with pytest.raises(ProgressNotFoundError):
            progress_store.require("missing")

    def test_expired_records_are_dropped(self, progress_store: ProgressStore):
        record = progress_store.create("old")
        record.created_at -= timedelta(minutes=31)

        assert progress_store.get("old") is None

    def test_cleanup_expired(self, progress_store: ProgressStore):
        old = progress_store.create("old")
        progress_store.create("new")
        old.created_at -= timedelta(hours=1)

        assert progress_store.cleanup_expired() == 1
        assert progress_store.get("new") is not None

    @pytest.mark.asyncio
    async def test_subscribers_receive_later_events(self, progress_store: ProgressStore):
        progress_store.create("gen-4")
        queue = progress_store.subscribe("gen-4")

        progress_store.update("gen-4", GenerationStep.CREATING_ARCHIVE, "Zipping", 90)
        event = await asyncio.wait_for(queue.get(), timeout=1)

        assert event.step == GenerationStep.CREATING_ARCHIVE
        progress_store.unsubscribe("gen-4", queue)
        progress_store.update("gen-4", GenerationStep.COMPLETE, "Done", 100)
        assert queue.empty()


class TestRateLimiter:
    """Tests for the sliding-window RateLimiter."""

    def test_allows_up_to_limit(self):
        limiter = RateLimiter(limit=2, window_seconds=60, clock=FakeClock())

        assert limiter.check_limit("octocat")
        assert limiter.check_limit("octocat")
        assert not limiter.check_limit("octocat")
        assert limiter.remaining("octocat") == 0

    def test_users_are_independent(self):
        limiter = RateLimiter(limit=1, window_seconds=60, clock=FakeClock())

        assert limiter.check_limit("alice")
        assert limiter.check_limit("bob")

    def test_window_slides(self):
        clock = FakeClock()
        limiter = RateLimiter(limit=1, window_seconds=60, clock=clock)
        limiter.check_limit("octocat")

        clock.now += 59
        assert not limiter.check_limit("octocat")
        clock.now += 1
        assert limiter.check_limit("octocat")

    def test_rejected_attempts_do_not_consume_slots(self):
        clock = FakeClock()
        limiter = RateLimiter(limit=1, window_seconds=60, clock=clock)
        limiter.check_limit("octocat")
        for _ in range(5):
            limiter.check_limit("octocat")

        clock.now += 60
        assert limiter.remaining("octocat") == 1

    def test_info(self):
        clock = FakeClock()
        limiter = RateLimiter(limit=1, window_seconds=3600, clock=clock)
        limiter.check_limit("octocat")

        info = limiter.info("octocat")

        assert info.limit == 1
        assert info.remaining == 0
        assert info.exceeded
        assert info.reset.timestamp() == clock.now + 3600

    def test_info_for_new_user(self):
        info = RateLimiter(limit=5, window_seconds=60, clock=FakeClock()).info("new")

        assert info.remaining == 5
        assert not info.exceeded
        assert info.retry_after == 0

    def test_reset(self):
        limiter = RateLimiter(limit=1, window_seconds=60, clock=FakeClock())
        limiter.check_limit("octocat")

        limiter.reset("octocat")

        assert limiter.remaining("octocat") == 1


def _result(files: list[GeneratedFile], directories: list[str]) -> GenerationResult:
    return GenerationResult(
        files=files,
        directories=directories,
        metadata=GenerationMetadata(
            project_name="my-app",
            structure="nextjs-only",
            framework="nextjs",
            total_files=len(files),
            total_directories=len(directories),
        ),
    )


class TestArchive:
    """Tests for build_archive."""

    def test_archive_is_rooted_at_project_name(self):
        result = _result(
            [
                GeneratedFile(path="README.md", content="# My App\n", file_type="docs"),
                GeneratedFile(path="src/app/page.tsx", content="export default 1;\n"),
            ],
            ["src", "src/app", "public"],
        )

        with zipfile.ZipFile(io.BytesIO(build_archive(result))) as archive:
            names = archive.namelist()
            assert "my-app/README.md" in names
            assert "my-app/src/app/page.tsx" in names
            assert "my-app/public/" in names
            assert archive.read("my-app/README.md").decode("utf-8") == "# My App\n"

    def test_scripts_are_executable(self):
        result = _result(
            [
                GeneratedFile(path="scripts/migrate.sh", content="#!/bin/sh\n", file_type="script"),
                GeneratedFile(path="package.json", content="{}\n", file_type="config"),
            ],
            [],
        )

        with zipfile.ZipFile(io.BytesIO(build_archive(result))) as archive:
            script_mode = archive.getinfo("my-app/scripts/migrate.sh").external_attr >> 16
            config_mode = archive.getinfo("my-app/package.json").external_attr >> 16

        assert script_mode & 0o777 == 0o755
        assert config_mode & 0o777 == 0o644

    def test_unicode_content(self):
        result = _result([GeneratedFile(path=".env.example", content="# ⚠️ warning\n")], [])

        with zipfile.ZipFile(io.BytesIO(build_archive(result))) as archive:
            assert archive.read("my-app/.env.example").decode("utf-8") == "# ⚠️ warning\n"

    def test_filename(self):
        assert archive_filename(_result([], [])) == "my-app.zip"
