"""Validation-gated scaffold generation and packaging."""

from functools import lru_cache
from uuid import uuid4

from stackforge.core.cache import TemplateCache, get_template_cache
from stackforge.core.exceptions import ConfigurationInvalidError, StackForgeError
from stackforge.core.progress import ProgressStore, ProgressTracker, get_progress_store
from stackforge.generators.scaffold import ScaffoldGenerator
from stackforge.models.config import ScaffoldConfig
from stackforge.models.generation import GenerationResult
from stackforge.models.progress import GenerationStep
from stackforge.models.validation import ValidationResult
from stackforge.packaging.archive import archive_filename, build_archive
from stackforge.utils.logging import get_logger
from stackforge.validation import validate

logger = get_logger("scaffold_service")


def new_generation_id() -> str:
    return uuid4().hex


class ScaffoldService:
    """Runs validation, generation and packaging with progress reporting."""

    def __init__(
        self,
        cache: TemplateCache | None = None,
        progress_store: ProgressStore | None = None,
    ):
        self.cache = cache or get_template_cache()
        self.progress_store = progress_store or get_progress_store()
        self.generator = ScaffoldGenerator(self.cache)

    def validate(self, config: ScaffoldConfig) -> ValidationResult:
        return validate(config)

    def ensure_valid(self, config: ScaffoldConfig) -> ValidationResult:
        """Validate and raise if any error-severity rule matched."""
        result = validate(config)
        if not result.can_generate:
            logger.info(
                "scaffold.validation.rejected",
                project_name=config.project_name,
                rules=sorted(issue.rule_id for issue in result.errors),
            )
            raise ConfigurationInvalidError(
                [issue.model_dump(by_alias=True) for issue in result.errors]
            )
        return result

    def start_tracking(self, generation_id: str | None = None) -> ProgressTracker:
        generation_id = generation_id or new_generation_id()
        self.progress_store.create(generation_id)
        return ProgressTracker(self.progress_store, generation_id)

    async def generate(
        self,
        config: ScaffoldConfig,
        tracker: ProgressTracker | None = None,
        is_remote_publish: bool = False,
        remote_url: str | None = None,
    ) -> tuple[GenerationResult, ValidationResult]:
        """Validate then generate. Reports progress when a tracker is given."""

        def report(step: GenerationStep, message: str, percent: int) -> None:
            if tracker is not None:
                tracker.update(step, message, percent)

        try:
            report(GenerationStep.VALIDATING, "Validating configuration", 5)
            validation = self.ensure_valid(config)

            report(GenerationStep.CREATING_STRUCTURE, "Planning project structure", 15)
            report(GenerationStep.GENERATING_FILES, "Rendering project files", 30)
            result = await self.generator.generate(config, is_remote_publish, remote_url)

            report(
                GenerationStep.GENERATING_DOCS,
                f"Generated {result.file_count} files",
                40 if is_remote_publish else 80,
            )
        except StackForgeError as e:
            if tracker is not None:
                tracker.fail(e.message)
            raise
        return result, validation

    async def download(
        self, config: ScaffoldConfig, generation_id: str | None = None
    ) -> tuple[bytes, str, str]:
        """Generate and package a scaffold.

        Returns:
            Archive bytes, download filename and the generation id.
        """
        tracker = self.start_tracking(generation_id)
        result, _ = await self.generate(config, tracker)

        tracker.update(GenerationStep.CREATING_ARCHIVE, "Creating ZIP archive", 90)
        try:
            archive = build_archive(result)
        except StackForgeError as e:
            tracker.fail(e.message)
            raise
        tracker.complete(f"Scaffold ready: {result.file_count} files")
        return archive, archive_filename(result), tracker.id


@lru_cache
def get_scaffold_service() -> ScaffoldService:
    """Get the scaffold service singleton."""
    return ScaffoldService()
