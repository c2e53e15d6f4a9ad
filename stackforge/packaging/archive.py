"""ZIP packaging of generated scaffolds."""

import io
import zipfile

from stackforge.core.exceptions import PackagingError
from stackforge.models.generation import GenerationResult
from stackforge.utils.logging import get_logger

logger = get_logger(__name__)


def archive_filename(result: GenerationResult) -> str:
    return f"{result.metadata.project_name or 'scaffold'}.zip"


def build_archive(result: GenerationResult) -> bytes:
    """Pack the scaffold into a ZIP rooted at the project name.

    Paths are kept exactly as generated and content is written as UTF-8.
    Declared directories get explicit entries so empty ones survive.
    """
    root = result.metadata.project_name or "scaffold"
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for directory in result.directories:
                archive.writestr(f"{root}/{directory.rstrip('/')}/", "")
            for generated in result.files:
                info = zipfile.ZipInfo(f"{root}/{generated.path}")
                info.compress_type = zipfile.ZIP_DEFLATED
                # Shell scripts keep their executable bit.
                mode = 0o755 if generated.file_type == "script" else 0o644
                info.external_attr = (0o100000 | mode) << 16
                archive.writestr(info, generated.content.encode("utf-8"))
    except (OSError, ValueError, zipfile.LargeZipFile) as e:
        logger.error("packaging.archive.failed", project_name=root, error=str(e))
        raise PackagingError(str(e)) from e

    data = buffer.getvalue()
    logger.info(
        "packaging.archive.created",
        project_name=root,
        files=result.file_count,
        directories=len(result.directories),
        size_bytes=len(data),
    )
    return data
