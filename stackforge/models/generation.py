"""Scaffold generation data models."""

from typing import Literal

from pydantic import BaseModel, Field

FileType = Literal["source", "config", "docs", "script", "asset"]


class GeneratedFile(BaseModel):
    """A generated file."""

    path: str
    content: str
    file_type: FileType = "source"
    lines: int = 0

    def __init__(self, **data):
        super().__init__(**data)
        if self.lines == 0:
            self.lines = len(self.content.splitlines())


class GenerationMetadata(BaseModel):
    """Summary of a generation run."""

    project_name: str
    structure: str
    framework: str
    total_files: int
    total_directories: int


class GenerationResult(BaseModel):
    """Complete generated scaffold output.

    Built fresh per request and handed straight to packaging or publishing.
    """

    files: list[GeneratedFile] = Field(default_factory=list)
    directories: list[str] = Field(default_factory=list)
    metadata: GenerationMetadata

    @property
    def file_count(self) -> int:
        """Get total number of files."""
        return len(self.files)

    @property
    def total_lines(self) -> int:
        """Get total lines across all files."""
        return sum(f.lines for f in self.files)

    @property
    def paths(self) -> list[str]:
        """Get file paths in emission order."""
        return [f.path for f in self.files]

    def get(self, path: str) -> GeneratedFile | None:
        """Look up a file by its relative path."""
        for generated in self.files:
            if generated.path == path:
                return generated
        return None
