"""Custom exceptions for StackForge."""

from typing import Any


class StackForgeError(Exception):
    """Base exception for StackForge."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationInvalidError(StackForgeError):
    """The configuration failed one or more error-severity rules."""

    status_code = 400

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__(
            f"Configuration is invalid ({len(errors)} error(s))",
            {"errors": errors},
        )
        self.errors = errors


class GenerationInternalError(StackForgeError):
    """A renderer received a configuration it cannot handle."""

    def __init__(self, message: str, group: str | None = None):
        details = {}
        if group is not None:
            details["group"] = group
        super().__init__(f"Scaffold generation failed: {message}", details)
        self.group = group


class PackagingError(StackForgeError):
    """Archive construction failed."""

    def __init__(self, message: str):
        super().__init__(f"Packaging failed: {message}")


class ProgressNotFoundError(StackForgeError):
    """No progress record exists for the given generation."""

    status_code = 404

    def __init__(self, generation_id: str):
        super().__init__(
            f"Progress not found: {generation_id}",
            {"generation_id": generation_id},
        )


class RemotePublishError(StackForgeError):
    """Base class for failures talking to the remote repository host."""

    status_code = 502

    def __init__(
        self,
        message: str,
        step: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        if step is not None:
            details["step"] = step
        super().__init__(message, details)
        self.step = step


class RemoteAuthError(RemotePublishError):
    """Credentials are missing, expired or lack the required scope."""

    status_code = 401


class RemoteNameConflictError(RemotePublishError):
    """The target repository name is already taken."""

    status_code = 409

    def __init__(self, name: str, step: str | None = None):
        super().__init__(
            f"Repository '{name}' already exists",
            step=step,
            details={"name": name},
        )
        self.name = name


class RemoteRateLimitedError(RemotePublishError):
    """A quota was exhausted, either ours or the remote host's."""

    status_code = 429

    def __init__(
        self,
        message: str,
        retry_after: int,
        source: str = "github",
        step: str | None = None,
    ):
        super().__init__(
            message,
            step=step,
            details={"retry_after": retry_after, "source": source},
        )
        self.retry_after = retry_after
        self.source = source


class RemoteTransientError(RemotePublishError):
    """Network failure, timeout or server error; safe to retry."""

    status_code = 503


class RemoteReferenceConflictError(RemotePublishError):
    """The branch moved between reading and updating it."""

    status_code = 409

    def __init__(self, ref: str, expected: str, actual: str | None):
        super().__init__(
            f"Reference '{ref}' moved: expected {expected}, found {actual}",
            step="updating-reference",
            details={"ref": ref, "expected": expected, "actual": actual},
        )
