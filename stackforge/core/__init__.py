"""Core functionality for StackForge."""

from stackforge.core.exceptions import (
    ConfigurationInvalidError,
    GenerationInternalError,
    PackagingError,
    ProgressNotFoundError,
    RemoteAuthError,
    RemoteNameConflictError,
    RemotePublishError,
    RemoteRateLimitedError,
    RemoteReferenceConflictError,
    RemoteTransientError,
    StackForgeError,
)
from stackforge.core.cache import TemplateCache, get_template_cache
from stackforge.core.progress import ProgressStore, ProgressTracker, get_progress_store
from stackforge.core.rate_limit import RateLimiter, RateLimitInfo, get_repository_rate_limiter

__all__ = [
    "StackForgeError",
    "ConfigurationInvalidError",
    "GenerationInternalError",
    "PackagingError",
    "ProgressNotFoundError",
    "RemotePublishError",
    "RemoteAuthError",
    "RemoteNameConflictError",
    "RemoteRateLimitedError",
    "RemoteTransientError",
    "RemoteReferenceConflictError",
    "TemplateCache",
    "get_template_cache",
    "ProgressStore",
    "ProgressTracker",
    "get_progress_store",
    "RateLimiter",
    "RateLimitInfo",
    "get_repository_rate_limiter",
]
