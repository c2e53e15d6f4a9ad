"""Services for the StackForge application."""

from stackforge.services.publish_service import PublishService, get_publish_service
from stackforge.services.scaffold_service import ScaffoldService, get_scaffold_service

__all__ = [
    "PublishService",
    "get_publish_service",
    "ScaffoldService",
    "get_scaffold_service",
]
