"""GitHub repository publishing."""

from stackforge.github.client import GitAuthor, GitHubClient
from stackforge.github.publisher import PublishOutcome, PublishState, RepositoryPublisher

__all__ = [
    "GitAuthor",
    "GitHubClient",
    "PublishOutcome",
    "PublishState",
    "RepositoryPublisher",
]
