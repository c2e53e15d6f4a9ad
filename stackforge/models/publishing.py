"""Remote repository publishing models."""

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stackforge.models.config import ScaffoldConfig, coerce_config_payload

ConfigPayload = Annotated[ScaffoldConfig, BeforeValidator(coerce_config_payload)]


class PublishRequest(BaseModel):
    """Create a repository and publish the scaffold for ``config`` into it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    config: ConfigPayload
    repository_name: str | None = Field(
        default=None,
        pattern=r"^[A-Za-z0-9._-]{1,100}$",
        description="Defaults to the project name",
    )
    description: str | None = None
    private: bool = False
    reuse_existing: bool = Field(
        default=False,
        description="Publish into an existing repository of the same name",
    )
    generation_id: str | None = None


class PublishResponse(BaseModel):
    """Where the scaffold ended up."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    generation_id: str
    owner: str
    repository: str
    repository_url: str
    branch: str
    commit_sha: str
    files: int
    state: str


class RateLimitResponse(BaseModel):
    """Repository-creation quota for the caller."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    limit: int
    remaining: int
    reset: str
    exceeded: bool
