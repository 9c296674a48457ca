"""Configuration schema for pyangler.yaml."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PublishConfig(BaseModel):
    """Package index settings.

    Attributes:
        index_url: Base URL of the index JSON API used to detect published versions.
        registry: Upload URL passed to ``uv publish``.
        prerelease_registry: Upload URL used for prerelease versions when no
            explicit registry override is given.
        token_env: Environment variable holding the upload token.
    """

    model_config = ConfigDict(extra="forbid")

    index_url: str = "https://pypi.org"
    registry: str = "https://upload.pypi.org/legacy/"
    prerelease_registry: str | None = None
    token_env: str = "UV_PUBLISH_TOKEN"

    @field_validator("index_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class ReleaseConfig(BaseModel):
    """Release gate and tagging settings."""

    model_config = ConfigDict(extra="forbid")

    tag_format: str = "release-{timestamp}"
    tag_message: str = "Released by pyangler."
    require_prerelease: bool = False
    require_clean: bool = True
    ignore_uncommitted: list[str] = Field(default_factory=list)
    ignore_modified: list[str] = Field(default_factory=lambda: ["CHANGELOG.md"])

    @field_validator("tag_format")
    @classmethod
    def validate_tag_format(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tag_format must not be empty")
        return value


class ChangelogConfig(BaseModel):
    """Changelog settings."""

    model_config = ConfigDict(extra="forbid")

    filename: str = "CHANGELOG.md"


class PyAnglerConfig(BaseModel):
    """Root configuration model.

    Every section is optional; a repository without ``pyangler.yaml`` gets
    the defaults.
    """

    model_config = ConfigDict(extra="forbid")

    packages: list[str] | None = None
    publish: PublishConfig = Field(default_factory=PublishConfig)
    release: ReleaseConfig = Field(default_factory=ReleaseConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
