"""
apistub configuration.

Read from APISTUB_* environment variables (or a local .env), then passed
explicitly to the emitter and pipeline.
"""
from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REQUEST_MODULE = "@/utils/request"


class GeneratorConfig(BaseSettings):
    """Generation settings for one pass."""

    model_config = SettingsConfigDict(
        env_prefix="APISTUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    output_dir: str = Field(default="./", description="Directory receiving the generated .js files")
    enabled: bool = Field(default=True, description="When false the whole pass is a no-op")
    request_module: str = Field(
        default=DEFAULT_REQUEST_MODULE,
        description="Module the generated files import `request` from",
    )

    @field_validator("output_dir")
    @classmethod
    def _trailing_slash(cls, v: str) -> str:
        v = v or "./"
        return v if v.endswith("/") else v + "/"

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)
