"""Worker configuration - fixed for the life of one worker version."""

import httpx
from pydantic import BaseModel, Field, field_validator

from settings.manifest import STATIC_EXTENSIONS as DEFAULT_STATIC_EXTENSIONS


class WorkerConfig(BaseModel):
    """Cache version, manifest and routing rules baked into a worker."""

    origin: str
    cache_prefix: str = "pwa-cache"
    cache_version: str
    manifest: tuple[str, ...] = ()
    shell_path: str = "/index.html"
    static_extensions: tuple[str, ...] = DEFAULT_STATIC_EXTENSIONS
    precache_attempts: int = Field(default=1, ge=1)
    skip_waiting: bool = True

    class Config:
        frozen = True

    @field_validator("cache_version", mode="before")
    @classmethod
    def _normalize_version(cls, value) -> str:
        return str(value).strip().removeprefix("v")

    @field_validator("origin")
    @classmethod
    def _strip_origin(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def cache_name(self) -> str:
        """Name of the one bucket that is current for this version."""
        return f"{self.cache_prefix}-v{self.cache_version}"

    def resolve(self, url: str) -> str:
        """Absolute URL for a path or URL, fragment dropped."""
        absolute = httpx.URL(self.origin + "/").join(url)
        return str(absolute).split("#", 1)[0]

    def is_static(self, url: str) -> bool:
        """True when the URL path ends with an allowed static extension."""
        path = httpx.URL(self.resolve(url)).path.lower()
        return path.endswith(self.static_extensions)
