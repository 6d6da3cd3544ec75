"""Lifecycle phase results."""

from dataclasses import dataclass, field


@dataclass
class InstallResult:
    """Outcome of pre-caching the manifest."""

    cache_name: str
    cached: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed


@dataclass
class ActivateResult:
    """Outcome of the old-bucket sweep and client takeover."""

    kept: str
    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    navigated: list[str] = field(default_factory=list)
