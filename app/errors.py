"""Worker errors."""


class WorkerError(Exception):
    """Base error for the caching worker."""

    def __init__(self, message: str = "Worker error"):
        self.message = message
        super().__init__(self.message)


class OfflineError(WorkerError):
    """Network failed and no cached fallback exists."""

    def __init__(self, url: str, cause: BaseException | None = None):
        self.url = url
        self.cause = cause
        super().__init__(f"No network and nothing cached for {url}")


class LifecycleError(WorkerError):
    """Illegal worker state transition."""


class PrecacheError(WorkerError):
    """Manifest asset could not be fetched with an ok status."""

    def __init__(self, path: str, status_code: int):
        self.path = path
        self.status_code = status_code
        super().__init__(f"Failed to fetch {path}: HTTP {status_code}")
