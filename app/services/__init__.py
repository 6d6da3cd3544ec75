"""Services package - lifecycle handlers and their environment."""

from app.services.activate import on_activate
from app.services.clients import ClientRegistry, InMemoryClients, WindowClient
from app.services.env import WorkerEnv, safe_match, safe_put
from app.services.fetch_router import on_fetch
from app.services.install import on_install
from app.services.lifecycle import Registration, ServiceWorker, WorkerState

__all__ = [
    # Environment
    "WorkerEnv",
    "safe_match",
    "safe_put",
    "ClientRegistry",
    "InMemoryClients",
    "WindowClient",
    # Handlers
    "on_install",
    "on_fetch",
    "on_activate",
    # Lifecycle
    "ServiceWorker",
    "Registration",
    "WorkerState",
]
