"""Platform adapter - wires the handlers to worker lifecycle events."""

from collections.abc import Callable
from enum import Enum

import httpx
from loguru import logger

from app.errors import LifecycleError
from app.models import ActivateResult, InstallResult, Request
from app.services.activate import on_activate
from app.services.env import WorkerEnv
from app.services.fetch_router import on_fetch
from app.services.install import on_install


class WorkerState(str, Enum):
    """Worker lifecycle states."""

    PARSED = "parsed"
    INSTALLING = "installing"
    INSTALLED = "installed"
    ACTIVATING = "activating"
    ACTIVATED = "activated"
    REDUNDANT = "redundant"


_TRANSITIONS = {
    WorkerState.PARSED: {WorkerState.INSTALLING, WorkerState.REDUNDANT},
    WorkerState.INSTALLING: {WorkerState.INSTALLED, WorkerState.REDUNDANT},
    WorkerState.INSTALLED: {WorkerState.ACTIVATING, WorkerState.REDUNDANT},
    WorkerState.ACTIVATING: {WorkerState.ACTIVATED, WorkerState.REDUNDANT},
    WorkerState.ACTIVATED: {WorkerState.REDUNDANT},
    WorkerState.REDUNDANT: set(),
}


class ServiceWorker:
    """One worker version and its state."""

    def __init__(self, env: WorkerEnv):
        self.env = env
        self._state = WorkerState.PARSED
        self.install_result: InstallResult | None = None
        self.activate_result: ActivateResult | None = None

    def __repr__(self) -> str:
        return f"ServiceWorker({self.env.config.cache_name}, {self._state.value})"

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def cache_name(self) -> str:
        return self.env.config.cache_name

    @property
    def skip_waiting_requested(self) -> bool:
        return self.env.skip_waiting_requested

    def _transition(self, target: WorkerState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise LifecycleError(f"Cannot go from {self._state.value} to {target.value}")
        logger.debug("{}: {} -> {}", self.cache_name, self._state.value, target.value)
        self._state = target

    async def install(self) -> InstallResult:
        self._transition(WorkerState.INSTALLING)
        self.install_result = await on_install(self.env)
        self._transition(WorkerState.INSTALLED)
        return self.install_result

    async def activate(self) -> ActivateResult:
        self._transition(WorkerState.ACTIVATING)
        self.activate_result = await on_activate(self.env)
        self._transition(WorkerState.ACTIVATED)
        return self.activate_result

    async def fetch(self, request: Request) -> httpx.Response:
        """Route through the worker once active, else straight to network."""
        if self._state != WorkerState.ACTIVATED:
            return await self.env.fetch(request)
        return await on_fetch(self.env, request)

    def skip_waiting(self) -> None:
        self.env.skip_waiting()

    async def drain(self) -> None:
        await self.env.drain()

    def terminate(self) -> None:
        self._transition(WorkerState.REDUNDANT)


RegistrationCallback = Callable[["Registration"], None]


class Registration:
    """Installing, waiting and active worker slots for one scope.

    A newly installed worker parks in `waiting` only when its config turns off
    skip_waiting; the page then promotes it with skip_waiting().
    """

    def __init__(
        self,
        scope: str = "/",
        on_update: RegistrationCallback | None = None,
        on_success: RegistrationCallback | None = None,
    ):
        self.scope = scope
        self.on_update = on_update
        self.on_success = on_success
        self.installing: ServiceWorker | None = None
        self.waiting: ServiceWorker | None = None
        self.active: ServiceWorker | None = None

    async def register(self, worker: ServiceWorker) -> ServiceWorker:
        """Install a worker and activate it, or park it as waiting."""
        self.installing = worker
        try:
            await worker.install()
        finally:
            self.installing = None

        if self.active is None:
            await self._promote(worker)
            if self.on_success:
                self.on_success(self)
            return worker

        if self.on_update:
            self.on_update(self)

        if worker.skip_waiting_requested:
            await self._promote(worker)
        else:
            if self.waiting is not None:
                self.waiting.terminate()
            self.waiting = worker
            logger.info("{} waiting for {} to release clients", worker.cache_name, self.active.cache_name)
        return worker

    async def skip_waiting(self) -> None:
        """Activate the waiting worker now."""
        if self.waiting is None:
            raise LifecycleError("No waiting worker")
        await self._promote(self.waiting)

    async def _promote(self, worker: ServiceWorker) -> None:
        previous = self.active
        if self.waiting is worker:
            self.waiting = None
        if previous is not None and previous is not worker:
            previous.terminate()
        self.active = worker
        await worker.activate()

    async def fetch(self, request: Request) -> httpx.Response:
        if self.active is None:
            raise LifecycleError(f"No active worker for scope {self.scope}")
        return await self.active.fetch(request)

    def unregister(self) -> None:
        for worker in (self.installing, self.waiting, self.active):
            if worker is not None and worker.state != WorkerState.REDUNDANT:
                worker.terminate()
        self.installing = self.waiting = self.active = None
        logger.info("Unregistered scope {}", self.scope)
