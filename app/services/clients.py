"""Client registry capability - the open pages a worker controls."""

import uuid
from dataclasses import dataclass, field
from typing import Protocol

from loguru import logger


@dataclass
class WindowClient:
    """An open page in the worker's scope."""

    url: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    controlled: bool = False


class ClientRegistry(Protocol):
    """What the activate phase needs from the hosting environment."""

    async def list_clients(self) -> list[WindowClient]: ...

    async def claim(self) -> None: ...

    async def navigate(self, client: WindowClient, url: str) -> None: ...


class InMemoryClients:
    """Registry of pages held in process. Records every navigation."""

    def __init__(self, clients: list[WindowClient] | None = None):
        self._clients: dict[str, WindowClient] = {c.id: c for c in clients or []}
        self.navigations: list[tuple[str, str]] = []

    def open(self, url: str) -> WindowClient:
        client = WindowClient(url=url)
        self._clients[client.id] = client
        return client

    def close(self, client: WindowClient) -> None:
        self._clients.pop(client.id, None)

    async def list_clients(self) -> list[WindowClient]:
        return list(self._clients.values())

    async def claim(self) -> None:
        for client in self._clients.values():
            client.controlled = True
        logger.debug("Claimed {} clients", len(self._clients))

    async def navigate(self, client: WindowClient, url: str) -> None:
        if client.id not in self._clients:
            raise LookupError(f"Client {client.id} is closed")
        client.url = url
        self.navigations.append((client.id, url))
