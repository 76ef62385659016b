from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from oauth_registry.models.errors import RegisteredClientAlreadyExistsError
from oauth_registry.models.registered_client import RegisteredClient

logger = logging.getLogger(__name__)


class RegisteredClientRepo(Protocol):
    def save(self, client: RegisteredClient) -> None: ...
    def find_by_id(self, id: str) -> RegisteredClient | None: ...
    def find_by_client_id(self, client_id: str) -> RegisteredClient | None: ...


class InMemoryRegisteredClientRepo:
    """Registry keyed by registration id and by client_id.

    Saving a client whose id is already registered replaces it, as long as
    its client_id doesn't collide with a different registration.
    """

    def __init__(self, clients: Iterable[RegisteredClient] = ()) -> None:
        self._by_id: dict[str, RegisteredClient] = {}
        self._by_client_id: dict[str, RegisteredClient] = {}
        for client in clients:
            self.save(client)

    def save(self, client: RegisteredClient) -> None:
        owner = self._by_client_id.get(client.client_id)
        if owner is not None and owner.id != client.id:
            logger.warning(
                "Rejected duplicate client_id=%s",
                client.client_id,
                extra={"registration_id": client.id, "client_id": client.client_id},
            )
            raise RegisteredClientAlreadyExistsError(client.client_id)

        previous = self._by_id.get(client.id)
        if previous is not None:
            del self._by_client_id[previous.client_id]

        self._by_id[client.id] = client
        self._by_client_id[client.client_id] = client
        logger.info(
            "Saved registered client id=%s client_id=%s",
            client.id,
            client.client_id,
            extra={"registration_id": client.id, "client_id": client.client_id},
        )

    def find_by_id(self, id: str) -> RegisteredClient | None:
        if not id:
            raise ValueError("id cannot be empty")
        return self._by_id.get(id)

    def find_by_client_id(self, client_id: str) -> RegisteredClient | None:
        if not client_id:
            raise ValueError("client_id cannot be empty")
        return self._by_client_id.get(client_id)
