"""Contract between the validators and whatever fetches cluster resources.

Resources are exchanged as plain dicts in the API server's JSON shape
(camelCase keys, zero values omitted). ``get_*`` methods return ``None``
when the resource does not exist; every other failure raises
``AccessorError``.
"""

from __future__ import annotations

from typing import Any, Protocol

Resource = dict[str, Any]


class AccessorError(Exception):
    """Raised when a list or get call against the cluster fails."""

    def __init__(self, operation: str, message: str, status: int | None = None) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.message = message
        self.status = status


class ResourceAccessor(Protocol):
    """Read-only resource listing and lookup."""

    async def list_namespaces(self) -> list[Resource]: ...

    async def list_ingresses(self, namespace: str | None = None) -> list[Resource]: ...

    async def list_services(self, namespace: str | None = None) -> list[Resource]: ...

    async def get_service(self, namespace: str, name: str) -> Resource | None: ...

    async def list_pods(
        self,
        namespace: str | None = None,
        label_selector: str | None = None,
    ) -> list[Resource]: ...

    async def get_replica_set(self, namespace: str, name: str) -> Resource | None: ...

    async def get_deployment(self, namespace: str, name: str) -> Resource | None: ...

    async def list_deployments(self, namespace: str | None = None) -> list[Resource]: ...
