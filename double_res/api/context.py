"""Public runtime context API."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol

from double_res.api.resources import ResourceStore


class RuntimeContext(ABC):
    """Shared context handed to every system."""

    resources: ResourceStore
    services: dict[str, "ServiceLike"]

    @abstractmethod
    def provide(self, name: str, service: "ServiceLike") -> None:
        """Register a named service."""

    @abstractmethod
    def get(self, name: str) -> "ServiceLike | None":
        """Return a named service if present."""

    @abstractmethod
    def require(self, name: str) -> "ServiceLike":
        """Return named service or raise KeyError."""


class ServiceLike(Protocol):
    """Opaque service contract for runtime context boundaries."""


def create_runtime_context(*, resources: ResourceStore | None = None) -> RuntimeContext:
    """Create default runtime context, with a fresh store unless one is given."""
    from double_res.runtime.context import RuntimeContextImpl
    from double_res.runtime.resource_store import RuntimeResourceStore

    return RuntimeContextImpl(resources=resources or RuntimeResourceStore())
