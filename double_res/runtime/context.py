"""Runtime context implementation."""

from __future__ import annotations

from dataclasses import dataclass, field

from double_res.api.context import RuntimeContext, ServiceLike
from double_res.api.resources import ResourceStore
from double_res.runtime.resource_store import RuntimeResourceStore


@dataclass(slots=True)
class RuntimeContextImpl(RuntimeContext):
    """Resource store plus a name-keyed service registry."""

    resources: ResourceStore = field(default_factory=RuntimeResourceStore)
    services: dict[str, ServiceLike] = field(default_factory=dict)

    def provide(self, name: str, service: ServiceLike) -> None:
        key = name.strip()
        if not key:
            raise ValueError("service name must not be empty")
        self.services[key] = service

    def get(self, name: str) -> ServiceLike | None:
        return self.services.get(name.strip())

    def require(self, name: str) -> ServiceLike:
        try:
            return self.services[name.strip()]
        except KeyError:
            raise KeyError(f"missing runtime service: {name}") from None
