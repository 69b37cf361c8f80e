"""Registry of functional modules compiled into the service.

Module implementations register themselves under a string key before the
configuration is loaded. Configuration only asks whether a name exists;
it never builds or changes the registry.

Usage example:
    from wmr_server.modules import module

    @module("process")
    class ProcessModule:
        ...
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, TypeVar

from .logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ModuleRegistry(Mapping[str, Any]):
    """Mapping of module name to module implementation."""

    def __init__(self, modules: Mapping[str, Any] | None = None) -> None:
        self._modules: Dict[str, Any] = {}
        if modules:
            for name, impl in modules.items():
                self.register(name, impl)

    def register(self, name: str, impl: Any) -> None:
        """Add a module under ``name``."""
        if name in self._modules:
            raise ValueError(f"Module '{name}' already registered")
        self._modules[name] = impl

    def exists(self, name: str) -> bool:
        return name in self._modules

    def __getitem__(self, name: str) -> Any:
        return self._modules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._modules)

    def __len__(self) -> int:
        return len(self._modules)


module_store = ModuleRegistry()


def module(name: str, registry: ModuleRegistry | None = None) -> Callable[[T], T]:
    """Class/function decorator registering an implementation under ``name``."""
    target = registry if registry is not None else module_store

    def decorator(impl: T) -> T:
        target.register(name, impl)
        return impl

    return decorator


def filter_modules(requested: Iterable[str], registry: ModuleRegistry) -> List[str]:
    """Keep the requested names that are registered, in request order.

    Duplicates are preserved. Unknown names are dropped; they are reported
    in a single warning event but never raise.
    """
    kept: List[str] = []
    dropped: List[str] = []
    for name in requested:
        if registry.exists(name):
            kept.append(name)
        else:
            dropped.append(name)
    if dropped:
        logger.warning("modules_not_registered", configuration="modules", dropped=dropped)
    return kept


__all__ = ["ModuleRegistry", "filter_modules", "module", "module_store"]
