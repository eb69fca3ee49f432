"""Backend registry for snowdrift execution strategies.

Provides a global registry of simulation backends so callers can select an
execution strategy by name at runtime without changing how they drive the
simulation. Each registered backend must be a Simulation subclass that
implements step(fields, params).
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snowdrift.backends.base import Simulation

logger = logging.getLogger(__name__)

# Global registry: {name: backend class}
_backends: dict[str, type[Simulation]] = {}


def _validate_backend(name: str, backend_cls: object) -> None:
    """Validate that a class satisfies the backend contract.

    Args:
        name: The backend name being registered.
        backend_cls: The class to validate.

    Raises:
        ValueError: If backend_cls is not a concrete Simulation subclass.
    """
    from snowdrift.backends.base import Simulation

    if not inspect.isclass(backend_cls) or not issubclass(backend_cls, Simulation):
        msg = f"Backend '{name}' must be a subclass of Simulation, got {backend_cls!r}"
        raise ValueError(msg)

    if inspect.isabstract(backend_cls):
        missing_str = ", ".join(sorted(backend_cls.__abstractmethods__))
        msg = f"Backend '{name}' does not implement required methods: {missing_str}"
        raise ValueError(msg)


def register(name: str, backend_cls: type[Simulation]) -> None:
    """Register a backend class under the given name.

    Args:
        name: The name to register the backend under (e.g., "cpu", "numba").
        backend_cls: Concrete Simulation subclass.

    Raises:
        ValueError: If backend_cls does not satisfy the backend contract.

    Example:
        >>> from snowdrift import registry
        >>> from snowdrift.backends.cpu import CPUSimulation
        >>> registry.register("cpu", CPUSimulation)
    """
    _validate_backend(name, backend_cls)
    _backends[name] = backend_cls
    logger.debug("Registered backend '%s'", name)


def get_backend(name: str) -> Simulation:
    """Create a new instance of a registered backend.

    Args:
        name: The registered backend name.

    Returns:
        A fresh backend instance.

    Raises:
        KeyError: If the backend name is not registered.

    Example:
        >>> sim = registry.get_backend("cpu")
        >>> sim.step(fields, params)
    """
    if name not in _backends:
        available = ", ".join(sorted(_backends.keys())) if _backends else "(none)"
        msg = f"Unknown backend '{name}'. Available backends: {available}"
        raise KeyError(msg)
    return _backends[name]()


def list_backends() -> list[str]:
    """Return sorted list of registered backend names."""
    return sorted(_backends.keys())
