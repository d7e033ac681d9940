"""Range policy auto-discovery and registration.

Scans datamap/policies/ for modules that define a `policy` object of
type RangePolicy. Collects them into a dict keyed by name.
"""

import importlib
import pkgutil

from datamap.core.types import RangePolicy

_registry: dict[str, RangePolicy] = {}

DEFAULT_POLICY = 'log'


def discover() -> dict[str, RangePolicy]:
    """Import all policy modules and return the registry."""
    if _registry:
        return _registry

    import datamap.policies as pkg

    found_modules = [
        modname for _importer, modname, _ispkg in pkgutil.iter_modules(pkg.__path__) if not modname.startswith('_')
    ]

    for modname in found_modules:
        module = importlib.import_module(f'datamap.policies.{modname}')
        pol = getattr(module, 'policy', None)
        if isinstance(pol, RangePolicy):
            _registry[pol.name] = pol

    return _registry


def get(name: str) -> RangePolicy:
    """Get a policy by name."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown range policy: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_policies() -> dict[str, RangePolicy]:
    """Return all registered policies."""
    return discover()
