# core/schema_registry.py
from __future__ import annotations
from typing import Callable, List, Tuple
from sqlalchemy.engine import Engine
import logging
import pkgutil
import importlib

logger = logging.getLogger(__name__)

# Schema installer type
SchemaInstaller = Callable[[Engine], None]

# Registry: (name, installer_func)
_REGISTRY: List[Tuple[str, SchemaInstaller]] = []

def register(
    name: str | SchemaInstaller, installer: SchemaInstaller | None = None
) -> SchemaInstaller | Callable[[SchemaInstaller], SchemaInstaller]:
    """
    Registers a schema installer function.
    Can be used as a decorator (@register) or a function call (register("name", fn)).
    Registering the same name twice keeps the first installer.
    """
    def _add(label: str, fn: SchemaInstaller) -> SchemaInstaller:
        if not any(existing == label for existing, _ in _REGISTRY):
            _REGISTRY.append((label, fn))
        return fn

    # Used as @register("name")
    if isinstance(name, str) and installer is None:
        def decorator(fn: SchemaInstaller) -> SchemaInstaller:
            return _add(name, fn)
        return decorator

    # Used as @register
    elif callable(name) and installer is None:
        return _add(name.__name__, name)

    # Used as register("name", fn)
    elif isinstance(name, str) and callable(installer):
        return _add(name, installer)

    raise TypeError("Invalid usage of @register")

def run_all(engine: Engine) -> None:
    """Runs all registered schema installers in order. A failing installer is re-raised."""
    logger.info("SchemaRegistry: running %d installers", len(_REGISTRY))
    for name, installer_fn in _REGISTRY:
        logger.debug("Applying schema: %s", name)
        try:
            installer_fn(engine)
        except Exception:
            logger.error("Failed to apply schema %s", name, exc_info=True)
            raise

def registered_names() -> List[str]:
    return [name for name, _ in _REGISTRY]

def auto_discover(package: str = "schemas") -> None:
    """Imports every module of `package` so their @register decorators run."""
    pkg = importlib.import_module(package)
    for _, module_name, is_pkg in pkgutil.walk_packages(pkg.__path__, prefix=f"{package}."):
        if is_pkg:
            continue
        importlib.import_module(module_name)
        logger.debug("Discovered schema module: %s", module_name)
