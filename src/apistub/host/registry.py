from __future__ import annotations

import importlib
import logging
import pkgutil
from types import ModuleType
from typing import Iterable, Iterator, Optional

from apistub.host.decorators import is_generation_enabled

_log = logging.getLogger(__name__)


def discover_controllers(
    targets: Iterable[str],
    logger: Optional[logging.Logger] = None,
) -> list[type]:
    """
    Import each dotted module/package name and collect @generate_api classes.

    Packages are walked recursively. Classes are returned in import order,
    then definition order, once each. Modules that fail to import are
    logged and skipped.
    """
    log = logger or _log
    seen: set[type] = set()
    out: list[type] = []

    for module in _iter_modules(targets, log):
        for obj in vars(module).values():
            if not isinstance(obj, type) or obj in seen:
                continue
            # classes re-exported from elsewhere belong to their own module
            if obj.__module__ != module.__name__:
                continue
            if not is_generation_enabled(obj):
                continue
            seen.add(obj)
            out.append(obj)

    return out


def _iter_modules(targets: Iterable[str], log: logging.Logger) -> Iterator[ModuleType]:
    visited: set[str] = set()
    for target in targets:
        module = _import(target, log)
        if module is None:
            continue
        if module.__name__ not in visited:
            visited.add(module.__name__)
            yield module

        package_path = getattr(module, "__path__", None)
        if not package_path:
            continue
        for info in pkgutil.walk_packages(package_path, prefix=module.__name__ + "."):
            if info.name in visited:
                continue
            sub = _import(info.name, log)
            if sub is None:
                continue
            visited.add(sub.__name__)
            yield sub


def _import(name: str, log: logging.Logger) -> Optional[ModuleType]:
    try:
        return importlib.import_module(name)
    except ImportError:
        log.error("cannot import %s", name, exc_info=True)
        return None
