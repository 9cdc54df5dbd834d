from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from apistub.codegen.resolve import resolve
from apistub.config import GeneratorConfig
from apistub.domain.errors import CyclicTypeShape, MissingRouteMetadata
from apistub.domain.models import HandlerClass
from apistub.emit.module import EmitResult, emit
from apistub.host.extract import extract_handler_class, qualified_name
from apistub.host.registry import discover_controllers

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerateResult:
    enabled: bool
    results: tuple[EmitResult, ...] = ()

    @property
    def failed(self) -> list[EmitResult]:
        return [r for r in self.results if not r.ok]


def run_generate(
    classes: Iterable[HandlerClass],
    config: GeneratorConfig,
    logger: Optional[logging.Logger] = None,
) -> GenerateResult:
    """
    Emit one output unit per handler class.

    Classes are independent: a failure is logged by the emitter and the
    next class is processed as usual. Disabled config is a silent no-op.
    """
    log = logger or _log
    if not config.enabled:
        return GenerateResult(enabled=False)

    results = []
    for handler_class in classes:
        log.info("found controller: %s", handler_class.name)
        results.append(emit(handler_class, config, log))
    return GenerateResult(enabled=True, results=tuple(results))


def extract_controllers(
    controllers: Iterable[type],
    logger: Optional[logging.Logger] = None,
) -> tuple[list[HandlerClass], list[EmitResult]]:
    """Snapshot controller classes; classes with cyclic parameter types are reported, not raised."""
    log = logger or _log
    extracted: list[HandlerClass] = []
    failures: list[EmitResult] = []
    for cls in controllers:
        try:
            extracted.append(extract_handler_class(cls))
        except CyclicTypeShape as exc:
            name = qualified_name(cls)
            log.error("skipping %s: %s", name, exc)
            failures.append(EmitResult(name, "", 0, ok=False, error=str(exc)))
    return extracted, failures


def generate_from_targets(
    targets: Iterable[str],
    config: GeneratorConfig,
    logger: Optional[logging.Logger] = None,
) -> GenerateResult:
    """Discover @generate_api controllers in importable modules and emit them."""
    log = logger or _log
    if not config.enabled:
        return GenerateResult(enabled=False)

    classes, failures = extract_controllers(discover_controllers(targets, log), log)
    result = run_generate(classes, config, log)
    return GenerateResult(enabled=True, results=tuple(failures) + result.results)


def list_endpoints(
    classes: Iterable[HandlerClass],
    logger: Optional[logging.Logger] = None,
) -> list[dict]:
    """Resolved endpoints as plain rows, without writing anything."""
    log = logger or _log
    rows: list[dict] = []
    for handler_class in classes:
        try:
            endpoints = resolve(handler_class)
        except MissingRouteMetadata as exc:
            log.error("skipping %s: %s", handler_class.name, exc)
            continue
        for ep in endpoints:
            rows.append(
                {
                    "controller": handler_class.name,
                    "function": ep.function_name,
                    "method": ep.verb,
                    "path": ep.path,
                    "description": ep.description,
                }
            )
    return rows
