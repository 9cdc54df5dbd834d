from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from apistub.codegen.render import render
from apistub.codegen.resolve import ResolvedEndpoint, resolve
from apistub.codegen.shape import flatten
from apistub.config import GeneratorConfig
from apistub.domain.errors import MissingRouteMetadata, OutputIOFailure
from apistub.domain.models import HandlerClass

_log = logging.getLogger(__name__)

CONTROLLER_SUFFIX = "Controller"
UNIT_SUFFIX = "Api"
UNIT_EXTENSION = ".js"


@dataclass(frozen=True)
class EmitResult:
    class_name: str
    output_path: str
    stubs: int
    ok: bool
    error: Optional[str] = None


def output_unit_name(class_name: str) -> str:
    # pkg.controllers.UserController -> UserApi
    simple = class_name.rsplit(".", 1)[-1]
    if simple.endswith(CONTROLLER_SUFFIX):
        simple = simple[: -len(CONTROLLER_SUFFIX)] + UNIT_SUFFIX
    return simple


def output_unit_path(handler_class: HandlerClass, config: GeneratorConfig) -> Path:
    return config.output_path / (output_unit_name(handler_class.name) + UNIT_EXTENSION)


def emit(
    handler_class: HandlerClass,
    config: GeneratorConfig,
    logger: Optional[logging.Logger] = None,
) -> EmitResult:
    """
    Write the output unit for one handler class.

    Failures are logged and reported in the result; they never propagate,
    so the caller can move on to the next class. A unit that fails mid-write
    is left on disk as written.
    """
    log = logger or _log
    path = output_unit_path(handler_class, config)

    try:
        endpoints = resolve(handler_class)
    except MissingRouteMetadata as exc:
        log.error("skipping %s: %s", handler_class.name, exc)
        return EmitResult(handler_class.name, str(path), 0, ok=False, error=str(exc))

    try:
        _write_unit(path, endpoints, config.request_module, handler_class.name)
    except OutputIOFailure as exc:
        log.error("%s", exc, exc_info=exc.__cause__)
        return EmitResult(handler_class.name, str(path), 0, ok=False, error=f"{exc}: {exc.__cause__}")

    log.info("generated %s (%d stubs)", path, len(endpoints))
    return EmitResult(handler_class.name, str(path), len(endpoints), ok=True)


def _write_unit(
    path: Path,
    endpoints: Sequence[ResolvedEndpoint],
    request_module: str,
    class_name: str,
) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # always truncate: a unit is never appended across runs
        with path.open("w", encoding="utf-8", newline="\n") as fh:
            fh.write(f"import request from '{request_module}'\n\n")
            for ep in endpoints:
                fh.write(render(ep, flatten(ep.parameters, ep.verb)))
    except (OSError, UnicodeError) as exc:
        raise OutputIOFailure(class_name, path) from exc
