from __future__ import annotations

import inspect
from typing import Any, Callable, Optional, get_type_hints

from apistub.codegen.classify import classify
from apistub.domain.models import HandlerClass, HandlerMethod, Parameter
from apistub.host.decorators import auto_api_of, base_path_of, is_body_marker, route_of

_SKIP_PARAMS = {"self", "cls"}
_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def extract_handler_class(cls: type) -> HandlerClass:
    """
    Snapshot a decorated controller class into a HandlerClass.

    Only the class's own functions are considered, in definition order.
    May raise CyclicTypeShape while classifying an eligible method's parameters.
    """
    methods = []
    for name, member in vars(cls).items():
        if name.startswith("__"):
            continue
        func = _as_function(member)
        if func is None:
            continue
        methods.append(extract_handler_method(name, func))

    return HandlerClass(
        name=qualified_name(cls),
        base_path=base_path_of(cls),
        methods=tuple(methods),
    )


def extract_handler_method(name: str, func: Callable[..., Any]) -> HandlerMethod:
    meta = auto_api_of(func)
    if meta is None:
        # not eligible: parameters are never looked at
        return HandlerMethod(name=name, sub_path=route_of(func))

    return HandlerMethod(
        name=name,
        sub_path=route_of(func),
        parameters=tuple(_parameters(func)),
        verb=meta.method,
        path=meta.path,
        description=meta.description,
        eligible=True,
    )


def _parameters(func: Callable[..., Any]) -> list[Parameter]:
    sig = inspect.signature(func)
    try:
        hints = get_type_hints(func, include_extras=True)
    except Exception:
        hints = {}

    out: list[Parameter] = []
    for param_name, param in sig.parameters.items():
        if param_name in _SKIP_PARAMS or param.kind in _VARIADIC:
            continue
        annotation = hints.get(param_name, param.annotation)
        if annotation is inspect.Parameter.empty:
            annotation = str
        out.append(
            Parameter(
                name=param_name,
                type=classify(annotation),
                body=_is_body(annotation),
            )
        )
    return out


def _is_body(annotation: Any) -> bool:
    return any(is_body_marker(m) for m in getattr(annotation, "__metadata__", ()))


def _as_function(member: Any) -> Optional[Callable[..., Any]]:
    if isinstance(member, (staticmethod, classmethod)):
        member = member.__func__
    return member if inspect.isfunction(member) else None
