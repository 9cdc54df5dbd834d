from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from apistub.codegen.verb import infer_verb
from apistub.domain.errors import MissingRouteMetadata
from apistub.domain.models import HandlerClass, HandlerMethod, Parameter

FUNCTION_SUFFIX = "Api"


@dataclass(frozen=True)
class ResolvedEndpoint:
    """
    One generated stub, fully resolved from class + method metadata.

    Derived per generation pass; never stored.
    """

    path: str                   # /user/list
    verb: str                   # get, post, ...
    description: str            # "" -> no doc comment
    parameters: Tuple[Parameter, ...]
    function_name: str          # listApi


def ensure_leading_slash(path: str) -> str:
    p = (path or "").strip()
    return p if p.startswith("/") else "/" + p


def resolve(handler_class: HandlerClass) -> List[ResolvedEndpoint]:
    """
    Resolve every eligible method of `handler_class`, in declaration order.

    Methods without the eligibility marker are skipped silently.
    Raises MissingRouteMetadata if the class has no base path at all.
    """
    if handler_class.base_path is None:
        raise MissingRouteMetadata(handler_class.name)

    base = ensure_leading_slash(handler_class.base_path)
    return [
        _resolve_method(base, m)
        for m in handler_class.methods
        if m.eligible
    ]


def _resolve_method(base: str, method: HandlerMethod) -> ResolvedEndpoint:
    path = method.path or base + ensure_leading_slash(method.sub_path)
    verb = method.verb or infer_verb(method.parameters)
    return ResolvedEndpoint(
        path=path,
        verb=verb,
        description=method.description or "",
        parameters=tuple(method.parameters),
        function_name=method.name + FUNCTION_SUFFIX,
    )
