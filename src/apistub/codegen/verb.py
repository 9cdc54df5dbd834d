from __future__ import annotations

from typing import Iterable

from apistub.domain.models import Parameter, Structured

GET = "get"
POST = "post"


def carries_payload(param: Parameter) -> bool:
    # structured or body-bound values cannot travel in a query string
    return param.body or isinstance(param.type, Structured)


def infer_verb(parameters: Iterable[Parameter]) -> str:
    """POST as soon as one parameter is body-bound or structured, GET otherwise."""
    return POST if any(carries_payload(p) for p in parameters) else GET
