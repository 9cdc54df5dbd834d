from __future__ import annotations

from typing import Iterable, List, Sequence

from apistub.codegen.verb import GET
from apistub.domain.models import FieldSpec, Parameter, Structured

_INDENT = "\t"


def flatten(parameters: Sequence[Parameter], verb: str) -> List[str]:
    """
    Build the parameter-shape comment for one endpoint.

    All parameters share a single block keyed `query` (GET) or `data`
    (anything else), closed once after the last parameter. A structured
    parameter contributes its fields instead of its own name; nested types
    open a `name: {` ... `},` block one tab deeper. Body-bound scalars are
    listed like any other scalar.

    Returned lines carry no base indentation; fields sit one tab per depth.
    """
    if not parameters:
        return []

    key = "query" if verb == GET else "data"
    lines: List[str] = [f"{key}: {{"]

    for p in parameters:
        if isinstance(p.type, Structured):
            lines.extend(_field_lines(p.type.fields, depth=1))
        else:
            lines.append(f"{_INDENT}{p.name}: {p.type.display_name},")

    lines.append("}")
    return lines


def _field_lines(fields: Iterable[FieldSpec], depth: int) -> List[str]:
    pad = _INDENT * depth
    out: List[str] = []
    for f in fields:
        if isinstance(f.type, Structured):
            out.append(f"{pad}{f.name}: {{")
            out.extend(_field_lines(f.type.fields, depth + 1))
            out.append(f"{pad}}},")
        else:
            out.append(f"{pad}{f.name}: {f.type.display_name},")
    return out
