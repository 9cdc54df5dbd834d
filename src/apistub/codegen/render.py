from __future__ import annotations

from typing import List, Sequence

from apistub.codegen.resolve import ResolvedEndpoint
from apistub.codegen.verb import GET


def render(endpoint: ResolvedEndpoint, parameter_comment: Sequence[str]) -> str:
    """
    Render one stub function as JavaScript text, trailing blank line included.

    GET stubs take `query` and pass it as `params`; every other verb takes
    `data` and passes it as the request body.
    """
    arg = "query" if endpoint.verb == GET else "data"
    binding = "params: query" if endpoint.verb == GET else "data"

    lines: List[str] = []
    if endpoint.description:
        lines.extend(_doc_comment(endpoint.description))

    lines.append(f"export const {endpoint.function_name} = ({arg}) => {{")
    if parameter_comment:
        lines.append("\t/*")
        lines.extend(f"\t\t{line}" for line in parameter_comment)
        lines.append("\t*/")
    lines.extend(
        [
            "\treturn request({",
            f"\t\turl: '{endpoint.path}',",
            f"\t\tmethod: '{endpoint.verb}',",
            f"\t\t{binding}",
            "\t})",
            "}",
            "",
        ]
    )
    return "\n".join(lines) + "\n"


def _doc_comment(description: str) -> List[str]:
    return ["/**", *(f" * {line}".rstrip() for line in description.splitlines()), " */"]
