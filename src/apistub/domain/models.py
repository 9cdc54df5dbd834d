from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

HTTP_VERBS: tuple[str, ...] = ("get", "post", "put", "patch", "delete", "options", "head")


def normalize_verb(verb: str) -> str:
    """
    Lower-case an explicit verb override. "" means "not given".
    Raises ValueError for anything outside HTTP_VERBS.
    """
    v = (verb or "").strip().lower()
    if v and v not in HTTP_VERBS:
        raise ValueError(f"unsupported HTTP method: {verb!r} (expected one of {', '.join(HTTP_VERBS)})")
    return v


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


class Primitive(_Snapshot):
    kind: Literal["primitive"] = "primitive"
    name: Literal["number", "boolean", "string"] = "string"

    @property
    def display_name(self) -> str:
        return self.name


class DateType(_Snapshot):
    kind: Literal["date"] = "date"

    @property
    def display_name(self) -> str:
        return "Date"


class ArrayOf(_Snapshot):
    kind: Literal["array"] = "array"
    item: TypeDescriptor  # shallow: never expanded by the flattener

    @property
    def display_name(self) -> str:
        return f"{self.item.display_name}[]"


class FieldSpec(_Snapshot):
    name: str
    type: TypeDescriptor


class Structured(_Snapshot):
    kind: Literal["structured"] = "structured"
    name: str = "Object"
    fields: tuple[FieldSpec, ...] = ()

    @property
    def display_name(self) -> str:
        return self.name


TypeDescriptor = Annotated[
    Union[Primitive, DateType, ArrayOf, Structured],
    Field(discriminator="kind"),
]

ArrayOf.model_rebuild()
FieldSpec.model_rebuild()
Structured.model_rebuild()


class Parameter(_Snapshot):
    name: str
    type: TypeDescriptor
    body: bool = False  # bound to the request body


class HandlerMethod(_Snapshot):
    name: str
    sub_path: str = ""
    parameters: tuple[Parameter, ...] = ()

    # explicit overrides; "" means not given
    verb: str = ""
    path: str = ""
    description: str = ""

    eligible: bool = False

    @field_validator("verb")
    @classmethod
    def _check_verb(cls, v: str) -> str:
        return normalize_verb(v)


class HandlerClass(_Snapshot):
    name: str
    base_path: Optional[str] = None  # None: class carries no route metadata
    methods: tuple[HandlerMethod, ...] = ()

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]
