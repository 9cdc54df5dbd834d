from __future__ import annotations

import dataclasses
import datetime as dt
import decimal
import inspect
import types
import uuid
from collections.abc import Callable, Iterable, Mapping, MutableSequence, MutableSet, Sequence
from collections.abc import Set as AbstractSet
from typing import (
    Any,
    ClassVar,
    ForwardRef,
    Literal,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    is_typeddict,
)

from pydantic import BaseModel

from apistub.domain.errors import CyclicTypeShape
from apistub.domain.models import ArrayOf, DateType, FieldSpec, Primitive, Structured, TypeDescriptor

# order matters: bool is an int subclass
_PRIMITIVES: tuple[tuple[type, str], ...] = (
    (bool, "boolean"),
    (int, "number"),
    (float, "number"),
    (complex, "number"),
    (decimal.Decimal, "number"),
    (str, "string"),
    (bytes, "string"),
    (uuid.UUID, "string"),
)

# datetime is a date subclass; aware datetimes share the class
_DATES: tuple[type, ...] = (dt.date, dt.time)

_ARRAYS: frozenset[Any] = frozenset(
    {list, tuple, set, frozenset, Sequence, MutableSequence, AbstractSet, MutableSet}
)


def classify(tp: Any) -> TypeDescriptor:
    """
    Classify a Python annotation into a TypeDescriptor.

    - numbers, booleans, strings (and their subclasses, e.g. IntEnum) -> Primitive
    - date / datetime / time -> DateType
    - list / tuple / set and friends -> ArrayOf (element is named, never walked)
    - anything else -> Structured, its own (not inherited) fields classified
      recursively in declaration order

    Raises CyclicTypeShape when a structured type reaches itself again.
    """
    return _classify(tp, ())


def _classify(tp: Any, path: tuple[Any, ...]) -> TypeDescriptor:
    tp = _unwrap(tp)

    if _is_array(tp):
        return ArrayOf(item=_shallow(_array_item(tp)))

    leaf = _leaf(tp)
    if leaf is not None:
        return leaf

    origin = get_origin(tp)
    target = origin if origin is not None else tp
    if target in path:
        names = [_type_name(p) for p in path] + [_type_name(target)]
        raise CyclicTypeShape(names)

    inner = path + (target,)
    fields = tuple(
        FieldSpec(name=name, type=_classify(hint, inner))
        for name, hint in _declared_fields(target)
    )
    return Structured(name=_type_name(target), fields=fields)


def _unwrap(tp: Any) -> Any:
    # Annotated[X, ...], Optional[X], X | None, NewType, Literal["a"]
    while True:
        origin = get_origin(tp)
        if hasattr(tp, "__metadata__") and hasattr(tp, "__origin__"):
            tp = tp.__origin__
            continue
        if origin is Union or origin is types.UnionType:
            args = [a for a in get_args(tp) if a is not type(None)]
            tp = args[0] if args else type(None)
            continue
        if origin is Literal:
            values = get_args(tp)
            tp = type(values[0]) if values else str
            continue
        if hasattr(tp, "__supertype__"):
            tp = tp.__supertype__
            continue
        return tp


def _is_array(tp: Any) -> bool:
    return tp in _ARRAYS or get_origin(tp) in _ARRAYS


def _leaf(tp: Any) -> TypeDescriptor | None:
    if get_origin(tp) is not None or not isinstance(tp, type):
        return None
    for base, name in _PRIMITIVES:
        if issubclass(tp, base):
            return Primitive(name=name)
    if issubclass(tp, _DATES):
        return DateType()
    return None


def _array_item(tp: Any) -> Any:
    args = [a for a in get_args(tp) if a is not Ellipsis]
    return args[0] if args else object


def _shallow(tp: Any) -> TypeDescriptor:
    tp = _unwrap(tp)
    if _is_array(tp):
        return ArrayOf(item=_shallow(_array_item(tp)))
    leaf = _leaf(tp)
    if leaf is not None:
        return leaf
    origin = get_origin(tp)
    return Structured(name=_type_name(origin if origin is not None else tp))


def _declared_fields(tp: Any) -> list[tuple[str, Any]]:
    """Fields declared on `tp` itself; inherited ones are left out."""
    if not isinstance(tp, type):
        return []
    if issubclass(tp, BaseModel):
        inherited = _inherited_names(tp, lambda b: getattr(b, "model_fields", {}))
        return [(name, f.annotation) for name, f in tp.model_fields.items() if name not in inherited]
    if issubclass(tp, Mapping) and not hasattr(tp, "__annotations__"):
        return []

    try:
        hints = get_type_hints(tp)
    except Exception:
        hints = dict(getattr(tp, "__annotations__", {}))

    if dataclasses.is_dataclass(tp):
        inherited = _inherited_names(
            tp, lambda b: [f.name for f in dataclasses.fields(b)] if dataclasses.is_dataclass(b) else ()
        )
        return [
            (f.name, hints.get(f.name, f.type))
            for f in dataclasses.fields(tp)
            if f.name not in inherited
        ]

    own = inspect.get_annotations(tp)
    if is_typeddict(tp):
        # a TypedDict stores the merged annotations of its bases
        inherited = set()
        for base in tp.__dict__.get("__orig_bases__", ()):
            if is_typeddict(base):
                inherited.update(inspect.get_annotations(base))
        own = {n: a for n, a in own.items() if n not in inherited}

    return [
        (name, hints.get(name, raw))
        for name, raw in own.items()
        if get_origin(hints.get(name, raw)) is not ClassVar
    ]


def _inherited_names(tp: type, names_of: Callable[[type], Iterable[str]]) -> set[str]:
    found: set[str] = set()
    for base in tp.__mro__[1:]:
        found.update(names_of(base))
    return found


def _type_name(tp: Any) -> str:
    if isinstance(tp, ForwardRef):
        return tp.__forward_arg__
    if isinstance(tp, str):
        return tp
    if tp is object or tp is Any:
        return "Object"
    return getattr(tp, "__name__", None) or "Object"
