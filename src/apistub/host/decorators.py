"""Decorators that attach route and generation metadata to controller classes.

Example::

    from typing import Annotated

    from apistub.host.decorators import Body, auto_api, controller, generate_api, route

    @generate_api
    @controller("/user")
    class UserController:

        @auto_api(description="List users")
        @route("/list")
        def list(self, page: int, size: int) -> list[User]:
            ...

        @auto_api
        @route("/create")
        def create(self, req: Annotated[CreateUser, Body]) -> User:
            ...

Only methods carrying @auto_api produce a stub, and only classes carrying
@generate_api are picked up by discovery.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, Union, overload

from apistub.domain.models import normalize_verb

F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)

_CONTROLLER_ATTR = "__apistub_base_path__"
_GENERATE_ATTR = "__apistub_generate__"
_ROUTE_ATTR = "__apistub_route__"
_AUTO_API_ATTR = "__apistub_auto_api__"


class Body:
    """Marks a parameter as bound to the request body: Annotated[T, Body]."""

    def __repr__(self) -> str:
        return "Body()"


def is_body_marker(meta: Any) -> bool:
    return meta is Body or isinstance(meta, Body)


@dataclass(frozen=True)
class AutoApi:
    path: str = ""
    method: str = ""
    description: str = ""


def controller(base_path: str) -> Callable[[C], C]:
    """Class-level route metadata: the base path shared by all methods."""

    def decorate(cls: C) -> C:
        setattr(cls, _CONTROLLER_ATTR, base_path)
        return cls

    return decorate


@overload
def generate_api(cls: C) -> C: ...
@overload
def generate_api(*, enabled: bool = True) -> Callable[[C], C]: ...


def generate_api(cls: Optional[C] = None, *, enabled: bool = True) -> Union[C, Callable[[C], C]]:
    """Opt a controller class in (or out) of stub generation."""

    def decorate(c: C) -> C:
        setattr(c, _GENERATE_ATTR, enabled)
        return c

    return decorate(cls) if cls is not None else decorate


def route(sub_path: str) -> Callable[[F], F]:
    """Method-level route metadata: the sub-path appended to the base path."""

    def decorate(func: F) -> F:
        setattr(func, _ROUTE_ATTR, sub_path)
        return func

    return decorate


@overload
def auto_api(func: F) -> F: ...
@overload
def auto_api(*, path: str = "", method: str = "", description: str = "") -> Callable[[F], F]: ...


def auto_api(
    func: Optional[F] = None,
    *,
    path: str = "",
    method: str = "",
    description: str = "",
) -> Union[F, Callable[[F], F]]:
    """
    Mark a method as eligible for stub generation.

    Args:
        path: Full URL override; replaces base path + sub-path.
        method: HTTP method override (get/post/put/patch/delete). Inferred when empty.
        description: Emitted as a doc comment above the stub.

    Raises:
        ValueError: `method` is not a supported HTTP method.
    """
    meta = AutoApi(path=path, method=normalize_verb(method), description=description)

    def decorate(f: F) -> F:
        setattr(f, _AUTO_API_ATTR, meta)
        return f

    return decorate(func) if func is not None else decorate


def base_path_of(cls: type) -> Optional[str]:
    # own metadata only; subclasses must declare their own route
    return cls.__dict__.get(_CONTROLLER_ATTR)


def is_generation_enabled(cls: type) -> bool:
    return bool(cls.__dict__.get(_GENERATE_ATTR, False))


def route_of(func: Callable[..., Any]) -> str:
    return getattr(func, _ROUTE_ATTR, "")


def auto_api_of(func: Callable[..., Any]) -> Optional[AutoApi]:
    return getattr(func, _AUTO_API_ATTR, None)
