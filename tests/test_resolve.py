import pytest
from pydantic import ValidationError

from apistub.codegen.resolve import resolve
from apistub.domain.errors import MissingRouteMetadata
from apistub.domain.models import FieldSpec, HandlerClass, HandlerMethod, Parameter, Primitive, Structured


def _user_controller(*methods: HandlerMethod, base_path="user") -> HandlerClass:
    return HandlerClass(name="demo.web.UserController", base_path=base_path, methods=methods)


def test_resolve_joins_base_and_sub_path():
    hc = _user_controller(HandlerMethod(name="list", sub_path="list", eligible=True))
    [ep] = resolve(hc)

    assert ep.path == "/user/list"
    assert ep.verb == "get"
    assert ep.description == ""
    assert ep.function_name == "listApi"
    assert ep.parameters == ()


def test_resolve_skips_methods_without_marker():
    hc = _user_controller(
        HandlerMethod(name="a", sub_path="/a", eligible=True),
        HandlerMethod(name="helper", sub_path="/helper"),
        HandlerMethod(name="b", sub_path="/b", eligible=True),
    )
    assert [ep.function_name for ep in resolve(hc)] == ["aApi", "bApi"]


def test_resolve_explicit_overrides_win():
    hc = _user_controller(
        HandlerMethod(
            name="remove",
            sub_path="/remove",
            verb="DELETE",
            path="/v2/users/remove",
            description="Remove a user",
            eligible=True,
        )
    )
    [ep] = resolve(hc)

    assert ep.path == "/v2/users/remove"
    assert ep.verb == "delete"
    assert ep.description == "Remove a user"


def test_resolve_infers_post_from_structured_parameter():
    req = Structured(name="Req", fields=(FieldSpec(name="id", type=Primitive(name="number")),))
    hc = _user_controller(
        HandlerMethod(
            name="create",
            sub_path="/create",
            parameters=(Parameter(name="req", type=req),),
            eligible=True,
        )
    )
    [ep] = resolve(hc)
    assert ep.verb == "post"


def test_resolve_empty_sub_path_still_gets_slash():
    hc = _user_controller(HandlerMethod(name="index", eligible=True), base_path="/user")
    [ep] = resolve(hc)
    assert ep.path == "/user/"


def test_resolve_without_base_path_fails_for_whole_class():
    hc = _user_controller(HandlerMethod(name="list", sub_path="/list", eligible=True), base_path=None)
    with pytest.raises(MissingRouteMetadata) as exc:
        resolve(hc)
    assert exc.value.class_name == "demo.web.UserController"


def test_handler_method_rejects_unknown_verb():
    with pytest.raises(ValidationError):
        HandlerMethod(name="x", verb="fetch")
