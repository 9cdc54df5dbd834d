from apistub.codegen.render import render
from apistub.codegen.resolve import ResolvedEndpoint


def _endpoint(**kw) -> ResolvedEndpoint:
    base = dict(path="/user/list", verb="get", description="", parameters=(), function_name="listApi")
    base.update(kw)
    return ResolvedEndpoint(**base)


def test_render_get_without_comments():
    text = render(_endpoint(), [])

    assert text == (
        "export const listApi = (query) => {\n"
        "\treturn request({\n"
        "\t\turl: '/user/list',\n"
        "\t\tmethod: 'get',\n"
        "\t\tparams: query\n"
        "\t})\n"
        "}\n"
        "\n"
    )


def test_render_post_with_description_and_shape():
    ep = _endpoint(path="/user/create", verb="post", description="Create a user", function_name="createApi")
    text = render(ep, ["data: {", "\tname: string,", "}"])

    assert text == (
        "/**\n"
        " * Create a user\n"
        " */\n"
        "export const createApi = (data) => {\n"
        "\t/*\n"
        "\t\tdata: {\n"
        "\t\t\tname: string,\n"
        "\t\t}\n"
        "\t*/\n"
        "\treturn request({\n"
        "\t\turl: '/user/create',\n"
        "\t\tmethod: 'post',\n"
        "\t\tdata\n"
        "\t})\n"
        "}\n"
        "\n"
    )


def test_render_non_get_verbs_send_data():
    text = render(_endpoint(verb="put", function_name="updateApi"), [])
    assert "export const updateApi = (data) => {" in text
    assert "\t\tmethod: 'put',\n\t\tdata\n" in text


def test_render_multiline_description():
    text = render(_endpoint(description="Line one\nLine two"), [])
    assert text.startswith("/**\n * Line one\n * Line two\n */\n")
