import pytest

from waypoint.routing.patterns import compile_path, match_path, placeholder_names


def test_compile_extracts_param_names_in_order():
    pattern = compile_path("/user/{id}/posts/{postId}")

    assert pattern.template == "/user/{id}/posts/{postId}"
    assert pattern.param_names == ("id", "postId")


def test_match_captures_positionally():
    pattern = compile_path("/user/{id}/posts/{postId}")

    assert pattern.match("/user/7/posts/99") == ("7", "99")


@pytest.mark.parametrize(
    "template,path,expected",
    [
        ("/", "/", ()),
        ("/about", "/about", ()),
        ("/user/{id}", "/user/42", ("42",)),
        ("/a/{x}/b/{y}/c/{z}", "/a/1/b/two/c/3.0", ("1", "two", "3.0")),
        ("/files/{name}.txt", "/files/report.txt", ("report",)),
        ("/v{version}/status", "/v2/status", ("2",)),
    ],
)
def test_placeholder_count_matches_capture_count(template, path, expected):
    params = compile_path(template).match(path)

    assert params == expected
    assert len(params) == len(placeholder_names(template))


@pytest.mark.parametrize(
    "path",
    [
        "/user",
        "/user/",
        "/user/7/extra",
        "/prefix/user/7",
        "/user/7/",
    ],
)
def test_match_is_anchored_to_the_full_path(path):
    assert compile_path("/user/{id}").match(path) is None


def test_placeholder_does_not_cross_separators():
    assert match_path("/user/a/b", "/user/{id}") is None


def test_literal_segments_are_escaped():
    assert match_path("/files/report.txt", "/files/{name}.txt") == ("report",)
    assert match_path("/files/reportXtxt", "/files/{name}.txt") is None
    assert match_path("/a+b", "/a+b") == ()
    assert match_path("/aab", "/a+b") is None
    assert match_path("/search/(all)", "/search/(all)") == ()


def test_invalid_placeholder_is_literal_text():
    pattern = compile_path("/x/{bad-name}")

    assert pattern.param_names == ()
    assert pattern.match("/x/{bad-name}") == ()
    assert pattern.match("/x/value") is None


def test_duplicate_placeholder_names_capture_separately():
    pattern = compile_path("/{a}/{a}")

    assert pattern.param_names == ("a", "a")
    assert pattern.match("/1/2") == ("1", "2")


def test_compiling_twice_gives_equivalent_patterns():
    first = compile_path("/user/{id}")
    second = compile_path("/user/{id}")

    assert first == second
    assert first.match("/user/9") == second.match("/user/9")


def test_placeholder_names_lists_names_in_order():
    assert placeholder_names("/user/{id}/posts/{post_id}") == ["id", "post_id"]
    assert placeholder_names("/static/path") == []
