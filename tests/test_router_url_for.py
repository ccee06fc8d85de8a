from waypoint.routing import Router, build_url_from_template


def profile_handler(user_id):
    return f"Profile: {user_id}"


def test_route_builds_absolute_url(router: Router):
    router.get("/user/{id}", profile_handler, name="profile")

    assert router.route("profile", {"id": "42"}) == "https://example.com/user/42"


def test_route_multiple_params(router: Router):
    router.get("/posts/{post_id}/comments/{comment_id}", profile_handler, name="comment")

    url = router.route("comment", {"post_id": 456, "comment_id": "abc"})
    assert url == "https://example.com/posts/456/comments/abc"


def test_route_without_params(router: Router):
    router.get("/about", profile_handler, name="about")

    assert router.route("about") == "https://example.com/about"


def test_route_unknown_name_returns_none(router: Router):
    router.get("/user/{id}", profile_handler, name="profile")

    assert router.route("missing", {"id": "1"}) is None


def test_route_leaves_unresolved_placeholders(router: Router):
    router.get("/user/{id}/posts/{post_id}", profile_handler, name="post")

    assert router.route("post", {"id": 1}) == "https://example.com/user/1/posts/{post_id}"


def test_route_ignores_unused_params(router: Router):
    router.get("/user/{id}", profile_handler, name="profile")

    assert router.route("profile", {"id": 1, "tab": "posts"}) == "https://example.com/user/1"


def test_route_replaces_every_occurrence(router: Router):
    router.get("/{lang}/docs/{lang}", profile_handler, name="docs")

    assert router.route("docs", {"lang": "en"}) == "https://example.com/en/docs/en"


def test_route_includes_group_prefix(router: Router):
    with router.group({"name": "admin", "prefix": "/admin"}):
        router.get("/user/{id}", profile_handler, name="admin.user")

    assert router.route("admin.user", {"id": 3}) == "https://example.com/admin/user/3"


def test_route_with_empty_domain():
    router = Router()
    router.get("/user/{id}", profile_handler, name="profile")

    assert router.route("profile", {"id": 9}) == "/user/9"


def test_route_does_not_depend_on_compilation(router: Router):
    router.get("/user/{id}", profile_handler, name="profile")
    before = router.route("profile", {"id": 1})

    router.run("GET", "/user/1")

    assert router.route("profile", {"id": 1}) == before
    assert router.route("profile", {"id": 1}) == "https://example.com/user/1"


def test_build_url_from_template():
    assert build_url_from_template("/user/{id}", {"id": 42}) == "/user/42"
    assert build_url_from_template("/user/{id}") == "/user/{id}"
    assert build_url_from_template("/static/app.css", {"id": 1}) == "/static/app.css"
