"""
Helper objects for tests, also imported by string from the CLI and config tests.
"""

from waypoint.routing import Router


class UserController:
    instances = 0

    def __init__(self):
        UserController.instances += 1
        self.created = []

    def show(self, user_id):
        return f"user {user_id}"

    def create(self):
        return "created"

    def posts(self, user_id, post_id):
        return f"user {user_id} post {post_id}"

    def audit(self, call_next, *params):
        return f"audited({call_next()})"

    not_callable = "just a string"


def build_router() -> Router:
    router = Router("https://example.com")
    router.get("/", lambda: "home", name="home")
    router.get("/user/{id}", "UserController::show", name="profile")
    router.post("/user", "UserController::create")
    with router.group({"name": "admin", "prefix": "/admin"}):
        router.delete("/user/{id}", lambda user_id: f"deleted {user_id}")
    return router


shared_router = build_router()

not_a_router = 42
