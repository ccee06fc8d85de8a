"""Route groups: named scopes sharing a path prefix and middleware."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from waypoint.routing.routes import Middleware

logger = logging.getLogger(__name__)

GROUP_ATTRIBUTES = frozenset({"name", "prefix", "middlewares"})


@dataclass(frozen=True)
class GroupContext:
    name: str | None = None
    prefix: str = ""
    middlewares: tuple[Middleware, ...] = ()

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Any]) -> "GroupContext":
        """Build a group from the attribute mapping passed to Router.group.

        The prefix always gets a single leading slash and loses any trailing
        ones. Attributes other than name, prefix and middlewares are ignored.

        Examples:
            >>> GroupContext.from_attributes({"name": "admin", "prefix": "admin/"})
            GroupContext(name='admin', prefix='/admin', middlewares=())
        """
        unknown = set(attributes) - GROUP_ATTRIBUTES
        if unknown:
            logger.debug(f"Ignoring group attributes: {', '.join(sorted(unknown))}")

        middlewares = attributes.get("middlewares") or ()
        if callable(middlewares) or isinstance(middlewares, str):
            middlewares = (middlewares,)

        prefix = (attributes.get("prefix") or "").strip("/")
        return cls(
            name=attributes.get("name"),
            prefix=f"/{prefix}" if prefix else "",
            middlewares=tuple(middlewares),
        )

    def apply_prefix(self, path: str) -> str:
        if not self.prefix:
            return path

        if path in ("", "/"):
            return self.prefix

        if not path.startswith("/"):
            path = "/" + path

        return self.prefix + path


class GroupStack:
    """The stack of currently open group scopes.

    Only the innermost group is consulted; ancestors are not merged.
    """

    def __init__(self):
        self._stack: list[GroupContext] = []

    def push(self, group: GroupContext):
        self._stack.append(group)

    def pop(self) -> GroupContext:
        return self._stack.pop()

    @property
    def current(self) -> GroupContext | None:
        return self._stack[-1] if self._stack else None
