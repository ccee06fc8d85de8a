"""URL pattern compilation and matching for Waypoint routing.

This module turns route path templates into anchored regular expressions:
- Literal text is escaped and must match verbatim
- `{name}` placeholders match one or more characters other than "/"
- Captured values come back positionally, in placeholder order
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache

PLACEHOLDER_PATTERN = re.compile(r"\{([A-Za-z0-9_]+)\}")
SEGMENT_PATTERN = r"([^/]+)"


@dataclass(frozen=True)
class CompiledPattern:
    """A route template compiled into a reusable matcher.

    Attributes:
        template: The original path template, e.g. "/user/{id}"
        regex: The anchored regular expression built from the template
        param_names: Placeholder names in the order they appear
    """

    template: str
    regex: re.Pattern[str] = field(compare=False)
    param_names: tuple[str, ...] = ()

    def match(self, path: str) -> tuple[str, ...] | None:
        """Match a request path against this pattern.

        Returns:
            The captured values in placeholder order, or None if the path does
            not match. A template without placeholders yields an empty tuple.

        Examples:
            >>> compile_path("/user/{id}/posts/{post_id}").match("/user/7/posts/99")
            ("7", "99")

            >>> compile_path("/user/{id}").match("/user/7/extra") is None
            True
        """
        match = self.regex.fullmatch(path)
        if match is None:
            return None

        return match.groups()


@lru_cache(maxsize=512)
def compile_path(template: str) -> CompiledPattern:
    """Compile a path template into a CompiledPattern.

    Braces that do not form a valid placeholder are kept as literal text.
    Duplicate placeholder names are not rejected; each one captures its own
    positional slot.

    Args:
        template: Path template such as "/user/{id}/posts/{post_id}"

    Returns:
        The compiled pattern for the template.

    Examples:
        >>> compile_path("/files/{name}.txt").param_names
        ("name",)
    """
    regex_parts = []
    param_names = []
    position = 0
    for match in PLACEHOLDER_PATTERN.finditer(template):
        start, end = match.span()
        regex_parts.append(re.escape(template[position:start]))
        regex_parts.append(SEGMENT_PATTERN)
        param_names.append(match.group(1))
        position = end

    regex_parts.append(re.escape(template[position:]))
    return CompiledPattern(
        template=template,
        regex=re.compile("^" + "".join(regex_parts) + "$"),
        param_names=tuple(param_names),
    )


def placeholder_names(template: str) -> list[str]:
    """List the placeholder names of a template in order of appearance."""
    return PLACEHOLDER_PATTERN.findall(template)


def match_path(request_path: str, path_pattern: str) -> tuple[str, ...] | None:
    """Performs path matching against a template.

    Args:
        request_path: The incoming request path to match
        path_pattern: The route template to match against

    Returns:
        A tuple of captured values if matched, else None.

    Examples:
        >>> match_path("/users/123", "/users/{user_id}")
        ("123",)

        >>> match_path("/", "/")
        ()
    """
    return compile_path(path_pattern).match(request_path)
