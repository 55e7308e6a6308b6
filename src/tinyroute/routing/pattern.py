"""Path pattern compiler.

Turns a route pattern into an anchored regular expression by textual
rewriting. Supported syntax::

    /users/:id          named parameter, one segment
    /avatars/:name.:ext dot-prefixed parameter, stops at "."
    /docs/:path+        greedy parameter, may cross "/" and may be empty
    /files/*            wildcard, the "/..." remainder is optional

Every other character of the pattern is passed to the regex engine as-is,
apart from "." which is escaped.
"""

import logging
import re
from dataclasses import dataclass
from typing import Literal

from tinyroute.config import RouterConfig
from tinyroute.errors import ConfigurationError

logger = logging.getLogger("tinyroute.routing")

_DUPLICATE_OR_TRAILING_SLASH = re.compile(r"/+(/|\Z)")
_GREEDY_PARAM = re.compile(r"(/?\.?):([A-Za-z0-9_]+)\+")
_NAMED_PARAM = re.compile(r"(/?\.?):([A-Za-z0-9_]+)")
_WILDCARD = re.compile(r"(/?)\*")


@dataclass(frozen=True, slots=True)
class ParamSpec:
    """A parameter declared in a pattern.

    ``named``:  ``:id``    — one or more characters, never ``/``
    ``greedy``: ``:path+`` — zero or more characters, ``/`` included
    """

    name: str
    kind: Literal["named", "greedy"]
    dot_prefixed: bool = False


@dataclass(frozen=True, slots=True)
class Matcher:
    """A compiled pattern. Immutable and safe to share between requests."""

    pattern: str
    regex: re.Pattern[str]
    params: tuple[ParamSpec, ...]

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.params)

    def match(self, path: str) -> dict[str, str | None] | None:
        """Match *path* against the pattern.

        Returns ``None`` when the path does not match, otherwise the raw
        (still percent-encoded) captures by parameter name. A capture that
        did not take part in the match is ``None``.
        """
        m = self.regex.match(path)
        if m is None:
            return None
        return m.groupdict()


def normalize_pattern(pattern: str) -> str:
    """Collapse repeated slashes and drop one trailing slash.

    ``"/a//b/"`` -> ``"/a/b"``, ``"/"`` -> ``""``.
    """
    return _DUPLICATE_OR_TRAILING_SLASH.sub(r"\1", pattern)


def parse_params(pattern: str) -> tuple[ParamSpec, ...]:
    """Return the parameters declared in *pattern*, in order of appearance."""
    found: list[tuple[int, ParamSpec]] = []
    for m in _GREEDY_PARAM.finditer(pattern):
        spec = ParamSpec(m.group(2), "greedy", dot_prefixed="." in m.group(1))
        found.append((m.start(), spec))

    # Blank out greedy markers so they are not re-read as named ones
    remaining = _GREEDY_PARAM.sub(lambda m: " " * len(m.group(0)), pattern)
    for m in _NAMED_PARAM.finditer(remaining):
        spec = ParamSpec(m.group(2), "named", dot_prefixed="." in m.group(1))
        found.append((m.start(), spec))

    found.sort(key=lambda item: item[0])
    return tuple(spec for _, spec in found)


def pattern_to_regex(pattern: str, *, trailing: bool = True) -> str:
    """Rewrite a route pattern into regex source, without flags.

    The rewrites run in a fixed order; each one only sees text that the
    previous ones left as pattern syntax.
    """
    source = normalize_pattern(pattern)
    # Greedy params: the "*" left inside the group is expanded by the wildcard rule
    source = _GREEDY_PARAM.sub(r"(\1(?P<\2>*))", source)
    # Named params: exclude "/" and the prefix characters ("." for extensions)
    source = _NAMED_PARAM.sub(r"(\1(?P<\2>[^\1/]+?))", source)
    source = source.replace(".", r"\.")
    source = _WILDCARD.sub(r"(\1.*)?", source)
    if trailing:
        source += "(?:/)?"
    return rf"\A{source}\Z"


def compile_pattern(pattern: str, config: RouterConfig | None = None) -> Matcher:
    """Compile a route pattern into a ``Matcher``.

    Raises ``ConfigurationError`` if the rewritten pattern is not a valid
    regular expression (e.g. a parameter name declared twice).
    """
    config = config or RouterConfig()
    source = pattern_to_regex(pattern, trailing=config.trailing)
    flags = 0 if config.sensitive else re.IGNORECASE
    try:
        regex = re.compile(source, flags)
    except re.error as exc:
        msg = f"Invalid route pattern {pattern!r}: {exc}"
        raise ConfigurationError(msg) from exc

    logger.debug("Compiled route pattern %r -> %s", pattern, source)
    return Matcher(pattern=pattern, regex=regex, params=parse_params(normalize_pattern(pattern)))
