"""URL helpers: base-URL rewriting and page URL patterns."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

if typ.TYPE_CHECKING:
    from .page import Page

URL_PARAMS = ("id", "slug", "date_published", "date_modified")
DEFAULT_DATE_FORMAT = "%Y/%m/%d"
PARAM_PATTERN = re.compile(
    r":(?P<param>" + "|".join(URL_PARAMS) + r")(?:\((?P<options>[^)]+)\))?"
)


class UrlPatternError(ValueError):
    """Raised when a URL pattern cannot be rendered for a page."""


def rewrite_base_url(url: str, old_base: str, new_base: str) -> str:
    """Replace a leading ``old_base`` in ``url`` with ``new_base``.

    Trailing slashes are removed from both bases before matching, and only a
    match at the start of ``url`` is replaced.

    >>> rewrite_base_url("http://old.com/about", "http://old.com/", "http://new.com/")
    'http://new.com/about'
    >>> rewrite_base_url("http://other.com/old.com", "http://old.com/", "http://new.com/")
    'http://other.com/old.com'
    """
    old = old_base.rstrip("/")
    new = new_base.rstrip("/")
    if not old:
        return url
    return re.sub("^" + re.escape(old), lambda _: new, url, count=1)


def url_ends_with_path(url: str, path: str) -> bool:
    """Return True when ``url`` ends with ``path``, ignoring trailing slashes.

    An empty ``path`` never matches.
    """
    suffix = path.rstrip("/")
    if not suffix:
        return False
    return url.rstrip("/").endswith(suffix)


@dc.dataclass(slots=True)
class UrlParam:
    """One ``:param(options)`` placeholder found in a URL pattern."""

    name: str
    placeholder: str
    options: dict[str, str] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class UrlPattern:
    """Pattern such as ``/news/:date_published(format=%Y/%m)/:slug``.

    Supported parameters are ``id``, ``slug``, ``date_published`` and
    ``date_modified``; date parameters accept a ``format`` option holding
    ``strftime`` directives.
    """

    pattern: str
    params: dict[str, UrlParam] = dc.field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        for match in PARAM_PATTERN.finditer(self.pattern):
            name = match.group("param")
            if name in self.params:
                continue
            self.params[name] = UrlParam(
                name=name,
                placeholder=match.group(0),
                options=_parse_options(match.group("options")),
            )

    def has_param(self, name: str) -> bool:
        return name in self.params

    def get_option(self, param: str, option: str) -> str | None:
        found = self.params.get(param)
        if found is None:
            return None
        return found.options.get(option)

    def render(self, page: Page) -> str:
        """Return the pattern with every placeholder filled from ``page``."""
        url = self.pattern
        for param in self.params.values():
            url = url.replace(param.placeholder, self._param_value(page, param))
        return url

    def _param_value(self, page: Page, param: UrlParam) -> str:
        match param.name:
            case "id":
                return "" if page.id is None else str(page.id)
            case "slug":
                return page.url_slug
            case "date_published" | "date_modified":
                value = getattr(page, param.name)
                if value is None:
                    msg = f"Page has no {param.name} to fill URL pattern {self.pattern!r}"
                    raise UrlPatternError(msg)
                return value.strftime(param.options.get("format") or DEFAULT_DATE_FORMAT)
        msg = f"Param name {param.name} not recognised"
        raise UrlPatternError(msg)


def _parse_options(raw: str | None) -> dict[str, str]:
    options: dict[str, str] = {}
    if not raw:
        return options
    for pair in raw.split(","):
        key, sep, value = pair.partition("=")
        if sep:
            options[key.strip()] = value.strip()
    return options


__all__ = [
    "URL_PARAMS",
    "UrlParam",
    "UrlPattern",
    "UrlPatternError",
    "rewrite_base_url",
    "url_ends_with_path",
]
