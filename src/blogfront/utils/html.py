"""HTML sanitizing utilities for author-supplied post bodies."""

import re

from bs4 import BeautifulSoup

# Elements removed together with their content
_DROPPED_TAGS = (
    "script", "style", "iframe", "frame", "frameset", "object", "embed", "applet",
    "form", "input", "button", "select", "textarea", "link", "meta", "base",
    "svg", "math", "template", "noscript",
)

# Elements kept as-is; anything else is unwrapped to its children
_ALLOWED_TAGS = {
    "p", "br", "hr", "div", "span", "strong", "b", "em", "i", "u", "s", "sub", "sup",
    "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre", "code",
    "ul", "ol", "li", "a", "img",
    "table", "thead", "tbody", "tr", "th", "td",
}

# Attributes allowed per element, "*" applies to all
_ALLOWED_ATTRS = {
    "*": {"class"},
    "a": {"href", "title"},
    "img": {"src", "alt", "title", "width", "height"},
    "td": {"colspan", "rowspan"},
    "th": {"colspan", "rowspan"},
    "ol": {"start"},
}

# Attributes that hold a URL
_URL_ATTRS = {"href", "src"}

_SAFE_SCHEMES = {"http", "https", "mailto"}

# Browsers ignore ASCII whitespace and control characters inside a URL scheme
_IGNORED_URL_CHARS_RE = re.compile(r"[\x00-\x20\x7f]+")
_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")


def _is_safe_url(value) -> bool:
    match = _SCHEME_RE.match(_IGNORED_URL_CHARS_RE.sub("", str(value)))
    return match is None or match.group(1).lower() in _SAFE_SCHEMES


def sanitize_post_html(value: str) -> str:
    """
    Reduce a post body to allow-listed markup before rendering it.

    Script-like elements are removed with their content, other unknown
    elements are unwrapped, and only allow-listed attributes survive. URL
    attributes must be relative or use http, https or mailto.

    Args:
        value: HTML produced by the post editor

    Returns:
        HTML safe to embed in a page
    """
    if not value:
        return ""
    soup = BeautifulSoup(value, "html.parser")

    for tag in soup.find_all(_DROPPED_TAGS):
        tag.decompose()

    for tag in soup.find_all(True):
        name = tag.name.lower()
        if name not in _ALLOWED_TAGS:
            tag.unwrap()
            continue
        allowed = _ALLOWED_ATTRS["*"] | _ALLOWED_ATTRS.get(name, set())
        for attr in list(tag.attrs):
            key = attr.lower()
            if key not in allowed or (key in _URL_ATTRS and not _is_safe_url(tag.attrs[attr])):
                del tag.attrs[attr]

    return str(soup)


def html_to_text(value: str, max_len: int = 0) -> str:
    """Plain-text rendering of post HTML, optionally truncated with an ellipsis."""
    if not value:
        return ""
    text = " ".join(BeautifulSoup(value, "html.parser").get_text(" ").split())
    if max_len and len(text) > max_len:
        return text[: max_len - 1].rstrip() + "…"
    return text
