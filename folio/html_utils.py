"""HTML utility functions for Folio.

This module provides HTML string helpers used by the template and the
minifier.

Functions:
    escape_html: Escape the five reserved HTML characters.
    render_tags: Render a tag list as inline tag markers.
    sort_class_names: Sort the tokens of every class attribute.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from markupsafe import Markup

# Only a standalone ``class`` attribute; ``data-class`` and friends are left alone.
_CLASS_ATTR_RE = re.compile(
    r'(?<=\s)(?P<prefix>class\s*=\s*)(?:"(?P<dq>[^"]*)"|\'(?P<sq>[^\']*)\')',
    re.IGNORECASE,
)

# Start tags (and end tags) outside of raw-text elements.
_TAG_RE = re.compile(r"<[A-Za-z][^>]*>")

# Elements whose content is never markup for our purposes.
_RAW_TEXT_RE = re.compile(
    r"(?P<open><(?P<tag>script|style|pre|textarea)\b[^>]*>)(?P<body>.*?)(?P<close></(?P=tag)\s*>)",
    re.DOTALL | re.IGNORECASE,
)


def escape_html(value: object) -> str:
    """Escape special HTML characters in a value.

    Converts the following characters to their HTML entity equivalents,
    ampersand first so the entities introduced afterwards stay intact:
    - & becomes &amp;
    - " becomes &quot;
    - ' becomes &#39;
    - < becomes &lt;
    - > becomes &gt;

    Args:
        value: The value to escape. None becomes an empty string.

    Returns:
        The escaped string, safe for HTML text and attribute contexts.

    Examples:
        >>> escape_html('<b class="x">Tom & Jerry</b>')
        '&lt;b class=&quot;x&quot;&gt;Tom &amp; Jerry&lt;/b&gt;'
    """
    if value is None:
        return ""
    return (
        str(value)
        .replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def render_tags(tags: Iterable[str] | None) -> Markup:
    """Render tags as a run of ``<span class="tag">`` markers.

    Args:
        tags: Tag names; None or empty renders nothing.

    Returns:
        Markup-safe HTML with every tag escaped independently.
    """
    if not tags:
        return Markup("")
    return Markup(
        "".join(f'<span class="tag">{escape_html(tag)}</span>' for tag in tags)
    )


def sort_class_names(html: str) -> str:
    """Sort and de-duplicate the class names of every class attribute.

    Identical class lists spelled in different orders compress better once
    they are spelled the same way. Only ``class`` attributes inside tags are
    touched: the content of ``<script>``, ``<style>``, ``<pre>`` and
    ``<textarea>`` elements and ordinary text are kept as written.

    Args:
        html: HTML document.

    Returns:
        HTML with normalised class attributes.

    Examples:
        >>> sort_class_names('<p class="b a" data-class="y x">class="b a"</p>')
        '<p class="a b" data-class="y x">class="b a"</p>'
    """
    parts: list[str] = []
    pos = 0
    for match in _RAW_TEXT_RE.finditer(html):
        parts.append(_TAG_RE.sub(_sort_tag, html[pos : match.start()]))
        parts.append(_sort_tag(match.group("open")))
        parts.append(match.group("body"))
        parts.append(match.group("close"))
        pos = match.end()
    parts.append(_TAG_RE.sub(_sort_tag, html[pos:]))
    return "".join(parts)


def _sort_tag(tag: re.Match | str) -> str:
    text = tag if isinstance(tag, str) else tag.group(0)
    return _CLASS_ATTR_RE.sub(_sort_attr, text)


def _sort_attr(match: re.Match) -> str:
    quote = '"' if match.group("dq") is not None else "'"
    value = match.group("dq") if quote == '"' else match.group("sq")
    names = sorted(set(value.split()))
    return f"{match.group('prefix')}{quote}{' '.join(names)}{quote}"
