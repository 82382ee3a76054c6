"""Front-matter parsing for Folio.

A post starts with a YAML block between two ``---`` marker lines, followed
by the Markdown body. This module splits the two apart and checks the
fields every post must carry.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from .errors import MalformedDocument, MissingRequiredField

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\n(?:(?P<header>.*?)\n)?---[ \t]*(?:\n|\Z)(?P<body>.*)\Z", re.DOTALL
)

# Checked in this order; the first missing one is reported.
REQUIRED_FIELDS = ("title", "slug", "date")


def split_front_matter(text: str, source: Path) -> tuple[dict[str, Any], str]:
    """Split a document into its front-matter fields and Markdown body.

    Args:
        text: Raw file content.
        source: Path of the document, used in error messages.

    Returns:
        Tuple of (front-matter mapping, body text). The body is returned
        verbatim.

    Raises:
        MalformedDocument: If the delimited block is absent or unterminated,
            or its YAML does not parse to a mapping.
        MissingRequiredField: If title, slug or date is absent or empty.
    """
    normalized = text.lstrip("\ufeff").replace("\r\n", "\n")
    match = FRONTMATTER_RE.match(normalized)
    if not match:
        raise MalformedDocument(source, "Invalid frontmatter: expected a '---' delimited block")
    try:
        header = yaml.safe_load(match.group("header") or "")
    # PyYAML raises a bare ValueError for impossible timestamps (2024-13-45)
    except (yaml.YAMLError, ValueError) as exc:
        raise MalformedDocument(source, f"Failed to parse frontmatter: {exc}", exc) from exc
    if header is None:
        header = {}
    if not isinstance(header, dict):
        raise MalformedDocument(source, "Frontmatter must be a mapping of fields")
    for field in REQUIRED_FIELDS:
        value = header.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingRequiredField(source, field)
    return header, match.group("body")
