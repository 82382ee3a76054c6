"""Post template rendering for Folio.

Every post page is produced from one HTML template containing ``{{name}}``
placeholders. Rendering builds an explicit map from placeholder to value and
substitutes it in a single pass: each occurrence of a known token is
replaced, values are never rescanned, and missing values become empty
strings. Scalar values are HTML-escaped; Markup values (the rendered body and
the tag list) are inserted as-is.

Key class:
- PostTemplate: Loads the template text and renders posts with it.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path

from markupsafe import Markup

from .content import Post
from .errors import MalformedTemplate, Outcome
from .html_utils import escape_html, render_tags

PLACEHOLDERS = ("title", "description", "date", "readTime", "tags", "lead", "content")

PLACEHOLDER_RE = re.compile(r"\{\{(" + "|".join(PLACEHOLDERS) + r")\}\}")


def substitute(template: str, values: Mapping[str, object]) -> str:
    """Replace every known placeholder in template.

    Args:
        template: Template text.
        values: Placeholder name to value. Markup values are inserted raw,
            anything else is escaped; absent or None values become "".

    Returns:
        The filled-in text.
    """

    def repl(match: re.Match) -> str:
        value = values.get(match.group(1))
        if value is None:
            return ""
        if isinstance(value, Markup):
            return str(value)
        return escape_html(value)

    return PLACEHOLDER_RE.sub(repl, template)


class PostTemplate:
    """The single HTML template shared by all post pages.

    Attributes:
        text: Raw template text.
        path: Where the template was loaded from.
    """

    def __init__(self, text: str, path: Path | None = None):
        self.text = text
        self.path = path or Path("<template>")

    @classmethod
    def load(cls, path: Path) -> PostTemplate:
        return cls(path.read_text(encoding="utf-8"), path)

    def context(self, post: Post) -> dict[str, object]:
        """Build the placeholder map for a post."""
        return {
            "title": post.title,
            "description": post.description,
            "date": post.display_date,
            "readTime": post.read_time,
            "tags": render_tags(post.tags),
            "lead": post.lead,
            "content": Markup(post.body_html),
        }

    def render(self, post: Post) -> Outcome[str]:
        """Render a complete HTML document for a post.

        Args:
            post: Post to render.

        Returns:
            Outcome holding the HTML, or MalformedTemplate when the template
            has nowhere to put the post body.
        """
        if "{{content}}" not in self.text:
            return Outcome.failure(
                MalformedTemplate(self.path, "Template has no {{content}} placeholder")
            )
        return Outcome.success(substitute(self.text, self.context(post)))
