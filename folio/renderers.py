"""Markdown rendering for Folio.

Post bodies are rendered with mistune. Raw HTML in a post is passed through
untouched: posts come from the site's own repository, so their HTML is
trusted and never re-escaped downstream.

Key classes:
- MarkdownRenderer: Renders a post body to HTML.
"""

from __future__ import annotations

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound


class _HighlightRenderer(mistune.HTMLRenderer):
    """HTML renderer with Pygments highlighting for fenced code blocks."""

    def __init__(self):
        super().__init__(escape=False)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'javascript').

        Returns:
            HTML string with highlighted code, or a plain escaped block when
            the language is unknown.
        """
        lang = info.split()[0] if info and info.strip() else ""
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{lang}"' if lang else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


class MarkdownRenderer:
    """Renders Markdown post bodies to HTML."""

    plugins = ("strikethrough", "footnotes", "table", "url")

    def render(self, markdown: str) -> str:
        """Render Markdown content to HTML.

        Args:
            markdown: Markdown source of the post body.

        Returns:
            Rendered HTML.
        """
        parser = mistune.create_markdown(
            renderer=_HighlightRenderer(), plugins=list(self.plugins)
        )
        return parser(markdown)
