"""HTML, CSS and JavaScript minification for Folio.

A document is minified in a fixed order: inline ``<style>`` blocks go
through csscompressor, inline JavaScript through rjsmin, class attributes
are normalised, and only then does minify-html rewrite the document
structure. minify-html's own CSS/JS minification stays disabled so that
every stylesheet and script is processed exactly once, by the minifiers
chosen here.

A script that cannot be minified is reported and left as written; the rest
of the document is still minified.

Key classes:
- MinifyOptions: Settings for the document minifier.
- HtmlMinifier: Minifies whole HTML documents and standalone scripts.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import csscompressor
import minify_html
import rjsmin

from .errors import ScriptMinifyFailure
from .html_utils import sort_class_names
from .utils import log_warning

STYLE_RE = re.compile(
    r"(?P<open><style\b[^>]*>)(?P<css>.*?)(?P<close></style\s*>)",
    re.DOTALL | re.IGNORECASE,
)
SCRIPT_RE = re.compile(
    r"(?P<open><script\b(?P<attrs>[^>]*)>)(?P<code>.*?)(?P<close></script\s*>)",
    re.DOTALL | re.IGNORECASE,
)
TYPE_ATTR_RE = re.compile(r"""\btype\s*=\s*["']?(?P<type>[^"'\s>]+)""", re.IGNORECASE)

JS_TYPES = ("", "text/javascript", "application/javascript", "module")


@dataclass(frozen=True)
class MinifyOptions:
    """Settings for HtmlMinifier.

    Attributes:
        keep_comments: Keep HTML comments.
        keep_closing_tags: Keep closing tags that HTML allows to omit.
        keep_html_and_head_opening_tags: Keep optional <html> and <head> tags.
        sort_class_names: Sort class attribute values before minifying.
        script_types: ``type`` values treated as JavaScript ("" means absent).
    """

    keep_comments: bool = False
    keep_closing_tags: bool = False
    keep_html_and_head_opening_tags: bool = False
    sort_class_names: bool = True
    script_types: tuple[str, ...] = JS_TYPES


class HtmlMinifier:
    """Minifies HTML documents together with their inline CSS and JS.

    Attributes:
        options: Minification settings.
        failures: Every script minification failure seen by this instance,
            oldest first. The list accumulates across calls; a build shares
            one minifier so the list covers the whole run.
    """

    def __init__(
        self,
        options: MinifyOptions | None = None,
        css_minifier: Callable[[str], str] = csscompressor.compress,
        js_minifier: Callable[[str], str] = rjsmin.jsmin,
    ):
        """Initialize the minifier.

        Args:
            options: Minification settings; defaults to MinifyOptions().
            css_minifier: Function minifying a stylesheet.
            js_minifier: Function minifying a script.
        """
        self.options = options or MinifyOptions()
        self.css_minifier = css_minifier
        self.js_minifier = js_minifier
        self.failures: list[ScriptMinifyFailure] = []

    def minify(self, document: str, source: Path | None = None) -> str:
        """Minify a complete HTML document.

        Args:
            document: HTML text.
            source: File the document came from, for failure reports.

        Returns:
            Minified HTML.
        """
        source = source or Path("<document>")
        html = self.minify_styles(document)
        html = self.minify_scripts(html, source)
        if self.options.sort_class_names:
            html = sort_class_names(html)
        return minify_html.minify(
            html,
            minify_css=False,
            minify_js=False,
            keep_comments=self.options.keep_comments,
            keep_closing_tags=self.options.keep_closing_tags,
            keep_html_and_head_opening_tags=self.options.keep_html_and_head_opening_tags,
        )

    def minify_styles(self, html: str) -> str:
        """Minify the contents of every <style> block."""

        def repl(match: re.Match) -> str:
            css = match.group("css")
            if not css.strip():
                return match.group(0)
            return f"{match.group('open')}{self.css_minifier(css)}{match.group('close')}"

        return STYLE_RE.sub(repl, html)

    def minify_scripts(self, html: str, source: Path) -> str:
        """Minify the contents of every inline JavaScript <script> block.

        Blocks with a non-JavaScript type (JSON-LD, templates) and blank
        blocks are left alone. A block whose minification fails keeps its
        original source.

        Args:
            html: HTML text.
            source: File the document came from.

        Returns:
            HTML with minified scripts.
        """

        def repl(match: re.Match) -> str:
            code = match.group("code")
            if not code.strip() or not self._is_javascript(match.group("attrs")):
                return match.group(0)
            minified = self.minify_script(code, source)
            return f"{match.group('open')}{minified}{match.group('close')}"

        return SCRIPT_RE.sub(repl, html)

    def minify_script(self, code: str, source: Path) -> str:
        """Minify one script, returning it unchanged if the minifier fails.

        Args:
            code: JavaScript source.
            source: File the script came from.

        Returns:
            Minified script, or the original on failure.
        """
        try:
            minified = self.js_minifier(code)
        except Exception as exc:
            failure = ScriptMinifyFailure(source, f"JS minify failed: {exc}", exc)
            self.failures.append(failure)
            log_warning(failure.message)
            return code
        return minified or code

    def _is_javascript(self, attrs: str) -> bool:
        match = TYPE_ATTR_RE.search(attrs)
        script_type = match.group("type").lower() if match else ""
        return script_type in self.options.script_types
