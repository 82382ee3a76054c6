"""Cache and security header policy for Folio.

The hosting edge reads a ``_headers`` file at the root of the output: each
rule is a URL pattern on its own line followed by indented ``Name: value``
lines, and rules are separated by blank lines. The rule set is fixed; only
the prefetch hints depend on which top-level pages the site has.

If the sources contain a hand-written ``_headers`` file, it is copied instead
of the generated one.
"""

from __future__ import annotations

import shutil
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

HEADERS_FILENAME = "_headers"

ONE_YEAR = 31536000
IMMUTABLE = f"public, max-age={ONE_YEAR}, immutable"
NO_CACHE = "no-cache"

SECURITY_HEADERS: tuple[tuple[str, str], ...] = (
    ("X-Content-Type-Options", "nosniff"),
    ("X-Frame-Options", "DENY"),
    ("Strict-Transport-Security", f"max-age={ONE_YEAR}; includeSubDomains; preload"),
    ("Referrer-Policy", "strict-origin-when-cross-origin"),
    ("Permissions-Policy", "camera=(), microphone=(), geolocation=(), interest-cohort=()"),
)

IMAGE_PATTERNS = ("/*.jpg", "/*.jpeg", "/*.png", "/*.webp", "/*.svg", "/*.ico")


@dataclass(frozen=True)
class HeaderRule:
    """Headers applied to every URL matching a pattern.

    Attributes:
        pattern: URL path pattern, ``*`` matching any run of characters.
        headers: Header name/value pairs, in output order. Names may repeat.
    """

    pattern: str
    headers: tuple[tuple[str, str], ...]

    def render(self) -> str:
        lines = [self.pattern]
        lines.extend(f"  {name}: {value}" for name, value in self.headers)
        return "\n".join(lines)


def default_rules(
    pages: Sequence[str] = ("index.html", "profile.html", "projects.html", "blog.html"),
    service_worker: str = "sw.js",
) -> list[HeaderRule]:
    """Build the fixed header policy.

    Args:
        pages: Top-level pages; every page but index.html gets a prefetch
            hint from the home page.
        service_worker: Service worker filename, never cached.

    Returns:
        Rules in output order.
    """
    prefetch = tuple(
        ("Link", f"</{page}>; rel=prefetch") for page in pages if page != "index.html"
    )
    home = (("Cache-Control", IMMUTABLE),) + prefetch
    rules = [
        HeaderRule("/*", SECURITY_HEADERS),
        HeaderRule("/", home),
        HeaderRule("/index.html", home),
        HeaderRule("/blog.html", (("Cache-Control", NO_CACHE),)),
        HeaderRule(
            "/blog/manifests/*",
            (("Cache-Control", "public, max-age=300, s-maxage=900"),),
        ),
        HeaderRule("/blog/*", (("Cache-Control", f"public, max-age={ONE_YEAR}"),)),
    ]
    rules.extend(HeaderRule(pattern, (("Cache-Control", IMMUTABLE),)) for pattern in IMAGE_PATTERNS)
    rules.append(HeaderRule(f"/{service_worker}", (("Cache-Control", NO_CACHE),)))
    return rules


def render_headers(rules: Iterable[HeaderRule]) -> str:
    """Render rules as the text of a _headers file."""
    return "\n\n".join(rule.render() for rule in rules) + "\n"


def write_headers(
    output_dir: Path,
    rules: Iterable[HeaderRule],
    override: Path | None = None,
) -> Path:
    """Write the _headers file into the output directory.

    Args:
        output_dir: Build output directory.
        rules: Generated policy.
        override: Hand-written policy; copied verbatim when it exists.

    Returns:
        Path of the written file.
    """
    target = output_dir / HEADERS_FILENAME
    if override is not None and override.is_file():
        shutil.copyfile(override, target)
    else:
        target.write_text(render_headers(rules), encoding="utf-8")
    return target
