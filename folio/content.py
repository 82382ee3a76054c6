"""Content processing for Folio.

This module turns Markdown post files into validated Post objects: it
discovers the files, splits off their front-matter, coerces the fields,
renders the body and derives the read time.

Key classes:
- Post: Dataclass representing one validated blog entry.
- FileContentLoader: Discovers post files in a stable order.
- ContentProcessor: Facade producing one Outcome per discovered post.

Key functions:
- parse_post: Parse one document into an Outcome[Post].
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

from .errors import BuildError, InvalidField, Outcome
from .frontmatter import split_front_matter
from .renderers import MarkdownRenderer
from .utils import count_words, is_markdown, is_safe_slug, read_time


@dataclass
class Post:
    """Represents one validated blog post.

    Attributes:
        title: Human-readable title.
        slug: Output directory name under blog/.
        date: Publication date, used for ordering.
        description: Short description for meta tags.
        lead: Lead paragraph shown above the body.
        tags: Ordered tag names.
        read_time: Minutes to read, derived from the body word count.
        body_html: Rendered Markdown body; trusted HTML.
        source: Path of the Markdown file.
    """

    title: str
    slug: str
    date: date
    description: str = ""
    lead: str = ""
    tags: list[str] = field(default_factory=list)
    read_time: int = 0
    body_html: str = ""
    source: Path = Path()

    @property
    def display_date(self) -> str:
        return self.date.isoformat()

    def summary(self) -> dict[str, Any]:
        """Return the manifest form of the post (everything but the body)."""
        return {
            "title": self.title,
            "slug": self.slug,
            "date": self.display_date,
            "description": self.description,
            "lead": self.lead,
            "tags": list(self.tags),
            "readTime": self.read_time,
        }


def parse_post(
    text: str,
    source: Path,
    renderer: MarkdownRenderer | None = None,
    words_per_minute: int = 220,
) -> Outcome[Post]:
    """Parse a Markdown document into a Post.

    Args:
        text: Raw file content.
        source: Path of the document.
        renderer: Markdown renderer for the body.
        words_per_minute: Reading speed used for the read time.

    Returns:
        Outcome holding the Post, or the BuildError describing why the
        document was rejected.
    """
    try:
        header, body = split_front_matter(text, source)
        slug = str(header["slug"]).strip()
        if not is_safe_slug(slug):
            raise InvalidField(source, "slug", f"'{slug}' is not a safe directory name")
        post = Post(
            title=str(header["title"]).strip(),
            slug=slug,
            date=_coerce_date(header["date"], source),
            description=_text(header.get("description")),
            lead=_text(header.get("lead")),
            tags=_coerce_tags(header.get("tags"), source),
            read_time=read_time(count_words(body), words_per_minute),
            body_html=(renderer or MarkdownRenderer()).render(body),
            source=source,
        )
    except BuildError as exc:
        return Outcome.failure(exc)
    return Outcome.success(post)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _coerce_date(value: Any, source: Path) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError as exc:
        raise InvalidField(source, "date", f"'{value}' is not a YYYY-MM-DD date") from exc


def _coerce_tags(value: Any, source: Path) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (str, int, float)):
        return [str(value)]
    if isinstance(value, list):
        return [str(tag) for tag in value if tag is not None]
    raise InvalidField(source, "tags", "expected a list of strings")


class FileContentLoader:
    """Discovers post files in a directory.

    Files are returned in lexicographic filename order so that log output
    and tie-breaking in the date sort are reproducible.

    Attributes:
        posts_dir: Directory containing Markdown posts.
    """

    def __init__(self, posts_dir: Path):
        self.posts_dir = posts_dir

    def iter_files(self) -> list[Path]:
        """Return the Markdown files directly inside posts_dir, sorted by name."""
        if not self.posts_dir.exists():
            return []
        return sorted(
            (p for p in self.posts_dir.iterdir() if p.is_file() and is_markdown(p)),
            key=lambda p: p.name,
        )


class ContentProcessor:
    """Facade for loading every post in a directory.

    Attributes:
        posts_dir: Directory containing Markdown posts.
    """

    def __init__(
        self,
        posts_dir: Path,
        renderer: MarkdownRenderer | None = None,
        words_per_minute: int = 220,
        content_loader: FileContentLoader | None = None,
    ):
        self.posts_dir = posts_dir
        self.renderer = renderer or MarkdownRenderer()
        self.words_per_minute = words_per_minute
        self._content_loader = content_loader or FileContentLoader(posts_dir)

    def load(self) -> list[Outcome[Post]]:
        """Parse every discovered post.

        Returns:
            One Outcome per file, in discovery order.
        """
        outcomes: list[Outcome[Post]] = []
        for path in self._content_loader.iter_files():
            text = path.read_text(encoding="utf-8")
            outcomes.append(
                parse_post(text, path, self.renderer, self.words_per_minute)
            )
        return outcomes
