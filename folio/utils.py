"""Utility functions for Folio.

This module contains small helpers used throughout the build: output
directory lifecycle, file discovery predicates, word counting and slug
validation.

Key functions:
    ensure_clean_dir: Empty the output directory, creating it when absent.
    is_markdown: Check if a path is a Markdown file.
    count_words: Count whitespace-separated words.
    read_time: Minutes needed to read a number of words.
    is_safe_slug: Check a slug can be used as a directory name.
    size_kb: Format a byte count the way build logs show it.
    log_step / log_ok / log_warning: Console progress lines.
"""

from __future__ import annotations

import math
import re
import shutil
from pathlib import Path

import click

SLUG_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def ensure_clean_dir(path: Path) -> None:
    """Empty the build output directory, creating it when absent.

    Whatever sits at path is removed first, including a stray file of the
    same name. Removal errors propagate.

    Args:
        path: Output directory.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
    path.mkdir(parents=True)


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md extension (case-insensitive).
    """
    return path.suffix.lower() == ".md"


def count_words(text: str) -> int:
    """Count whitespace-separated words in text."""
    return len(text.split())


def read_time(words: int, words_per_minute: int = 220) -> int:
    """Return the reading time in whole minutes, rounded up.

    Examples:
        >>> read_time(440)
        2

        >>> read_time(441)
        3
    """
    return math.ceil(words / words_per_minute)


def is_safe_slug(slug: str) -> bool:
    """Check that a slug is a single, portable path segment.

    Args:
        slug: Slug taken from front-matter.

    Returns:
        True if the slug has no separators, no parent references and
        only ASCII letters, digits, dots, underscores and hyphens.
    """
    return bool(SLUG_RE.match(slug)) and ".." not in slug


def size_kb(data: str | bytes) -> str:
    """Format the UTF-8 size of data in KB with one decimal."""
    raw = data.encode("utf-8") if isinstance(data, str) else data
    return f"{len(raw) / 1024:.1f}"


def log_step(message: str) -> None:
    click.echo(f"➡️ {message}")


def log_ok(message: str) -> None:
    click.echo(f"✅ {message}")


def log_warning(message: str) -> None:
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))
