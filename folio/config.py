"""Build configuration for Folio.

All pipeline settings live in a single BuildConfig value that is passed to
each stage explicitly. Defaults describe the standard site layout; an
optional ``folio.yaml`` at the project root overrides any of them.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "folio.yaml"

# 14 KiB: a page this size fits in a fresh connection's initial congestion window.
DEFAULT_PAGE_BUDGET = 14 * 1024


@dataclass(frozen=True)
class BuildConfig:
    """Settings for one build run.

    Attributes:
        source_dir: Directory holding pages, assets and the service worker.
        posts_dir: Directory holding the Markdown posts.
        template_path: HTML template used for every post.
        output_dir: Build output; wiped at the start of every run.
        chunk_size: Posts per manifest chunk.
        page_budget: Maximum size of a post page in bytes.
        words_per_minute: Reading speed used for read time.
        pages: Top-level HTML pages to minify into the output.
        assets: Binary assets copied as-is.
        optional_assets: Assets that are commonly absent (favicon).
        service_worker: Service worker script, minified when present.
        headers_override: Hand-written header policy replacing the generated one.
        compression_quality: Brotli quality for precompressed siblings.
    """

    source_dir: Path = Path("src")
    posts_dir: Path = Path("src/blog")
    template_path: Path = Path("src/templates/blog-template.html")
    output_dir: Path = Path("build")
    chunk_size: int = 5
    page_budget: int = DEFAULT_PAGE_BUDGET
    words_per_minute: int = 220
    pages: tuple[str, ...] = ("index.html", "profile.html", "projects.html", "blog.html")
    assets: tuple[str, ...] = ("tiny.jpg", "normal.jpg")
    optional_assets: tuple[str, ...] = ("favicon.ico",)
    service_worker: str = "sw.js"
    headers_override: str = "_headers"
    compression_quality: int = 11

    def resolve(self, project_root: Path) -> BuildConfig:
        """Return a copy with every relative path anchored at project_root."""
        return replace(
            self,
            source_dir=project_root / self.source_dir,
            posts_dir=project_root / self.posts_dir,
            template_path=project_root / self.template_path,
            output_dir=project_root / self.output_dir,
        )


_PATH_KEYS = {"source_dir", "posts_dir", "template_path", "output_dir"}
_LIST_KEYS = {"pages", "assets", "optional_assets"}


def load_config(project_root: Path) -> BuildConfig:
    """Load build configuration from folio.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        BuildConfig with defaults applied and paths resolved against the root.

    Raises:
        ValueError: If chunk_size or page_budget is not a positive integer,
            or output_dir would wipe the project root or the sources.
    """
    config_path = project_root / CONFIG_FILENAME
    overrides: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if isinstance(loaded, dict):
            overrides = _coerce(loaded)
    config = replace(BuildConfig(), **overrides)
    if config.chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {config.chunk_size}")
    if config.page_budget < 1:
        raise ValueError(f"page_budget must be positive, got {config.page_budget}")
    resolved = config.resolve(project_root)
    check_output_dir(resolved, project_root)
    return resolved


def check_output_dir(config: BuildConfig, project_root: Path) -> None:
    """Refuse an output directory whose wipe would delete project files.

    The output directory is emptied at the start of every build, so it may
    not be the project root, an ancestor of it, or a directory holding any
    of the sources.

    Args:
        config: Configuration with resolved paths.
        project_root: Root directory of the project.

    Raises:
        ValueError: If output_dir overlaps the project root or the sources.
    """
    output_dir = config.output_dir.resolve()
    root = project_root.resolve()
    if output_dir == root or output_dir in root.parents:
        raise ValueError(f"output_dir {config.output_dir} would wipe the project root")
    for name in ("source_dir", "posts_dir", "template_path"):
        source = getattr(config, name).resolve()
        if output_dir == source or output_dir in source.parents:
            raise ValueError(f"output_dir {config.output_dir} would wipe {name} {source}")


def _coerce(loaded: dict[str, Any]) -> dict[str, Any]:
    known = {f.name for f in fields(BuildConfig)}
    result: dict[str, Any] = {}
    for key, value in loaded.items():
        if key not in known or value is None:
            continue
        if key in _PATH_KEYS:
            result[key] = Path(str(value))
        elif key in _LIST_KEYS:
            items = value if isinstance(value, list) else [value]
            result[key] = tuple(str(item) for item in items)
        elif key in {"service_worker", "headers_override"}:
            result[key] = str(value)
        else:
            result[key] = int(value)
    return result
