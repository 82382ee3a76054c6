"""Site building functionality for Folio.

This module sequences one complete build. The output directory is wiped
first, so a build never depends on what a previous run left behind. Then,
strictly in order:

1. posts are parsed, rendered, minified and checked against the page
   budget, all in memory, and only then written to blog/<slug>/index.html;
2. the blog manifest is written;
3. pages and assets are copied;
4. HTML and JSON output is precompressed;
5. the _headers policy is written.

Any fatal error stops the run at the stage where it happened and propagates
to the caller. Missing optional files and scripts that fail to minify are
handled inside their stages and never reach this level.

Key functions:
- build_site: Main function to build the entire site.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .assets import AssetPipeline
from .budget import check_page_size
from .collections import PostCollection
from .compress import compress_outputs
from .config import BuildConfig, check_output_dir, load_config
from .content import ContentProcessor, Post
from .errors import BuildError, DuplicateSlug
from .headers import default_rules, write_headers
from .manifests import Manifest, build_manifest, write_manifest
from .minify import HtmlMinifier, MinifyOptions
from .renderers import MarkdownRenderer
from .templates import PostTemplate
from .utils import ensure_clean_dir, log_ok, log_step, size_kb

# Re-export BuildError for callers catching build failures
__all__ = ["BuildError", "BuildResult", "BuildStage", "SiteBuilder", "build_site"]


class BuildStage(enum.Enum):
    """Stages of a build, in the order they are reached."""

    CLEAN = "clean"
    POSTS_BUILT = "posts_built"
    MANIFESTS_BUILT = "manifests_built"
    ASSETS_COPIED = "assets_copied"
    COMPRESSED = "compressed"
    HEADERS_WRITTEN = "headers_written"
    DONE = "done"
    FAILED = "failed"


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        posts: Posts in manifest order (newest first).
        manifest: The blog manifest that was written.
        output_dir: Directory where the site was built.
        written: Files written, in the order they were produced.
        stage: Final stage reached.
    """

    posts: list[Post]
    manifest: Manifest
    output_dir: Path
    written: list[Path] = field(default_factory=list)
    stage: BuildStage = BuildStage.DONE


@dataclass
class RenderedPost:
    post: Post
    html: str

    @property
    def relative_path(self) -> Path:
        return Path("blog") / self.post.slug / "index.html"


class SiteBuilder:
    """Runs the build stages for one project.

    Attributes:
        config: Build configuration with resolved paths.
        stage: Last stage completed, or FAILED.
        written: Files written so far.
    """

    def __init__(
        self,
        config: BuildConfig,
        minifier: HtmlMinifier | None = None,
        renderer: MarkdownRenderer | None = None,
        now: datetime | None = None,
    ):
        self.config = config
        self.minifier = minifier or HtmlMinifier(MinifyOptions())
        self.renderer = renderer or MarkdownRenderer()
        self.now = now
        self.stage = BuildStage.CLEAN
        self.written: list[Path] = []

    def run(self) -> BuildResult:
        """Run every stage in order.

        Returns:
            BuildResult describing the finished build.

        Raises:
            BuildError: On any content, template or budget failure.
        """
        try:
            ensure_clean_dir(self.config.output_dir)
            rendered = self.build_posts()
            self.stage = BuildStage.POSTS_BUILT
            manifest = self.build_manifests([item.post for item in rendered])
            self.stage = BuildStage.MANIFESTS_BUILT
            self.written.extend(AssetPipeline(self.config, self.minifier).run())
            self.stage = BuildStage.ASSETS_COPIED
            self.written.extend(
                compress_outputs(self.config.output_dir, self.config.compression_quality)
            )
            self.stage = BuildStage.COMPRESSED
            self.written.append(
                write_headers(
                    self.config.output_dir,
                    default_rules(self.config.pages, self.config.service_worker),
                    self.config.source_dir / self.config.headers_override,
                )
            )
            self.stage = BuildStage.HEADERS_WRITTEN
        except Exception:
            self.stage = BuildStage.FAILED
            raise
        self.stage = BuildStage.DONE
        return BuildResult(
            posts=list(PostCollection(item.post for item in rendered).sorted()),
            manifest=manifest,
            output_dir=self.config.output_dir,
            written=list(self.written),
            stage=self.stage,
        )

    def build_posts(self) -> list[RenderedPost]:
        """Parse, render, minify and check every post, then write them.

        Nothing is written until every post has passed, so a failing post
        leaves no post pages behind.

        Returns:
            Rendered posts in discovery order.
        """
        log_step("Processing blog posts...")
        template = PostTemplate.load(self.config.template_path)
        processor = ContentProcessor(
            self.config.posts_dir, self.renderer, self.config.words_per_minute
        )
        rendered: list[RenderedPost] = []
        seen: dict[str, Path] = {}
        for outcome in processor.load():
            post = outcome.unwrap()
            if post.slug in seen:
                raise DuplicateSlug(post.source, post.slug, seen[post.slug])
            seen[post.slug] = post.source
            html = self.minifier.minify(template.render(post).unwrap(), post.source)
            check_page_size(html, post.source, post.title, self.config.page_budget).unwrap()
            rendered.append(RenderedPost(post, html))

        for item in rendered:
            target = self.config.output_dir / item.relative_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(item.html, encoding="utf-8")
            self.written.append(target)
            log_ok(f"blog/{item.post.slug}/ ({size_kb(item.html)}KB)")
        return rendered

    def build_manifests(self, posts: list[Post]) -> Manifest:
        log_step("Building chunked manifests...")
        manifest = build_manifest(posts, self.config.chunk_size, self.now)
        self.written.extend(write_manifest(manifest, self.config.output_dir))
        log_ok(f"{manifest.index.total_chunks} manifest chunks ({manifest.index.total_posts} posts)")
        return manifest


def build_site(
    project_root: Path,
    config: BuildConfig | None = None,
    now: datetime | None = None,
) -> BuildResult:
    """Build the entire site.

    Args:
        project_root: Root directory of the project.
        config: Resolved configuration; loaded from folio.yaml when omitted.
        now: Build timestamp recorded in the manifest index.

    Returns:
        BuildResult for the finished build.

    Raises:
        BuildError: On any fatal content, template or budget failure.
        ValueError: If the configuration is invalid or its output_dir
            would wipe the project or its sources.
    """
    if config is None:
        config = load_config(project_root)
    else:
        check_output_dir(config, project_root)
    return SiteBuilder(config, now=now).run()


