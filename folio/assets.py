"""Asset pass for Folio.

Copies the site's fixed set of top-level pages, images and optional files
from the source directory into the build output. Pages are minified on the
way; the service worker is minified with the JavaScript minifier; binary
assets are copied unchanged.

Nothing in this pass is required: a missing file is logged as skipped and
the build goes on without it.

Key components:
- AssetPipeline: Runs the asset pass for one build.
"""

from __future__ import annotations

from pathlib import Path

from .asset_processors import AssetProcessorRegistry, create_default_registry
from .config import BuildConfig
from .errors import OptionalAssetMissing
from .minify import HtmlMinifier
from .utils import log_ok, log_step, log_warning


class AssetPipeline:
    """Processes the static files of the site.

    Attributes:
        config: Build configuration (resolved paths).
        source_dir: Directory holding pages and assets.
        output_dir: Directory where processed files are written.
        processor_registry: Registry of asset processors.
        skipped: Files that were missing, in processing order.
    """

    def __init__(
        self,
        config: BuildConfig,
        minifier: HtmlMinifier | None = None,
        processor_registry: AssetProcessorRegistry | None = None,
    ):
        """Initialize the asset pipeline.

        Args:
            config: Build configuration with resolved paths.
            minifier: Minifier for pages and scripts.
            processor_registry: Optional custom processor registry.
        """
        self.config = config
        self.source_dir = config.source_dir
        self.output_dir = config.output_dir
        self.processor_registry = processor_registry or create_default_registry(
            minifier or HtmlMinifier()
        )
        self.skipped: list[OptionalAssetMissing] = []

    def filenames(self) -> list[str]:
        """Return every file the pass handles, in processing order."""
        return [
            *self.config.pages,
            *self.config.assets,
            *self.config.optional_assets,
            self.config.service_worker,
        ]

    def run(self) -> list[Path]:
        """Execute the asset pass.

        Returns:
            Output paths written, in processing order.
        """
        log_step("Copying and minifying files...")
        written: list[Path] = []
        for name in self.filenames():
            try:
                written.append(self._process(name))
            except OptionalAssetMissing as exc:
                self.skipped.append(exc)
                log_warning(f"Skipped {name}: {exc.message}")
        return written

    def _process(self, name: str) -> Path:
        source = self.source_dir / name
        if not source.is_file():
            raise OptionalAssetMissing(source, "not found")
        dest = self.output_dir / name
        description = self.processor_registry.process(source, dest)
        log_ok(description or name)
        return dest
