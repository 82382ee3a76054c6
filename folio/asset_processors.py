"""Asset processors for Folio.

The asset pass hands every file to the registry, which picks a processor
by file type: top-level pages are minified as documents, the service worker
as a script, and everything else is copied unchanged.

Key classes:
- HtmlPageProcessor: Minifies top-level HTML pages.
- ScriptProcessor: Minifies standalone JavaScript (the service worker).
- StaticAssetProcessor: Copies binary assets byte for byte.
- AssetProcessorRegistry: Picks the processor for a file.
"""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from pathlib import Path

from .minify import HtmlMinifier
from .utils import size_kb


class BaseAssetProcessor(ABC):
    """One way of turning a source file into its output file."""

    @property
    @abstractmethod
    def priority(self) -> int:
        """Order among processors accepting the same file; highest wins."""
        ...

    @abstractmethod
    def can_process(self, path: Path) -> bool:
        """Whether this processor handles files like path."""
        ...

    @abstractmethod
    def process(self, source: Path, dest: Path) -> str:
        """Write dest from source.

        Returns:
            What was written, for the build log (e.g. "index.html (3.2KB)").
        """
        ...

    def ensure_dest_dir(self, dest: Path) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)

class HtmlPageProcessor(BaseAssetProcessor):
    """Minifies an HTML page with its inline styles and scripts."""

    def __init__(self, minifier: HtmlMinifier):
        self.minifier = minifier

    @property
    def priority(self) -> int:
        return 90

    def can_process(self, path: Path) -> bool:
        return path.suffix.lower() == ".html"

    def process(self, source: Path, dest: Path) -> str:
        self.ensure_dest_dir(dest)
        minified = self.minifier.minify(source.read_text(encoding="utf-8"), source)
        dest.write_text(minified, encoding="utf-8")
        return f"{dest.name} ({size_kb(minified)}KB)"


class ScriptProcessor(BaseAssetProcessor):
    """Minifies a standalone JavaScript file.

    A script the minifier rejects is written unchanged.
    """

    def __init__(self, minifier: HtmlMinifier):
        self.minifier = minifier

    @property
    def priority(self) -> int:
        return 80

    def can_process(self, path: Path) -> bool:
        return path.suffix.lower() == ".js"

    def process(self, source: Path, dest: Path) -> str:
        self.ensure_dest_dir(dest)
        minified = self.minifier.minify_script(source.read_text(encoding="utf-8"), source)
        dest.write_text(minified, encoding="utf-8")
        return f"{dest.name} ({size_kb(minified)}KB)"


class StaticAssetProcessor(BaseAssetProcessor):
    """Copies images, icons and any other file byte for byte."""

    @property
    def priority(self) -> int:
        return 0

    def can_process(self, path: Path) -> bool:
        return True

    def process(self, source: Path, dest: Path) -> str:
        self.ensure_dest_dir(dest)
        shutil.copyfile(source, dest)
        return dest.name


class AssetProcessorRegistry:
    """Processors for the asset pass, kept highest priority first."""

    def __init__(self):
        self._processors: list[BaseAssetProcessor] = []

    def register(self, processor: BaseAssetProcessor) -> None:
        self._processors.append(processor)
        self._processors.sort(key=lambda p: p.priority, reverse=True)

    def get_processor(self, path: Path) -> BaseAssetProcessor | None:
        """Return the highest-priority processor accepting path, if any."""
        return next((p for p in self._processors if p.can_process(path)), None)

    def process(self, source: Path, dest: Path) -> str | None:
        """Write dest from source with the matching processor.

        Returns:
            The processor's log line, or None when no processor accepts
            source and nothing was written.
        """
        processor = self.get_processor(source)
        return processor.process(source, dest) if processor else None


def create_default_registry(minifier: HtmlMinifier) -> AssetProcessorRegistry:
    """Registry for a Folio site: pages, then the service worker, then copies.

    Args:
        minifier: Minifier shared by the page and script processors, so
            their script failures are collected in one place.
    """
    registry = AssetProcessorRegistry()
    registry.register(HtmlPageProcessor(minifier))
    registry.register(ScriptProcessor(minifier))
    registry.register(StaticAssetProcessor())
    return registry
