"""Precompression of build output for Folio.

Every HTML and JSON artifact gets a Brotli-compressed sibling named
``<file>.br`` so the hosting edge can serve it directly to clients that
accept it. The uncompressed file is kept as the fallback.
"""

from __future__ import annotations

from pathlib import Path

import brotli

COMPRESSIBLE_SUFFIXES = (".html", ".json")
COMPRESSED_SUFFIX = ".br"


def compressed_path(path: Path) -> Path:
    """Return the sibling path holding the compressed copy of path."""
    return path.with_name(path.name + COMPRESSED_SUFFIX)


def iter_compressible(output_dir: Path) -> list[Path]:
    """Return every HTML and JSON file under output_dir, sorted by path."""
    return sorted(
        p
        for p in output_dir.rglob("*")
        if p.is_file() and p.suffix.lower() in COMPRESSIBLE_SUFFIXES
    )


def compress_file(path: Path, quality: int = 11) -> Path:
    """Write a Brotli-compressed sibling of a text file (HTML or JSON).

    Args:
        path: File to compress.
        quality: Brotli quality, 0-11.

    Returns:
        Path of the compressed file.
    """
    target = compressed_path(path)
    data = path.read_bytes()
    target.write_bytes(brotli.compress(data, mode=brotli.MODE_TEXT, quality=quality))
    return target


def compress_outputs(output_dir: Path, quality: int = 11) -> list[Path]:
    """Compress every HTML and JSON artifact in the build output.

    Args:
        output_dir: Build output directory.
        quality: Brotli quality, 0-11.

    Returns:
        Paths of the compressed siblings, in source path order.
    """
    return [compress_file(path, quality) for path in iter_compressible(output_dir)]
