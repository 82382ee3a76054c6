"""Blog manifest generation for Folio.

The blog index page loads its post list lazily from JSON: one file per
fixed-size chunk of the date-sorted posts plus an index summary. Each chunk
repeats the totals, so a client that fetches only ``chunk_3.json`` still
knows where it sits in the whole.

Output layout::

    blog/manifests/chunk_1.json   {"chunk":1,"totalChunks":..,"posts":[..],"totalPosts":..}
    blog/manifests/chunk_N.json
    blog/manifests/index.json     {"totalPosts":..,"totalChunks":..,"postsPerChunk":..,"lastUpdated":..}
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .collections import PostCollection
from .content import Post

MANIFESTS_PATH = Path("blog") / "manifests"


@dataclass(frozen=True)
class ManifestChunk:
    """One page of the blog manifest.

    Attributes:
        chunk_number: 1-based position of the chunk.
        total_chunks: Number of chunks in the manifest.
        posts: Post summaries in this chunk, newest first.
        total_posts: Number of posts in the manifest.
    """

    chunk_number: int
    total_chunks: int
    posts: tuple[dict[str, Any], ...]
    total_posts: int

    @property
    def filename(self) -> str:
        return f"chunk_{self.chunk_number}.json"

    def to_json(self) -> dict[str, Any]:
        return {
            "chunk": self.chunk_number,
            "totalChunks": self.total_chunks,
            "posts": list(self.posts),
            "totalPosts": self.total_posts,
        }


@dataclass(frozen=True)
class ManifestIndex:
    """Summary of the whole manifest."""

    total_posts: int
    total_chunks: int
    posts_per_chunk: int
    last_updated: datetime

    def to_json(self) -> dict[str, Any]:
        return {
            "totalPosts": self.total_posts,
            "totalChunks": self.total_chunks,
            "postsPerChunk": self.posts_per_chunk,
            "lastUpdated": _iso_timestamp(self.last_updated),
        }


@dataclass(frozen=True)
class Manifest:
    chunks: tuple[ManifestChunk, ...]
    index: ManifestIndex


def build_manifest(
    posts: Iterable[Post], chunk_size: int = 5, now: datetime | None = None
) -> Manifest:
    """Partition posts into manifest chunks.

    Args:
        posts: Posts in discovery order; they are sorted newest first here.
        chunk_size: Posts per chunk.
        now: Build timestamp; defaults to the current UTC time.

    Returns:
        Manifest with contiguous chunks numbered from 1 and its index.

    Raises:
        ValueError: If chunk_size is less than 1.
    """
    ordered = PostCollection(posts).sorted()
    groups = ordered.chunks(chunk_size)
    total_posts = len(ordered)
    total_chunks = math.ceil(total_posts / chunk_size)
    chunks = tuple(
        ManifestChunk(
            chunk_number=number,
            total_chunks=total_chunks,
            posts=tuple(post.summary() for post in group),
            total_posts=total_posts,
        )
        for number, group in enumerate(groups, start=1)
    )
    index = ManifestIndex(
        total_posts=total_posts,
        total_chunks=total_chunks,
        posts_per_chunk=chunk_size,
        last_updated=now or datetime.now(timezone.utc),
    )
    return Manifest(chunks=chunks, index=index)


def write_manifest(manifest: Manifest, output_dir: Path) -> list[Path]:
    """Write chunk files and the index under blog/manifests/.

    Args:
        manifest: Manifest to write.
        output_dir: Build output directory.

    Returns:
        Paths written, chunks first in order, then index.json.
    """
    target = output_dir / MANIFESTS_PATH
    target.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for chunk in manifest.chunks:
        path = target / chunk.filename
        _write_json(path, chunk.to_json())
        written.append(path)
    index_path = target / "index.json"
    _write_json(index_path, manifest.index.to_json())
    written.append(index_path)
    return written


def _write_json(path: Path, payload: dict[str, Any]) -> None:
    path.write_text(
        json.dumps(payload, ensure_ascii=False, separators=(",", ":")),
        encoding="utf-8",
    )


def _iso_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
