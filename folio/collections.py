from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from .content import Post


class PostCollection(Sequence[Post]):
    """Lightweight helper for ordering and paginating posts."""

    def __init__(self, posts: Iterable[Post]):
        self._posts = list(posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __getitem__(self, item):
        return self._posts[item]

    def sorted(self) -> PostCollection:
        """Sort posts by date, newest first.

        The sort is stable: posts sharing a date keep their discovery order.
        """
        return PostCollection(sorted(self._posts, key=lambda p: p.date, reverse=True))

    def chunks(self, size: int) -> list[PostCollection]:
        """Split the collection into consecutive groups of ``size`` posts.

        Args:
            size: Posts per group; the last group may be shorter.

        Returns:
            List of groups in collection order. Empty for an empty collection.
        """
        if size < 1:
            raise ValueError(f"chunk size must be at least 1, got {size}")
        return [
            PostCollection(self._posts[start : start + size])
            for start in range(0, len(self._posts), size)
        ]

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PostCollection({len(self._posts)} posts)"
