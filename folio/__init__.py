"""Folio site builder.

This package turns a directory of Markdown blog posts into a pre-built,
minified and precompressed static site. Every post is rendered from a single
HTML template, the blog index is served from a paginated JSON manifest, and a
cache/security header policy is written for the hosting edge.

The main entry point is the CLI module, which runs one full build of the
project in the current directory.

Pipeline stages, in order:
- frontmatter / renderers: parse and render each post.
- templates / budget: fill the post template and enforce the page budget.
- manifests: partition the sorted posts into JSON chunks.
- assets / minify / compress: ship pages, assets and precompressed siblings.
- headers: emit the `_headers` cache policy.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
