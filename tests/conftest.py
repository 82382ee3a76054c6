from datetime import date
from pathlib import Path

import pytest

TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{title}}</title>
  <meta name="description" content="{{description}}">
  <style>
    body { color: red; }
  </style>
</head>
<body>
  <article>
    <h1>{{title}}</h1>
    <p class="meta">{{date}} / {{readTime}} min</p>
    <div class="tags">{{tags}}</div>
    <p class="lead">{{lead}}</p>
    {{content}}
  </article>
  <script>
    function hello() { return 1 + 1; }
  </script>
</body>
</html>
"""

PAGE = """<!DOCTYPE html>
<html>
<head>
  <title>{name}</title>
  <style>
    .hero {{ margin: 0px; }}
  </style>
</head>
<body>
  <main class="page hero">
    <h1>{name}</h1>
  </main>
</body>
</html>
"""


def post_text(
    title="Hello World",
    slug="hello-world",
    post_date=date(2024, 1, 15),
    body="Some words here.",
    **extra,
) -> str:
    lines = ["---"]
    if title is not None:
        lines.append(f"title: {title}")
    if slug is not None:
        lines.append(f"slug: {slug}")
    if post_date is not None:
        lines.append(f"date: {post_date.isoformat()}")
    for key, value in extra.items():
        lines.append(f"{key}: {value}")
    lines.append("---")
    return "\n".join(lines) + "\n" + body


@pytest.fixture
def write_post():
    def _write(project: Path, filename: str, **kwargs) -> Path:
        path = project / "src" / "blog" / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(post_text(**kwargs), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def project(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    (src / "blog").mkdir(parents=True)
    (src / "templates").mkdir()
    (src / "templates" / "blog-template.html").write_text(TEMPLATE, encoding="utf-8")
    for name in ("index", "profile", "projects", "blog"):
        (src / f"{name}.html").write_text(PAGE.format(name=name.title()), encoding="utf-8")
    (src / "tiny.jpg").write_bytes(b"\xff\xd8\xff\xe0tiny")
    (src / "normal.jpg").write_bytes(b"\xff\xd8\xff\xe0normal")
    return tmp_path
