from datetime import date
from pathlib import Path

import pytest

from folio.content import ContentProcessor, FileContentLoader, Post, parse_post
from folio.errors import InvalidField, MalformedDocument, MissingRequiredField
from folio.frontmatter import split_front_matter

from conftest import post_text

SOURCE = Path("post.md")


def test_split_front_matter_returns_header_and_body():
    text = "---\ntitle: Hi\nslug: hi\ndate: 2024-01-15\ntags: [a, b]\n---\n# Body\n\nText\n"
    header, body = split_front_matter(text, SOURCE)
    assert header == {
        "title": "Hi",
        "slug": "hi",
        "date": date(2024, 1, 15),
        "tags": ["a", "b"],
    }
    assert body == "# Body\n\nText\n"


def test_split_front_matter_is_pure():
    text = post_text(body="Same body\n\nTwice")
    assert split_front_matter(text, SOURCE) == split_front_matter(text, SOURCE)


def test_split_front_matter_handles_crlf_and_missing_trailing_newline():
    header, body = split_front_matter("---\r\ntitle: A\r\nslug: a\r\ndate: 2024-01-01\r\n---", SOURCE)
    assert header["slug"] == "a"
    assert body == ""


@pytest.mark.parametrize(
    "text",
    [
        "title: No markers\n\nBody",
        "---\ntitle: Unterminated\nslug: x\ndate: 2024-01-01\nBody",
        "Intro line\n---\ntitle: Late\n---\nBody",
        "---\ntitle: [unclosed\n---\nBody",
        "---\n- just\n- a list\n---\nBody",
        "---\ntitle: T\nslug: t\ndate: 2024-13-45\n---\nBody",
    ],
)
def test_split_front_matter_rejects_malformed_documents(text):
    with pytest.raises(MalformedDocument):
        split_front_matter(text, SOURCE)


def test_missing_fields_reported_in_order():
    with pytest.raises(MissingRequiredField) as exc:
        split_front_matter(post_text(title=None, slug=None, post_date=None), SOURCE)
    assert exc.value.field == "title"

    with pytest.raises(MissingRequiredField) as exc:
        split_front_matter(post_text(slug=None), SOURCE)
    assert exc.value.field == "slug"

    with pytest.raises(MissingRequiredField) as exc:
        split_front_matter(post_text(slug=None, post_date=None), SOURCE)
    assert exc.value.field == "slug"
    assert "Missing required field: slug" in str(exc.value)

    with pytest.raises(MissingRequiredField) as exc:
        split_front_matter(post_text(post_date=None), SOURCE)
    assert exc.value.field == "date"


def test_empty_title_counts_as_missing():
    with pytest.raises(MissingRequiredField) as exc:
        split_front_matter('---\ntitle: ""\nslug: a\ndate: 2024-01-01\n---\n', SOURCE)
    assert exc.value.field == "title"


def test_parse_post_builds_post():
    text = post_text(
        body="# Heading\n\nHello **world** <em>raw</em>",
        description="A short one",
        lead="Lead text",
        tags="[python, web]",
        readTime=99,
    )
    outcome = parse_post(text, SOURCE)
    assert outcome.ok
    post = outcome.unwrap()
    assert post.title == "Hello World"
    assert post.slug == "hello-world"
    assert post.date == date(2024, 1, 15)
    assert post.description == "A short one"
    assert post.lead == "Lead text"
    assert post.tags == ["python", "web"]
    # readTime in front-matter is ignored; it is always derived
    assert post.read_time == 1
    assert "<h1>Heading</h1>" in post.body_html
    assert "<strong>world</strong>" in post.body_html
    assert "<em>raw</em>" in post.body_html
    assert post.source == SOURCE


def test_parse_post_defaults_optional_fields():
    post = parse_post(post_text(), SOURCE).unwrap()
    assert post.description == ""
    assert post.lead == ""
    assert post.tags == []


def test_parse_post_single_tag_becomes_list():
    post = parse_post(post_text(tags="python"), SOURCE).unwrap()
    assert post.tags == ["python"]


@pytest.mark.parametrize(
    "words, expected",
    [(0, 0), (1, 1), (220, 1), (221, 2), (440, 2), (441, 3)],
)
def test_read_time_rounds_up(words, expected):
    body = " ".join(["word"] * words)
    post = parse_post(post_text(body=body), SOURCE).unwrap()
    assert post.read_time == expected


def test_parse_post_returns_failure_instead_of_raising():
    outcome = parse_post(post_text(slug=None), SOURCE)
    assert not outcome.ok
    assert isinstance(outcome.error, MissingRequiredField)
    with pytest.raises(MissingRequiredField):
        outcome.unwrap()


@pytest.mark.parametrize("slug", ["../escape", "a/b", ".hidden", "with space"])
def test_parse_post_rejects_unsafe_slugs(slug):
    text = f"---\ntitle: T\nslug: '{slug}'\ndate: 2024-01-01\n---\nBody"
    outcome = parse_post(text, SOURCE)
    assert isinstance(outcome.error, InvalidField)
    assert outcome.error.field == "slug"


def test_parse_post_accepts_string_and_datetime_dates():
    quoted = "---\ntitle: T\nslug: t\ndate: '2024-03-09'\n---\nBody"
    assert parse_post(quoted, SOURCE).unwrap().date == date(2024, 3, 9)
    timestamp = "---\ntitle: T\nslug: t\ndate: 2024-03-09 10:30:00\n---\nBody"
    assert parse_post(timestamp, SOURCE).unwrap().date == date(2024, 3, 9)


def test_parse_post_rejects_bad_dates():
    text = "---\ntitle: T\nslug: t\ndate: next tuesday\n---\nBody"
    outcome = parse_post(text, SOURCE)
    assert isinstance(outcome.error, InvalidField)
    assert outcome.error.field == "date"


def test_parse_post_impossible_yaml_date_is_a_failed_outcome():
    outcome = parse_post("---\ntitle: T\nslug: t\ndate: 2024-13-45\n---\nBody", SOURCE)
    assert not outcome.ok
    assert isinstance(outcome.error, MalformedDocument)
    assert outcome.error.source_path == SOURCE
    assert isinstance(outcome.error.original_error, ValueError)


def test_code_blocks_are_highlighted_or_escaped():
    body = "```python\nprint('hi')\n```\n\n```nosuchlang\n<b>x</b>\n```\n"
    post = parse_post(post_text(body=body), SOURCE).unwrap()
    assert 'class="highlight"' in post.body_html
    assert '<code class="language-nosuchlang">&lt;b&gt;x&lt;/b&gt;' in post.body_html


def test_post_summary_omits_body():
    post = Post(
        title="T",
        slug="t",
        date=date(2024, 2, 1),
        tags=["x"],
        read_time=3,
        body_html="<p>long</p>",
    )
    assert post.summary() == {
        "title": "T",
        "slug": "t",
        "date": "2024-02-01",
        "description": "",
        "lead": "",
        "tags": ["x"],
        "readTime": 3,
    }


def test_loader_discovers_markdown_in_filename_order(project, write_post):
    posts_dir = project / "src" / "blog"
    write_post(project, "b.md", slug="b")
    write_post(project, "a.md", slug="a")
    write_post(project, "c.MD", slug="c")
    (posts_dir / "notes.txt").write_text("ignore", encoding="utf-8")
    (posts_dir / "nested").mkdir()
    (posts_dir / "nested" / "d.md").write_text(post_text(slug="d"), encoding="utf-8")

    names = [p.name for p in FileContentLoader(posts_dir).iter_files()]
    assert names == ["a.md", "b.md", "c.MD"]

    outcomes = ContentProcessor(posts_dir).load()
    assert [o.unwrap().slug for o in outcomes] == ["a", "b", "c"]


def test_loader_missing_directory_yields_nothing(tmp_path):
    assert FileContentLoader(tmp_path / "missing").iter_files() == []
