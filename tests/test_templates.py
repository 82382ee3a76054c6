from datetime import date
from pathlib import Path

import pytest
from markupsafe import Markup

from folio.budget import check_page_size
from folio.content import Post
from folio.errors import MalformedTemplate, PageTooLarge
from folio.html_utils import escape_html, render_tags, sort_class_names
from folio.templates import PostTemplate, substitute


def make_post(**overrides) -> Post:
    values = dict(
        title="Hello",
        slug="hello",
        date=date(2024, 1, 15),
        description="desc",
        lead="lead",
        tags=["python"],
        read_time=2,
        body_html="<p>Body</p>",
        source=Path("hello.md"),
    )
    values.update(overrides)
    return Post(**values)


def test_escape_html_covers_all_reserved_characters():
    escaped = escape_html("""<a href="x">Tom & Jerry's</a>""")
    assert escaped == "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#39;s&lt;/a&gt;"
    for char in "<>\"'":
        assert char not in escaped
    assert "&" not in escaped.replace("&amp;", "").replace("&lt;", "").replace(
        "&gt;", ""
    ).replace("&quot;", "").replace("&#39;", "")


def test_escape_html_ampersand_first():
    # Ampersands are escaped once; entities created for other characters stay intact.
    assert escape_html("&lt;") == "&amp;lt;"
    assert escape_html('"') == "&quot;"
    assert escape_html(None) == ""
    assert escape_html(3) == "3"


def test_render_tags():
    assert render_tags(["a", "<b>"]) == '<span class="tag">a</span><span class="tag">&lt;b&gt;</span>'
    assert render_tags([]) == ""
    assert render_tags(None) == ""
    assert isinstance(render_tags(["a"]), Markup)


def test_substitute_replaces_every_occurrence_once():
    template = "{{title}}|{{title}}|{{content}}|{{unknown}}"
    result = substitute(
        template, {"title": "A & B", "content": Markup("<p>{{title}}</p>")}
    )
    # values are never rescanned, unknown tokens stay as written
    assert result == "A &amp; B|A &amp; B|<p>{{title}}</p>|{{unknown}}"


def test_substitute_missing_values_become_empty():
    assert substitute("[{{lead}}][{{description}}]", {"lead": None}) == "[][]"


def test_post_template_renders_all_fields():
    template = PostTemplate(
        '<title>{{title}}</title><meta content="{{description}}">'
        "<time>{{date}}</time><span>{{readTime}}</span>"
        "<div>{{tags}}</div><p>{{lead}}</p>{{content}}<h1>{{title}}</h1>"
    )
    post = make_post(
        title='Quotes "and" <tags>',
        description="It's & more",
        tags=["x&y"],
        body_html="<p>Trusted <b>HTML</b></p>",
    )
    html = template.render(post).unwrap()
    assert html == (
        "<title>Quotes &quot;and&quot; &lt;tags&gt;</title>"
        '<meta content="It&#39;s &amp; more">'
        "<time>2024-01-15</time><span>2</span>"
        '<div><span class="tag">x&amp;y</span></div><p>lead</p>'
        "<p>Trusted <b>HTML</b></p>"
        "<h1>Quotes &quot;and&quot; &lt;tags&gt;</h1>"
    )


def test_post_template_empty_optional_fields():
    template = PostTemplate("{{description}}|{{lead}}|{{tags}}|{{content}}")
    html = template.render(make_post(description="", lead="", tags=[], body_html="")).unwrap()
    assert html == "|||"
    assert "undefined" not in html and "None" not in html


def test_post_template_requires_content_placeholder():
    outcome = PostTemplate("<h1>{{title}}</h1>", Path("t.html")).render(make_post())
    assert isinstance(outcome.error, MalformedTemplate)
    with pytest.raises(MalformedTemplate):
        outcome.unwrap()


def test_post_template_load(tmp_path):
    path = tmp_path / "t.html"
    path.write_text("<main>{{content}}</main>", encoding="utf-8")
    template = PostTemplate.load(path)
    assert template.path == path
    assert template.render(make_post()).unwrap() == "<main><p>Body</p></main>"


def test_check_page_size_boundary():
    limit = 14 * 1024
    assert check_page_size("a" * limit, Path("p.md"), "P").unwrap() == limit
    outcome = check_page_size("a" * (limit + 1), Path("p.md"), "P")
    assert isinstance(outcome.error, PageTooLarge)
    assert outcome.error.size == limit + 1
    assert outcome.error.limit == limit


def test_check_page_size_counts_utf8_bytes():
    # 7169 two-byte characters are 14338 bytes even though len() is 7169
    outcome = check_page_size("é" * 7169, Path("p.md"), "P")
    assert not outcome.ok


def test_page_too_large_example():
    # a 14.3KB page must be rejected
    page = "x" * int(14.3 * 1024)
    with pytest.raises(PageTooLarge) as exc:
        check_page_size(page, Path("big.md"), "Big post").unwrap()
    assert "Big post" in exc.value.message


def test_sort_class_names():
    html = '<div class="b a b"><p class=\'z y\'>x</p><i class="">'
    assert sort_class_names(html) == '<div class="a b"><p class=\'y z\'>x</p><i class="">'


def test_sort_class_names_only_touches_class_attributes():
    html = (
        '<div data-class="zebra apple zebra" x-class=\'b a\' class="d c">'
        '<pre>&lt;span class="z y"&gt; <span class="q p">raw</span></pre>'
        '<script>el.innerHTML = \'<b class="z y">\';</script>'
        '<textarea class="n m">class="z y"</textarea>'
        'text class="z y"</div>'
    )
    assert sort_class_names(html) == (
        '<div data-class="zebra apple zebra" x-class=\'b a\' class="c d">'
        '<pre>&lt;span class="z y"&gt; <span class="q p">raw</span></pre>'
        '<script>el.innerHTML = \'<b class="z y">\';</script>'
        '<textarea class="m n">class="z y"</textarea>'
        'text class="z y"</div>'
    )
