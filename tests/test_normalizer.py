"""Tests for markup normalization."""

import logging

import pytest
from readpull.dom.normalizer import MarkupNormalizer
from readpull.models.config import DEFAULT_ALLOWED_ATTRIBUTES, NormalizerConfig

URL = "https://example.com/some/page"
SUFFIX = " (truncated...)"


@pytest.fixture
def normalizer():
    """Normalizer with default configuration."""
    return MarkupNormalizer()


class TestScopingAndRemoval:
    """Tests for body scoping and element removal."""

    def test_scopes_to_body_when_present(self, normalizer):
        """Test only the body contents survive."""
        html = "<html><head><title>T</title></head><body><div id=\"x\">ok</div></body></html>"

        document = normalizer.normalize(html, URL)

        assert str(document) == '<div id="x">ok</div>'

    def test_uses_whole_fragment_without_body(self, normalizer):
        """Test fragments are normalized as a whole."""
        document = normalizer.normalize('<div id="a">one</div><div id="b">two</div>')

        assert str(document) == '<div id="a">one</div><div id="b">two</div>'

    def test_removes_non_visual_elements(self, normalizer):
        """Test scripts, styles, links, frames and metadata are removed."""
        html = (
            "<div><script>1</script><style>.a{}</style><link rel=\"preload\" href=\"#\">"
            "<iframe></iframe><embed/><object></object><meta charset=\"utf-8\"><p>k</p></div>"
        )

        out = str(normalizer.normalize(html, URL))

        assert "<p>k</p>" in out
        for tag in ("<script", "<style", "<link", "<iframe", "<embed", "<object", "<meta"):
            assert tag not in out

    def test_removes_media_elements(self, normalizer):
        """Test svg, canvas, video, audio, picture, source and track are removed."""
        html = (
            "<div><svg><path d=\"M0\"></path></svg><canvas></canvas>"
            "<video src=\"v.mp4\"></video><audio src=\"a.mp3\"></audio>"
            "<picture><source srcset=\"i.jpg\"></picture><track><p>keep</p></div>"
        )

        out = str(normalizer.normalize(html, URL))

        assert "<p>keep</p>" in out
        for tag in ("<svg", "<path", "<canvas", "<video", "<audio", "<picture", "<source", "<track"):
            assert tag not in out

    def test_removes_comments(self, normalizer):
        """Test HTML comments are removed at any depth."""
        html = "<div><!-- comment --><p>keep<!-- nested --></p><!-- another --></div>"

        out = str(normalizer.normalize(html, URL))

        assert "<p>keep</p>" in out
        assert "<!--" not in out

    def test_decodes_entities_before_parsing(self, normalizer):
        """Test entity-encoded tags become real elements."""
        html = "&#x3C;div id=\"x\"&#x3E;hi&amp;lo&#x3C;/div&#x3E;"

        document = normalizer.normalize(html, URL)

        element = document.select_one("#x")
        assert element is not None
        assert element.get_text() == "hi&lo"

    def test_escaped_quote_ends_attribute_value(self, normalizer):
        """Test entities are decoded before parsing, attribute values included."""
        document = normalizer.normalize('<p title="say &quot;hi&quot;">x</p>', URL)

        assert document.p["title"] == "say "

    @pytest.mark.parametrize(
        "html",
        ["", "<div><p>unclosed <span>text", "</div></div>", "<<<>>>", "<p id='x'>&bogus; &#xZZ;</p>"],
    )
    def test_malformed_markup_never_raises(self, normalizer, html):
        """Test parsing is tolerant."""
        normalizer.normalize(html, URL)


class TestTextTruncation:
    """Tests for long text node truncation."""

    def test_truncates_long_text(self, normalizer):
        """Test text over the limit is cut and marked."""
        document = normalizer.normalize(f"<div>{'x' * 121}</div>", URL)

        assert document.div.string == "x" * 120 + SUFFIX

    def test_text_at_limit_is_untouched(self, normalizer):
        """Test text of exactly the limit is kept as is."""
        text = "x" * 120

        out = str(normalizer.normalize(f"<div>{text}</div>", URL))

        assert text in out
        assert SUFFIX not in out

    def test_custom_text_limit(self):
        """Test the limit comes from config."""
        normalizer = MarkupNormalizer(NormalizerConfig(max_text_length=5))

        document = normalizer.normalize("<p>abcdefgh</p>")

        assert document.p.string == "abcde" + SUFFIX


class TestAttributes:
    """Tests for attribute filtering and gibberish removal."""

    def test_strips_non_allowed_attributes(self, normalizer):
        """Test only allow-listed and data-* attributes survive."""
        html = '<img id="i" class="c" src="/a.png" width="100" height="100" data-x="y" onclick="js()" alt="z" />'

        document = normalizer.normalize(html, URL)

        assert set(document.img.attrs) == {"id", "class", "src", "data-x", "alt"}

    def test_surviving_attributes_are_allowed(self, normalizer, article_html):
        """Test every remaining attribute is allowed."""
        html = article_html.replace(
            '<div class="main">',
            '<div class="main" style="color: red" aria-label="x" role="main" tabindex="0">',
        )

        document = normalizer.normalize(html, URL)

        for tag in document.find_all(True):
            for attr in tag.attrs:
                assert attr in DEFAULT_ALLOWED_ATTRIBUTES or attr.startswith("data-")

    def test_drops_gibberish_identifiers(self, normalizer):
        """Test generated id, class tokens and data values are dropped."""
        html = (
            '<div id="TccjmKV6RraCaCw5L9gd" class="container css-1x2y3z4 btn-primary" '
            'data-key="53b1224c-588a-439a-8495-772814379478" data-role="header">text</div>'
        )

        div = normalizer.normalize(html, URL).div

        assert "id" not in div.attrs
        assert div["class"] == ["container", "btn-primary"]
        assert "data-key" not in div.attrs
        assert div["data-role"] == "header"

    def test_drops_class_when_every_token_is_gibberish(self, normalizer):
        """Test class attribute removal when nothing survives."""
        html = '<div id="wrap"><span class="elementor-element-8ae8848 a1b2c3d4">t</span></div>'

        span = normalizer.normalize(html, URL).span

        assert span is not None
        assert "class" not in span.attrs

    def test_keeps_gibberish_when_disabled(self):
        """Test gibberish filtering can be switched off."""
        normalizer = MarkupNormalizer(NormalizerConfig(drop_gibberish_identifiers=False))

        div = normalizer.normalize('<div id="TccjmKV6RraCaCw5L9gd">x</div>').div

        assert div["id"] == "TccjmKV6RraCaCw5L9gd"

    def test_truncates_long_attributes_except_id_and_class(self, normalizer):
        """Test attribute values are cut to exactly the limit."""
        long = "x" * 120
        html = f'<div id="ok" class="keep" title="{long}" data-x="{long}">c</div>'

        div = normalizer.normalize(html, URL).div

        expected = "x" * (100 - len(SUFFIX)) + SUFFIX
        assert div["title"] == expected
        assert div["data-x"] == expected
        assert len(expected) == 100
        assert div["id"] == "ok"
        assert div["class"] == ["keep"]

    def test_long_id_is_not_truncated(self, normalizer):
        """Test id values are exempt from truncation."""
        div = normalizer.normalize(f'<div id="{"x" * 150}">c</div>').div

        assert div["id"] == "x" * 150

    def test_attribute_at_limit_is_untouched(self, normalizer):
        """Test a value of exactly the limit is kept as is."""
        value = "x" * 100

        div = normalizer.normalize(f'<div title="{value}" data-x="{value}">k</div>', URL).div

        assert div["title"] == value
        assert div["data-x"] == value


class TestPruning:
    """Tests for empty element pruning."""

    def test_prunes_empty_elements_and_cascades(self, normalizer):
        """Test newly emptied parents are removed too."""
        document = normalizer.normalize('<div id="wrap"><div><span></span></div><p>keep</p></div>', URL)

        assert document.select("div#wrap > div") == []
        assert len(document.select("div#wrap > p")) == 1

    def test_prunes_elements_emptied_by_identifier_removal(self, normalizer):
        """Test an element whose only attribute was gibberish is pruned."""
        document = normalizer.normalize('<div id="wrap"><i class="a8f3e9c1d2"></i></div>')

        assert str(document) == '<div id="wrap"></div>'

    def test_pruning_is_idempotent(self, normalizer, article_html):
        """Test pruning normalized output changes nothing."""
        document = normalizer.normalize(article_html, URL)
        before = str(document)

        MarkupNormalizer.prune_empty_elements(document)

        assert str(document) == before


class TestUrlRewriting:
    """Tests for same-host URL rewriting."""

    def test_rewrites_same_host_urls(self, normalizer):
        """Test same-host absolute URLs become host-relative and others stay."""
        html = (
            "<div>"
            '<a id="a1" href="https://example.com/x?y=1#z">A</a>'
            '<img id="im1" src="//example.com/img.png" alt="i"/>'
            '<a id="a2" href="https://other.com/b">B</a>'
            '<a id="a3" href="/already">C</a>'
            '<a id="a4" href="//cdn.other.com/lib.js">D</a>'
            "</div>"
        )

        document = normalizer.normalize(html, URL)

        assert document.select_one("#a1")["href"] == "/x?y=1#z"
        assert document.select_one("#im1")["src"] == "/img.png"
        assert document.select_one("#a2")["href"] == "https://other.com/b"
        assert document.select_one("#a3")["href"] == "/already"
        assert document.select_one("#a4")["href"] == "//cdn.other.com/lib.js"

    def test_rewrites_form_action(self, normalizer):
        """Test form actions are rewritten like links."""
        document = normalizer.normalize('<form action="https://example.com/submit?a=1#z"><input></form>', URL)

        assert document.form["action"] == "/submit?a=1#z"

    def test_bare_host_becomes_root(self, normalizer):
        """Test a URL without a path becomes '/'."""
        document = normalizer.normalize('<a id="home" href="https://example.com">Home</a>', URL)

        assert document.a["href"] == "/"

    def test_invalid_page_url_skips_rewriting(self, normalizer, caplog):
        """Test an unparseable page URL leaves every URL alone."""
        html = '<a href="https://example.com/x">x</a><img src="https://example.com/i.png" alt="i">'

        with caplog.at_level(logging.WARNING, logger="readpull"):
            document = normalizer.normalize(html, "not a valid url")

        assert document.a["href"] == "https://example.com/x"
        assert document.img["src"] == "https://example.com/i.png"
        assert "Skipping URL rewriting" in caplog.text

    def test_no_page_url_skips_rewriting(self, normalizer):
        """Test rewriting needs a page URL."""
        document = normalizer.normalize('<a href="https://example.com/x">x</a>')

        assert document.a["href"] == "https://example.com/x"


class TestDeterminism:
    """Tests for repeatable output."""

    def test_same_input_same_output(self, normalizer, article_html):
        """Test normalization is deterministic."""
        assert str(normalizer.normalize(article_html, URL)) == str(normalizer.normalize(article_html, URL))

    def test_article_page(self, normalizer, article_html):
        """Test a realistic page end to end."""
        document = normalizer.normalize(article_html, URL)
        out = str(document)

        assert "<title>" not in out
        assert "<script" not in out
        assert document.select_one("#p")["class"] == ["article"]
        assert document.select_one("#s a")["href"] == "/main"
