"""Tests for post HTML sanitizing utilities."""

from blogfront.utils.html import html_to_text, sanitize_post_html


# ---------------------------------------------------------------------------
# sanitize_post_html
# ---------------------------------------------------------------------------


class TestSanitizePostHtml:
    """Tests for sanitize_post_html()."""

    def test_formatting_kept(self):
        html = "<p>Hello <strong>world</strong> <em>again</em></p><ul><li>one</li></ul>"
        assert sanitize_post_html(html) == html

    def test_empty(self):
        assert sanitize_post_html("") == ""
        assert sanitize_post_html(None) == ""

    def test_script_removed_with_content(self):
        result = sanitize_post_html("<p>Hi</p><script>alert(1)</script>")
        assert "script" not in result
        assert "alert" not in result
        assert "<p>Hi</p>" in result

    def test_iframe_and_style_removed(self):
        result = sanitize_post_html('<iframe src="https://evil"></iframe><style>p{}</style><p>ok</p>')
        assert result == "<p>ok</p>"

    def test_event_handlers_removed(self):
        result = sanitize_post_html('<img src="a.png" onerror="alert(1)">')
        assert "onerror" not in result
        assert 'src="a.png"' in result

    def test_javascript_url_removed(self):
        result = sanitize_post_html('<a href="javascript:alert(1)">x</a>')
        assert "javascript" not in result
        assert ">x</a>" in result

    def test_mixed_case_scheme_removed(self):
        result = sanitize_post_html('<a href=" JaVaScRiPt:alert(1)">x</a>')
        assert "alert" not in result

    def test_data_url_removed(self):
        result = sanitize_post_html('<img src="data:text/html;base64,AAAA">')
        assert "data:" not in result

    def test_ordinary_link_kept(self):
        html = '<a href="https://example.com/post">link</a>'
        assert sanitize_post_html(html) == html

    def test_relative_and_mailto_links_kept(self):
        html = '<a href="/posts/p1">a</a><a href="mailto:me@example.com">b</a>'
        assert sanitize_post_html(html) == html

    def test_entity_encoded_whitespace_in_scheme_removed(self):
        result = sanitize_post_html('<a href="java&#9;script:alert(1)">x</a>')
        assert result == "<a>x</a>"

    def test_control_characters_in_scheme_removed(self):
        result = sanitize_post_html('<a href="&#1;java&#10;script:alert(1)">x</a>')
        assert "href" not in result

    def test_svg_animation_removed(self):
        html = '<p>a</p><svg><a><animate attributeName="href" values="javascript:alert(1)"/></a></svg>'
        result = sanitize_post_html(html)
        assert "javascript" not in result
        assert "animate" not in result
        assert result == "<p>a</p>"

    def test_math_removed(self):
        result = sanitize_post_html('<math><maction actiontype="statusline">x</maction></math><p>ok</p>')
        assert result == "<p>ok</p>"

    def test_unknown_tag_unwrapped(self):
        assert sanitize_post_html("<p><blink>hi</blink></p>") == "<p>hi</p>"

    def test_disallowed_attributes_dropped(self):
        result = sanitize_post_html('<p class="lead" style="color:red" data-x="1">a</p>')
        assert result == '<p class="lead">a</p>'

    def test_unknown_scheme_removed(self):
        result = sanitize_post_html('<img src="vbscript:msgbox(1)" alt="pic">')
        assert result == '<img alt="pic"/>'


# ---------------------------------------------------------------------------
# html_to_text
# ---------------------------------------------------------------------------


class TestHtmlToText:
    """Tests for html_to_text()."""

    def test_strips_tags_and_collapses_whitespace(self):
        assert html_to_text("<p>Hello</p>\n\n<p>  world </p>") == "Hello world"

    def test_truncates_with_ellipsis(self):
        result = html_to_text("<p>abcdefghij</p>", max_len=5)
        assert result == "abcd…"
        assert len(result) == 5

    def test_short_text_not_truncated(self):
        assert html_to_text("<b>abc</b>", max_len=10) == "abc"

    def test_empty(self):
        assert html_to_text("") == ""
