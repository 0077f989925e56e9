from policy_compass.analysis.formatting import render_markdown_html


class TestRenderMarkdownHtml:
    def test_empty_text(self) -> None:
        assert render_markdown_html("   ") == ""

    def test_paragraphs(self) -> None:
        assert render_markdown_html("First\n\nSecond") == "<p>First</p><p>Second</p>"

    def test_bold_and_italic(self) -> None:
        html = render_markdown_html("**Strong** and *soft*")
        assert html == "<p><strong>Strong</strong> and <em>soft</em></p>"

    def test_headers_and_rule(self) -> None:
        html = render_markdown_html("## Summary\n### Details\n---")
        assert html == "<h2>Summary</h2><h3>Details</h3><hr />"

    def test_consecutive_bullets_share_one_list(self) -> None:
        html = render_markdown_html("Gaps:\n- MFA\n* Logging")
        assert html == "<p>Gaps:</p><ul><li>MFA</li><li>Logging</li></ul>"

    def test_escapes_markup(self) -> None:
        assert "&lt;script&gt;" in render_markdown_html("<script>")
