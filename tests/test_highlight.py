"""Tests for render-time highlighting."""

from sda.client.highlight import highlight_auto


class TestHighlightAuto:
    def test_empty_text(self) -> None:
        assert highlight_auto("") == ""

    def test_code_gets_token_markup(self) -> None:
        html = highlight_auto("#!/usr/bin/env python\nimport os\nprint(os.getcwd())\n")
        assert "<span" in html
        assert "import" in html

    def test_markup_is_escaped(self) -> None:
        html = highlight_auto("Use <script> tags carefully & wisely.")
        assert "<script>" not in html
        assert "&lt;" in html
        assert "&amp;" in html

    def test_plain_prose_keeps_words(self) -> None:
        text = "The function is fine but could use a docstring."
        html = highlight_auto(text)
        for word in ("function", "docstring"):
            assert word in html

    def test_deterministic(self) -> None:
        text = "for i in range(3):\n    print(i)\n"
        assert highlight_auto(text) == highlight_auto(text)
