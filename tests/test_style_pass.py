"""
Tests for the inline style and <style> block passes.
"""

from a11y_repair.config import resolve_config
from a11y_repair.style_pass import normalize_inline_styles, normalize_style_blocks


class TestInlineStyles:
    """Tests for normalize_inline_styles."""

    def setup_method(self):
        """Set up test fixtures."""
        self.config = resolve_config()

    def test_style_rewritten(self):
        """Test absolute units are converted and width removed."""
        html, issues = normalize_inline_styles('<p style="font-size:16px;width:200px">Hi</p>', self.config)
        assert html == '<p style="font-size:1em">Hi</p>'
        assert len(issues) == 1
        assert issues[0].original_snippet == 'style="font-size:16px;width:200px"'
        assert issues[0].fixed_snippet == 'style="font-size:1em"'

    def test_single_quotes_kept(self):
        """Test the author's quote character is preserved."""
        html, _ = normalize_inline_styles("<p style='margin:8px'>x</p>", self.config)
        assert html == "<p style='margin:0.5em'>x</p>"

    def test_relative_units_untouched(self):
        """Test styles without absolute units produce no issue."""
        source = '<p style="font-size:1.2em; color:red">x</p>'
        assert normalize_inline_styles(source, self.config) == (source, [])

    def test_data_attribute_ignored(self):
        """Test data-style is not treated as a style attribute."""
        source = '<div data-style="width:10px">x</div>'
        assert normalize_inline_styles(source, self.config) == (source, [])

    def test_config_bases(self):
        """Test basePx and removeWidth come from the config."""
        config = resolve_config({'basePx': 10, 'removeWidth': False})
        html, _ = normalize_inline_styles('<div style="width:200px">x</div>', config)
        assert html == '<div style="width:20em">x</div>'


class TestStyleBlocks:
    """Tests for normalize_style_blocks."""

    def setup_method(self):
        """Set up test fixtures."""
        self.config = resolve_config()

    def test_font_size_converted(self):
        """Test font-size units are converted and the open tag kept."""
        source = '<style media="screen">p { font-size: 12pt; }</style>'
        html, issues = normalize_style_blocks(source, self.config)
        assert html == '<style media="screen">p { font-size: 1em; }</style>'
        assert len(issues) == 1
        assert issues[0].original_snippet == source

    def test_unchanged_block(self):
        """Test relative units produce no issue."""
        source = '<style>p { font-size: 1em; width: 300px; }</style>'
        assert normalize_style_blocks(source, self.config) == (source, [])

    def test_rule_disabled(self):
        """Test the pass is skipped when disabled."""
        config = resolve_config({'rules': {'disabled': ['css-style-tag']}})
        source = '<style>p { font-size: 12px; }</style>'
        assert normalize_style_blocks(source, config) == (source, [])
