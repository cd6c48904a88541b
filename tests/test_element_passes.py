"""
Tests for the frame title and image alt passes.
"""

from a11y_repair.config import resolve_config
from a11y_repair.element_passes import repair_frame_titles, repair_image_alts


class TestFrameTitles:
    """Tests for repair_frame_titles."""

    def setup_method(self):
        """Set up test fixtures."""
        self.config = resolve_config()

    def test_missing_title(self):
        """Test iframe without title gets the placeholder."""
        html, issues = repair_frame_titles('<iframe src="/map"></iframe>', self.config)
        assert html == '<iframe src="/map" title="（請補上頁框標題）"></iframe>'
        assert len(issues) == 1
        assert issues[0].rule_id == 'frame-title'
        assert issues[0].auto_fixed
        assert issues[0].needs_manual_review
        assert issues[0].original_snippet == '<iframe src="/map">'

    def test_empty_title_and_frame(self):
        """Test empty titles on frame elements are filled."""
        html, issues = repair_frame_titles('<FRAME src="a.html" title=" ">', self.config)
        assert html == '<FRAME src="a.html" title="（請補上頁框標題）">'
        assert len(issues) == 1

    def test_existing_title_kept(self):
        """Test a titled iframe is untouched."""
        source = '<iframe src="/v" title="影片播放器"></iframe>'
        assert repair_frame_titles(source, self.config) == (source, [])

    def test_concrete_placeholder_needs_no_review(self):
        """Test caller-supplied wording is not flagged for review."""
        config = resolve_config({'placeholders': {'iframeTitle': '地圖'}})
        html, issues = repair_frame_titles('<iframe src="/map"></iframe>', config)
        assert 'title="地圖"' in html
        assert issues[0].needs_manual_review is False

    def test_rule_disabled(self):
        """Test the pass is skipped when disabled."""
        config = resolve_config({'rules': {'disabled': ['frame-title']}})
        source = '<iframe src="/map"></iframe>'
        assert repair_frame_titles(source, config) == (source, [])


class TestImageAlts:
    """Tests for repair_image_alts."""

    def setup_method(self):
        """Set up test fixtures."""
        self.config = resolve_config()

    def test_missing_alt(self):
        """Test img without alt gets the placeholder."""
        html, issues = repair_image_alts('<p><img src="logo.png"></p>', self.config)
        assert html == '<p><img src="logo.png" alt="（請補上圖片替代文字）"></p>'
        assert len(issues) == 1
        assert issues[0].needs_manual_review

    def test_decorative_alt_kept(self):
        """Test alt="" is a valid decorative marker."""
        source = '<img src="line.png" alt="">'
        assert repair_image_alts(source, self.config) == (source, [])

    def test_existing_alt_kept(self):
        """Test descriptive alt is untouched."""
        source = '<img src="logo.png" alt="公司標誌" />'
        assert repair_image_alts(source, self.config) == (source, [])

    def test_each_image_reported(self):
        """Test every image missing alt yields its own issue."""
        html, issues = repair_image_alts('<img src="a.png"><img src="b.png">', self.config)
        assert html.count('alt="（請補上圖片替代文字）"') == 2
        assert [issue.original_snippet for issue in issues] == ['<img src="a.png">', '<img src="b.png">']
