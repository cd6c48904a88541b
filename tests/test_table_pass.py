"""
Tests for the table semantics passes.
"""

from a11y_repair.config import resolve_config
from a11y_repair.table_pass import add_header_scopes, promote_row_headers


class TestPromoteRowHeaders:
    """Tests for promote_row_headers."""

    def setup_method(self):
        """Set up test fixtures."""
        self.config = resolve_config()

    def test_first_cell_promoted(self):
        """Test the first data cell becomes a row header."""
        html, issues = promote_row_headers('<tr><td>Name</td><td>Amy</td></tr>', self.config)
        assert html == '<tr><th scope="row">Name</th><td>Amy</td></tr>'
        assert len(issues) == 1
        assert issues[0].original_snippet == '<td>Name</td>'
        assert issues[0].fixed_snippet == '<th scope="row">Name</th>'
        assert issues[0].needs_manual_review is False

    def test_each_row(self):
        """Test every row is handled independently."""
        source = '<table>\n<tr><td>A</td><td>1</td></tr>\n<tr><td>B</td><td>2</td></tr>\n</table>'
        html, issues = promote_row_headers(source, self.config)
        assert html.count('<th scope="row">') == 2
        assert len(issues) == 2

    def test_empty_first_cell_skipped(self):
        """Test spacer and icon cells are not promoted."""
        for source in ('<tr><td> </td><td>Amy</td></tr>',
                       '<tr><td><img src="i.png"></td><td>Amy</td></tr>'):
            assert promote_row_headers(source, self.config) == (source, [])

    def test_row_with_header_skipped(self):
        """Test rows that already have a th are left alone."""
        source = '<tr><th>Name</th><td>Amy</td></tr>'
        assert promote_row_headers(source, self.config) == (source, [])

    def test_cell_style_normalised(self):
        """Test the promoted cell's inline style is normalised."""
        source = '<tr><td class="k" style="width:100px;font-size:12pt">Name</td></tr>'
        html, _ = promote_row_headers(source, self.config)
        assert html == '<tr><th class="k" style="font-size:1em" scope="row">Name</th></tr>'

    def test_rule_disabled(self):
        """Test the pass is skipped when disabled."""
        config = resolve_config({'rules': {'disabled': ['table-row-header']}})
        source = '<tr><td>Name</td></tr>'
        assert promote_row_headers(source, config) == (source, [])


class TestAddHeaderScopes:
    """Tests for add_header_scopes."""

    def setup_method(self):
        """Set up test fixtures."""
        self.config = resolve_config()

    def test_missing_scope(self):
        """Test scopeless headers default to col."""
        html, issues = add_header_scopes('<th>Name</th>', self.config)
        assert html == '<th scope="col">Name</th>'
        assert issues[0].rule_id == 'th-scope'
        assert issues[0].auto_fixed

    def test_empty_scope_filled(self):
        """Test an empty scope is filled in place."""
        html, _ = add_header_scopes('<th scope="">X</th>', self.config)
        assert html == '<th scope="col">X</th>'

    def test_existing_scope_kept(self):
        """Test explicit scopes are untouched."""
        source = '<th scope="row">X</th>'
        assert add_header_scopes(source, self.config) == (source, [])

    def test_thead_not_matched(self):
        """Test only th start tags are rewritten."""
        html, issues = add_header_scopes('<thead><tr><th>A</th></tr></thead>', self.config)
        assert html == '<thead><tr><th scope="col">A</th></tr></thead>'
        assert len(issues) == 1
