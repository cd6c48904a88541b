"""
Tests for the command-line interface.
"""

import io
import json

from a11y_repair.cli import EXIT_NEEDS_REVIEW, main, parse_args


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test default option values."""
        parsed = parse_args(['page.html'])
        assert parsed.input == 'page.html'
        assert parsed.output is None
        assert parsed.format == 'text'
        assert parsed.strict is False

    def test_options(self):
        """Test option parsing."""
        parsed = parse_args(['-', '-o', 'out.html', '-f', 'json', '--strict', '--config-json', '{}'])
        assert parsed.input == '-'
        assert parsed.output == 'out.html'
        assert parsed.format == 'json'
        assert parsed.strict is True
        assert parsed.config_json == '{}'


class TestMain:
    """Tests for main."""

    def test_list_rules(self, capsys):
        """Test the rule catalog is printed as JSON."""
        assert main(['--list-rules']) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data['rules']) == 13

    def test_output_and_report_files(self, tmp_path):
        """Test repaired HTML and JSON report are written to files."""
        source = tmp_path / 'page.html'
        source.write_text('<th>Name</th>', encoding='utf-8')
        output = tmp_path / 'fixed.html'
        report = tmp_path / 'report.json'

        code = main([str(source), '-o', str(output), '-r', str(report), '-f', 'json'])

        assert code == 0
        assert output.read_text(encoding='utf-8') == '<th scope="col">Name</th>'
        data = json.loads(report.read_text(encoding='utf-8'))
        assert data['summary']['totalIssues'] == 1

    def test_stdout_output(self, tmp_path, capsys):
        """Test repaired HTML goes to stdout and the report to stderr."""
        source = tmp_path / 'page.html'
        source.write_text('<th>Name</th>', encoding='utf-8')

        assert main([str(source)]) == 0

        captured = capsys.readouterr()
        assert captured.out == '<th scope="col">Name</th>'
        assert 'Total Issues: 1' in captured.err

    def test_report_to_stdout_with_output_file(self, tmp_path, capsys):
        """Test the report goes to stdout when HTML is written to a file."""
        source = tmp_path / 'page.html'
        source.write_text('<th>Name</th>', encoding='utf-8')

        assert main([str(source), '-o', str(tmp_path / 'fixed.html')]) == 0
        assert 'Total Issues: 1' in capsys.readouterr().out

    def test_stdin(self, monkeypatch, capsys):
        """Test reading the fragment from stdin."""
        monkeypatch.setattr('sys.stdin', io.StringIO('<th>X</th>'))
        assert main(['-']) == 0
        assert capsys.readouterr().out == '<th scope="col">X</th>'

    def test_inline_config(self, tmp_path, capsys):
        """Test inline JSON configuration disables rules."""
        source = tmp_path / 'page.html'
        source.write_text('<th>Name</th>', encoding='utf-8')

        assert main([str(source), '--config-json', '{"rules": {"disabled": ["th-scope"]}}']) == 0
        assert capsys.readouterr().out == '<th>Name</th>'

    def test_config_file_and_template(self, tmp_path, capsys):
        """Test config file and template placeholders are applied."""
        source = tmp_path / 'page.html'
        source.write_text('<img src="a.png"><iframe src="/m"></iframe>', encoding='utf-8')
        config = tmp_path / 'config.json'
        config.write_text('{"placeholders": {"iframeTitle": "地圖"}}', encoding='utf-8')
        template = tmp_path / 'template.html'
        template.write_text('<img src="x.png" alt="示意圖">', encoding='utf-8')

        assert main([str(source), '-c', str(config), '-t', str(template)]) == 0
        out = capsys.readouterr().out
        assert 'alt="示意圖"' in out
        assert 'title="地圖"' in out

    def test_strict_mode(self, tmp_path):
        """Test --strict fails when issues need manual review."""
        source = tmp_path / 'page.html'
        source.write_text('<img src="a.png">', encoding='utf-8')
        output = tmp_path / 'fixed.html'

        assert main([str(source), '-o', str(output), '--strict']) == EXIT_NEEDS_REVIEW
        assert main([str(source), '-o', str(output)]) == 0

    def test_strict_mode_clean(self, tmp_path):
        """Test --strict passes when nothing needs review."""
        source = tmp_path / 'page.html'
        source.write_text('<th>Name</th>', encoding='utf-8')

        assert main([str(source), '-o', str(tmp_path / 'fixed.html'), '--strict']) == 0

    def test_invalid_config(self, tmp_path):
        """Test invalid configuration is an error."""
        source = tmp_path / 'page.html'
        source.write_text('<th>Name</th>', encoding='utf-8')

        assert main([str(source), '--config-json', '{broken']) == 1
        assert main([str(source), '-t', str(tmp_path / 'missing.html')]) == 1

    def test_missing_and_empty_input(self, tmp_path):
        """Test missing, empty and absent input are errors."""
        empty = tmp_path / 'empty.html'
        empty.write_text('  \n', encoding='utf-8')

        assert main([str(tmp_path / 'missing.html')]) == 1
        assert main([str(empty)]) == 1
        assert main([]) == 1
