"""
Tests for the built-in rule catalog.
"""

import json

import pytest
from a11y_repair.rules import (
    BUILT_IN_RULES,
    RULES_BY_ID,
    Level,
    catalog_as_dicts,
    catalog_to_json,
    get_rule,
)


class TestCatalog:
    """Tests for catalog contents."""

    def test_ids_unique(self):
        """Test every rule id appears once."""
        ids = [rule.id for rule in BUILT_IN_RULES]
        assert len(ids) == len(set(ids)) == 13

    def test_get_rule(self):
        """Test lookup by id."""
        rule = get_rule('img-alt')
        assert rule.wcag_code == '1.1.1'
        assert rule.level == Level.A
        assert rule.can_auto_fix is True
        assert rule.local_code == 'HM1110101C'

    def test_unknown_rule(self):
        """Test unknown ids raise KeyError."""
        with pytest.raises(KeyError):
            get_rule('does-not-exist')

    @pytest.mark.parametrize("rule_id", ['form-label', 'skip-link', 'color-contrast', 'fake-button'])
    def test_report_only_rules(self, rule_id):
        """Test advisory rules never claim auto-fix."""
        assert get_rule(rule_id).can_auto_fix is False

    def test_css_rules_are_aa(self):
        """Test CSS unit rules are level AA."""
        assert get_rule('css-relative-units').level == Level.AA
        assert get_rule('css-style-tag').level == Level.AA

    def test_catalog_read_only(self):
        """Test the lookup table cannot be modified."""
        with pytest.raises(TypeError):
            RULES_BY_ID['img-alt'] = None


class TestCatalogExport:
    """Tests for catalog serialisation."""

    def test_as_dicts_order_and_keys(self):
        """Test export keeps catalog order and camelCase keys."""
        data = catalog_as_dicts()
        assert [item['id'] for item in data] == [rule.id for rule in BUILT_IN_RULES]
        assert data[0] == {
            'id': 'frame-title',
            'wcagCode': '4.1.2',
            'level': 'A',
            'title': '<frame>/<iframe> 需有非空 title',
            'canAutoFix': True,
            'localCode': 'HM1410201C',
        }

    def test_to_json(self):
        """Test JSON export wraps the list and keeps non-ASCII text."""
        text = catalog_to_json()
        assert '跳至主要內容' in text
        assert len(json.loads(text)['rules']) == 13
