"""
Built-in Accessibility Rule Catalog

Static table of every rule the repair engine knows about, aligned to
WCAG 2.1 success criteria and the Taiwanese accessibility code set
(無障礙網頁檢測規範).

Usage:
    from a11y_repair.rules import BUILT_IN_RULES, get_rule

    rule = get_rule('img-alt')
    print(rule.wcag_code, rule.level.value)
"""

import json
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Optional


class Level(Enum):
    """WCAG conformance levels"""
    A = "A"
    AA = "AA"
    AAA = "AAA"


@dataclass(frozen=True)
class Rule:
    """A single catalog entry."""
    id: str
    wcag_code: str
    level: Level
    title: str
    can_auto_fix: bool
    local_code: Optional[str] = None  # Taiwanese code, e.g. HM1110101C

    def to_dict(self) -> Dict[str, object]:
        """Serialise with the camelCase keys used by the rule listing."""
        data = {
            'id': self.id,
            'wcagCode': self.wcag_code,
            'level': self.level.value,
            'title': self.title,
            'canAutoFix': self.can_auto_fix,
        }
        if self.local_code:
            data['localCode'] = self.local_code
        return data


BUILT_IN_RULES = (
    Rule('frame-title', '4.1.2', Level.A,
         '<frame>/<iframe> 需有非空 title', True, 'HM1410201C'),
    Rule('img-alt', '1.1.1', Level.A,
         '<img> 需有 alt（裝飾圖可 alt=""）', True, 'HM1110101C'),
    Rule('link-text', '2.4.4', Level.A,
         '<a> 鏈結文字不得為空/空白', True, 'HM1240401C'),
    Rule('link-title', '2.4.4', Level.A,
         '必要時補 <a> title 以補充鏈結目的', True, 'HM1240401C'),
    Rule('link-new-window', '2.4.4', Level.A,
         'target=_blank 需提示另開新視窗（以 title/文字補充）', True, 'HM1240401C'),
    Rule('table-row-header', '1.3.1', Level.A,
         '表格列標題：第一欄 td → th scope="row"', True, 'HM1310101C'),
    Rule('css-relative-units', '1.4.4', Level.AA,
         '字型/長度單位使用相對單位（em/rem/%；避免 px/pt）', True, 'CS2140401C'),
    Rule('css-style-tag', '1.4.4', Level.AA,
         '<style> 內 font-size 單位轉換為相對單位', True, 'CS2140401C'),
    Rule('th-scope', '1.3.1', Level.A,
         '<th> 建議提供 scope（col/row）', True, 'HM1310101C'),
    Rule('form-label', '1.3.1', Level.A,
         '表單欄位需可被標籤辨識（label/aria-label）', False, 'HM1330201C'),
    # Report-only rules
    Rule('skip-link', '2.4.1', Level.A,
         '建議提供跳至主要內容（Skip Link）', False, 'HM1240101C'),
    Rule('color-contrast', '1.4.3', Level.AA,
         '文字/背景色彩對比（需人工確認）', False, 'CS2140301C'),
    Rule('fake-button', '2.1.1', Level.A,
         '非語意互動元件需可鍵盤操作（role/tabindex/keydown）', False, 'HM2110101C'),
)

RULES_BY_ID = MappingProxyType({rule.id: rule for rule in BUILT_IN_RULES})

RULE_IDS = frozenset(RULES_BY_ID)


def get_rule(rule_id: str) -> Rule:
    """
    Look up a catalog rule.

    Raises:
        KeyError: If rule_id is not in the catalog
    """
    return RULES_BY_ID[rule_id]


def catalog_as_dicts() -> List[Dict[str, object]]:
    """Return the catalog in listing order as plain dicts."""
    return [rule.to_dict() for rule in BUILT_IN_RULES]


def catalog_to_json() -> str:
    """Export the catalog as JSON, verbatim and in catalog order."""
    return json.dumps({'rules': catalog_as_dicts()}, indent=2, ensure_ascii=False)
