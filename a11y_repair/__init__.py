"""
HTML/CSS Accessibility Repair

An offline, stateless toolkit that repairs common accessibility defects in
HTML/CSS fragments, aligned to WCAG 2.1 AA and the Taiwanese accessibility
code set (無障礙網頁檢測規範).

Features:
- Frame titles and image alt text (placeholders flagged for review)
- Link purpose: empty links, missing titles, new-window disclosure
- Table semantics: row headers and header scope
- Relative CSS units for inline styles and <style> blocks
- Report-only checks: skip links, color contrast, fake buttons, form labels
- Issue ledger with line/column locations in the original input

Every defect is classified as auto-fixed or needing manual review; when
meaning is ambiguous the markup is left alone and the issue is reported.

Example:
    >>> from a11y_repair import repair
    >>> result = repair('<th>Name</th>')
    >>> result.repaired_html
    '<th scope="col">Name</th>'
"""

__version__ = '1.0.0'

from .config import (
    ConfigError,
    Placeholders,
    RepairConfig,
    load_config,
    parse_config_json,
    parse_template,
    resolve_config,
)

from .engine import (
    PIPELINE,
    AccessibilityRepairEngine,
    RepairResult,
    RepairSummary,
    repair,
    repair_file,
)

from .issues import Issue, resolve_locations

from .markup import get_attribute, set_or_fill_attribute

from .rules import (
    BUILT_IN_RULES,
    Level,
    Rule,
    get_rule,
)

from .styles import StyleResult, normalize_inline_style

__all__ = [
    # Engine
    'AccessibilityRepairEngine',
    'PIPELINE',
    'RepairResult',
    'RepairSummary',
    'repair',
    'repair_file',
    # Configuration
    'ConfigError',
    'Placeholders',
    'RepairConfig',
    'load_config',
    'parse_config_json',
    'parse_template',
    'resolve_config',
    # Issues
    'Issue',
    'resolve_locations',
    # Rule catalog
    'BUILT_IN_RULES',
    'Level',
    'Rule',
    'get_rule',
    # Helpers
    'get_attribute',
    'set_or_fill_attribute',
    'StyleResult',
    'normalize_inline_style',
]
