"""
CSS passes (WCAG 1.4.4 Resize Text)

- Inline styles: full normalisation (units, width removal, padding).
- <style> blocks: font-size unit conversion only.
"""

from typing import List

from .config import RepairConfig
from .issues import Issue, PassResult, make_issue
from .markup import STYLE_ATTRIBUTE, element_pattern
from .styles import convert_font_size_units, normalize_inline_style


def normalize_inline_styles(html: str, config: RepairConfig) -> PassResult:
    """Rewrite every style attribute whose declarations use absolute units."""
    if not config.rule_enabled('css-relative-units'):
        return PassResult(html, [])

    issues: List[Issue] = []

    def fix(match):
        attribute = match.group(0)
        quote = '"' if match.group('dq') is not None else "'"
        raw = match.group('dq') if quote == '"' else match.group('sq')
        result = normalize_inline_style(raw, config.base_px, config.base_pt, config.remove_width)
        if not result.changed:
            return attribute
        # Keep the author's quote character
        name = attribute[:attribute.index('=')].rstrip()
        fixed = f"{name}={quote}{result.style}{quote}"
        issues.append(make_issue(
            'css-relative-units',
            message='已將 inline style 中的 px/pt 單位轉為相對單位（em），並移除固定 width',
            original_snippet=attribute,
            fixed_snippet=fixed,
            needs_manual_review=False,
            suggestion='建議使用 em/rem/% 等相對單位以支援文字縮放與可讀性。',
        ))
        return fixed

    html = STYLE_ATTRIBUTE.sub(fix, html)
    return PassResult(html, issues)


def normalize_style_blocks(html: str, config: RepairConfig) -> PassResult:
    """Convert font-size px/pt/rem to em inside each <style> block."""
    if not config.rule_enabled('css-style-tag'):
        return PassResult(html, [])

    issues: List[Issue] = []

    def fix(match):
        result = convert_font_size_units(match.group('inner'), config.base_px, config.base_pt)
        if not result.changed:
            return match.group(0)
        fixed = match.group('open') + result.style + match.group('close')
        issues.append(make_issue(
            'css-style-tag',
            message='已將 <style> 內 font-size 的 px/pt/rem 單位轉為 em',
            original_snippet=match.group(0),
            fixed_snippet=fixed,
            needs_manual_review=False,
        ))
        return fixed

    html = element_pattern('style').sub(fix, html)
    return PassResult(html, issues)
