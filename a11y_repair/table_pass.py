"""
Table Semantics Passes (WCAG 1.3.1 Info and Relationships)

- Row headers: the first <td> of a row, when it has text, becomes
  <th scope="row">.
- Header scope: every <th> without a scope gets scope="col".
"""

import re
from typing import List

from .config import RepairConfig
from .issues import Issue, PassResult, make_issue
from .markup import (
    element_pattern,
    get_attribute,
    replace_attribute,
    set_or_fill_attribute,
    start_tag_pattern,
    strip_tags,
)
from .styles import normalize_inline_style

_TD_OPEN = re.compile(r'^<td\b', re.IGNORECASE)
_TH_START = re.compile(r'<th\b', re.IGNORECASE)


def promote_row_headers(html: str, config: RepairConfig) -> PassResult:
    """
    Turn the first non-empty data cell of each row into a row header.

    A row whose first <td> is empty (spacer or icon cell) is left alone,
    as is a row that already has a <th>; the latter keeps repeated runs
    from promoting the next cell along.
    """
    if not config.rule_enabled('table-row-header'):
        return PassResult(html, [])

    issues: List[Issue] = []

    def fix(row_match):
        row = row_match.group(0)
        if _TH_START.search(row):
            return row
        cell = element_pattern('td').search(row)
        if not cell:
            return row
        inner = cell.group('inner')
        if not strip_tags(inner):
            return row

        th_open = _TD_OPEN.sub('<th', cell.group('open'), count=1)
        th_open = set_or_fill_attribute(th_open, 'scope', 'row')

        style = get_attribute(th_open, 'style')
        if style:
            result = normalize_inline_style(
                style, config.base_px, config.base_pt, config.remove_width
            )
            if result.changed:
                th_open = replace_attribute(th_open, 'style', result.style)

        header = th_open + inner + '</th>'
        issues.append(make_issue(
            'table-row-header',
            message='表格列標題建議使用 th（已將第一欄 td 轉為 th scope="row"）',
            original_snippet=cell.group(0),
            fixed_snippet=header,
            needs_manual_review=False,
            suggestion='若此欄位確實為列/行標題，使用 th + scope 可提升輔助科技朗讀正確性。',
        ))
        return row[:cell.start()] + header + row[cell.end():]

    html = element_pattern('tr').sub(fix, html)
    return PassResult(html, issues)


def add_header_scopes(html: str, config: RepairConfig) -> PassResult:
    """
    Default every scopeless <th> to scope="col".

    Column scope is a heuristic; row headers written by hand need a
    human to switch them to scope="row".
    """
    if not config.rule_enabled('th-scope'):
        return PassResult(html, [])

    issues: List[Issue] = []

    def fix(match):
        tag = match.group(0)
        scope = get_attribute(tag, 'scope')
        if scope is not None and scope.strip():
            return tag
        fixed = set_or_fill_attribute(tag, 'scope', 'col')
        issues.append(make_issue(
            'th-scope',
            message='<th> 缺少 scope（已補上 scope="col"）',
            original_snippet=tag,
            fixed_snippet=fixed,
            needs_manual_review=False,
            suggestion='若此 th 為列標題請改為 scope="row"；若為欄標題則 scope="col"',
        ))
        return fixed

    html = start_tag_pattern('th').sub(fix, html)
    return PassResult(html, issues)
