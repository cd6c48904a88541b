"""
Advisory (report-only) checks.

These passes detect likely problems that need a human decision and never
change the markup:

- skip-link       (WCAG 2.4.1) landmarks present but no skip link
- color-contrast  (WCAG 1.4.3) inline color without a background color
- fake-button     (WCAG 2.1.1) clickable div/span without button semantics
- form-label      (WCAG 1.3.1) form controls with no programmatic label

Read-only document queries go through BeautifulSoup; the reported
snippets come from the raw markup so they can be located in the input.
"""

import re
from typing import List, Set

from bs4 import BeautifulSoup

from .config import RepairConfig
from .issues import DOCUMENT_SNIPPET, Issue, PassResult, make_issue
from .markup import STYLE_ATTRIBUTE, get_attribute, start_tag_pattern
from .styles import parse_declarations

# Per-call caps to keep reports readable on large fragments
MAX_COLOR_CONTRAST_ISSUES = 5
MAX_FAKE_BUTTON_ISSUES = 10

SKIP_LINK_TARGETS = frozenset(['#main', '#content', '#main-content'])
SKIP_LINK_TEXT = re.compile(r'跳到主要內容|跳至主要內容|skip to main|^skip$', re.IGNORECASE)


def check_form_labels(html: str, config: RepairConfig) -> PassResult:
    """Flag input/select/textarea controls that assistive tech cannot name."""
    if not config.rule_enabled('form-label'):
        return PassResult(html, [])

    issues: List[Issue] = []
    labelled_ids = _label_targets(html)

    for match in start_tag_pattern('input', 'select', 'textarea').finditer(html):
        tag = match.group(0)
        if (get_attribute(tag, 'type') or '').strip().lower() == 'hidden':
            continue
        if (get_attribute(tag, 'aria-label') or '').strip():
            continue
        if (get_attribute(tag, 'aria-labelledby') or '').strip():
            continue
        control_id = (get_attribute(tag, 'id') or '').strip()
        if control_id and control_id in labelled_ids:
            continue

        if control_id:
            suggestion = (f'請確認是否有 <label for="{control_id}">...；或補 aria-label/aria-labelledby'
                          '（注意：placeholder 不是 label）')
        else:
            suggestion = ('建議補 id 並搭配 <label for=...>，或使用 aria-label/aria-labelledby'
                          '（注意：placeholder 不是 label）')
        issues.append(make_issue(
            'form-label',
            message='表單欄位缺少可被輔助科技辨識的標籤（label/aria-label）',
            original_snippet=tag,
            needs_manual_review=True,
            suggestion=suggestion,
        ))

    return PassResult(html, issues)


def check_skip_link(html: str, config: RepairConfig) -> PassResult:
    """One document-level issue when landmarks exist but no skip link does."""
    if not config.rule_enabled('skip-link'):
        return PassResult(html, [])

    soup = BeautifulSoup(html, 'html.parser')
    if not soup.find(['nav', 'header', 'main']) or _has_skip_link(soup):
        return PassResult(html, [])

    issue = make_issue(
        'skip-link',
        message='建議提供跳至主要內容（Skip Link），以利鍵盤/輔助科技快速略過導覽',
        original_snippet=DOCUMENT_SNIPPET,
        needs_manual_review=True,
        suggestion='建議在頁面最前方加入 <a href="#main">跳到主要內容</a> 並確保 main 區塊具對應 id。',
    )
    return PassResult(html, [issue])


def check_color_contrast(html: str, config: RepairConfig) -> PassResult:
    """Ask for a manual contrast check where inline color has no background color."""
    if not config.rule_enabled('color-contrast'):
        return PassResult(html, [])

    issues: List[Issue] = []
    for match in STYLE_ATTRIBUTE.finditer(html):
        raw = match.group('dq') if match.group('dq') is not None else match.group('sq')
        properties = {prop for prop, _ in parse_declarations(raw)}
        if 'color' not in properties or 'background-color' in properties:
            continue
        issues.append(make_issue(
            'color-contrast',
            message='偵測到文字顏色設定，需人工確認與背景之對比',
            original_snippet=match.group(0),
            needs_manual_review=True,
            suggestion='請用對比檢測工具確認一般文字對比 >= 4.5:1（大字 >= 3:1），必要時調整 color/background-color。',
        ))
        if len(issues) >= MAX_COLOR_CONTRAST_ISSUES:
            break

    return PassResult(html, issues)


def check_fake_buttons(html: str, config: RepairConfig) -> PassResult:
    """Flag div/span click handlers that lack role="button" plus tabindex="0"."""
    if not config.rule_enabled('fake-button'):
        return PassResult(html, [])

    issues: List[Issue] = []
    for match in start_tag_pattern('div', 'span').finditer(html):
        tag = match.group(0)
        if get_attribute(tag, 'onclick') is None:
            continue
        role = (get_attribute(tag, 'role') or '').strip().lower()
        tabindex = (get_attribute(tag, 'tabindex') or '').strip()
        if role == 'button' and tabindex == '0':
            continue
        issues.append(make_issue(
            'fake-button',
            message='偵測到非語意互動元件（div/span + onclick），可能無法鍵盤操作',
            original_snippet=tag,
            needs_manual_review=True,
            suggestion='建議改用 <button>；或補 role="button"、tabindex="0" 並加入 keydown/keyup 以支援 Enter/Space。',
        ))
        if len(issues) >= MAX_FAKE_BUTTON_ISSUES:
            break

    return PassResult(html, issues)


def _label_targets(html: str) -> Set[str]:
    soup = BeautifulSoup(html, 'html.parser')
    targets = set()
    for label in soup.find_all('label'):
        target = label.get('for')
        if isinstance(target, str) and target.strip():
            targets.add(target.strip())
    return targets


def _has_skip_link(soup: BeautifulSoup) -> bool:
    for link in soup.find_all('a', href=True):
        href = link.get('href', '')
        if isinstance(href, str) and href.strip() in SKIP_LINK_TARGETS:
            return True
        if SKIP_LINK_TEXT.search(link.get_text(' ', strip=True)):
            return True
    return False
