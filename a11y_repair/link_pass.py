"""
Link Semantics Pass (WCAG 2.4.4 Link Purpose)

For every <a> carrying an href:

1. Visible text is computed by stripping nested markup.
2. A nested <img> with missing or empty alt gets a placeholder alt
   (a link whose only content is an image is named by that alt).
3. The accessible name is the visible text, else the image alt.
4. A link with no accessible name gets placeholder text and title.
5. Otherwise exactly one of the title / new-window fixes applies,
   depending on target="_blank" and the current title.

Anchors without href (named anchors) are never touched.
"""

import logging
import re
from typing import List, Optional

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

logger = logging.getLogger(__name__)

# Titles already telling the user about the new window
NEW_WINDOW_WORDING = re.compile(r'新視窗|新窗口|另開|new window', re.IGNORECASE)

TITLE_TEMPLATE_FIELD = '{text}'


def mentions_new_window(title: str) -> bool:
    return bool(NEW_WINDOW_WORDING.search(title))


def accessible_name(inner: str) -> str:
    """Visible text of the link body, falling back to its first image's alt."""
    text = strip_tags(inner)
    if text:
        return text
    img = start_tag_pattern('img').search(inner)
    if img:
        return (get_attribute(img.group(0), 'alt') or '').strip()
    return ''


def repair_links(html: str, config: RepairConfig) -> PassResult:
    """Apply the link purpose fixes to every href-bearing anchor."""
    issues: List[Issue] = []

    def fix(match):
        open_tag = match.group('open')
        if get_attribute(open_tag, 'href') is None:
            return match.group(0)
        return _repair_anchor(match.group(0), open_tag, match.group('inner'),
                              match.group('close'), config, issues)

    html = element_pattern('a').sub(fix, html)
    if issues:
        logger.debug(f"Link pass emitted {len(issues)} issue(s)")
    return PassResult(html, issues)


def _repair_anchor(
    full: str,
    open_tag: str,
    inner: str,
    close_tag: str,
    config: RepairConfig,
    issues: List[Issue],
) -> str:
    placeholders = config.placeholders

    if config.rule_enabled('img-alt'):
        inner = _fill_linked_image_alts(inner, config, issues)

    name = accessible_name(inner)

    if not name:
        if not config.rule_enabled('link-text'):
            return open_tag + inner + close_tag
        fixed_open = set_or_fill_attribute(open_tag, 'title', placeholders.link_empty_title)
        # Existing body (icons, whitespace) is kept; the placeholder follows it
        fixed = fixed_open + inner + placeholders.link_text + close_tag
        issues.append(make_issue(
            'link-text',
            message='鏈結文字為空（已補上 placeholder，請人工確認鏈結目的）',
            original_snippet=full,
            fixed_snippet=fixed,
            needs_manual_review=True,
            suggestion='請將 placeholder 改為能描述鏈結目的的文字；若為圖示鏈結，請用 <img alt=...> 描述其用途',
        ))
        return fixed

    target = get_attribute(open_tag, 'target')
    opens_new_window = (target or '').strip().lower() == '_blank'
    title = (get_attribute(open_tag, 'title') or '').strip()
    new_window_rule = config.rule_enabled('link-new-window')
    title_rule = config.rule_enabled('link-title')
    hint = placeholders.new_window_hint

    if opens_new_window and new_window_rule and not title and not title_rule:
        fixed = set_or_fill_attribute(open_tag, 'title', f"{hint}：{name}") + inner + close_tag
        issues.append(_new_window_issue(full, fixed, '已補上 title 提示另開新視窗'))
        return fixed

    if title_rule and not title:
        title_text = _title_from_template(placeholders.link_title_template, name)
        if opens_new_window and new_window_rule:
            title_text = f"{hint}：{title_text}"
        fixed = set_or_fill_attribute(open_tag, 'title', title_text) + inner + close_tag
        issues.append(make_issue(
            'link-title',
            message='鏈結缺少 title（已補上）',
            original_snippet=full,
            fixed_snippet=fixed,
            needs_manual_review=False,
            suggestion='title 應能補充鏈結目的；若鏈結文字已足夠，可視情況保留或移除 title。',
        ))
        return fixed

    if opens_new_window and new_window_rule and title and not mentions_new_window(title):
        # The existing title is kept after the hint
        fixed = replace_attribute(open_tag, 'title', f"{hint}：{title}") + inner + close_tag
        issues.append(_new_window_issue(full, fixed, '已補充 title 提示另開新視窗'))
        return fixed

    return open_tag + inner + close_tag


def _fill_linked_image_alts(inner: str, config: RepairConfig, issues: List[Issue]) -> str:
    def fix(match):
        img = match.group(0)
        alt = get_attribute(img, 'alt')
        if alt is not None and alt.strip():
            return img
        fixed = set_or_fill_attribute(img, 'alt', config.placeholders.img_alt)
        issues.append(make_issue(
            'img-alt',
            message='鏈結中的圖片需提供可描述目的的 alt（不可為空）',
            original_snippet=img,
            fixed_snippet=fixed,
            needs_manual_review=True,
            suggestion='若此圖片為鏈結的唯一可讀內容，alt 應描述鏈結目的；避免使用空值 alt=""。',
        ))
        return fixed

    return start_tag_pattern('img').sub(fix, inner)


def _title_from_template(template: Optional[str], name: str) -> str:
    if not template:
        return name
    return template.replace(TITLE_TEMPLATE_FIELD, name)


def _new_window_issue(original: str, fixed: str, detail: str) -> Issue:
    return make_issue(
        'link-new-window',
        message=f"鏈結使用 target=_blank，{detail}",
        original_snippet=original,
        fixed_snippet=fixed,
        needs_manual_review=False,
    )
