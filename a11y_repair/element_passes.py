"""
Element passes: frame titles and image alternative text.
"""

from typing import List

from .config import PLACEHOLDER_MARKER, RepairConfig
from .issues import Issue, PassResult, make_issue
from .markup import get_attribute, set_or_fill_attribute, start_tag_pattern


def repair_frame_titles(html: str, config: RepairConfig) -> PassResult:
    """<iframe>/<frame> must carry a non-empty title (WCAG 4.1.2)."""
    if not config.rule_enabled('frame-title'):
        return PassResult(html, [])

    issues: List[Issue] = []
    placeholder = config.placeholders.iframe_title

    def fix(match):
        tag = match.group(0)
        title = get_attribute(tag, 'title')
        if title is not None and title.strip():
            return tag
        fixed = set_or_fill_attribute(tag, 'title', placeholder)
        issues.append(make_issue(
            'frame-title',
            message='頁框/內嵌頁框缺少 title 屬性或為空值',
            original_snippet=tag,
            fixed_snippet=fixed,
            # A caller-supplied concrete title needs no review
            needs_manual_review=PLACEHOLDER_MARKER in placeholder,
            suggestion='請提供能描述此頁框用途的 title（例如：廣告、導覽、影片播放器等）',
        ))
        return fixed

    html = start_tag_pattern('iframe', 'frame').sub(fix, html)
    return PassResult(html, issues)


def repair_image_alts(html: str, config: RepairConfig) -> PassResult:
    """
    <img> must carry an alt attribute (WCAG 1.1.1).

    Only a missing alt is filled. alt="" marks a decorative image and is
    left alone here; the link pass handles empty alt on linked images.
    """
    if not config.rule_enabled('img-alt'):
        return PassResult(html, [])

    issues: List[Issue] = []

    def fix(match):
        tag = match.group(0)
        if get_attribute(tag, 'alt') is not None:
            return tag
        fixed = set_or_fill_attribute(tag, 'alt', config.placeholders.img_alt)
        issues.append(make_issue(
            'img-alt',
            message='圖片缺少 alt 屬性',
            original_snippet=tag,
            fixed_snippet=fixed,
            needs_manual_review=True,
            suggestion='若為裝飾圖片可使用 alt=""；若為資訊性/功能性圖片請描述其用途/內容',
        ))
        return fixed

    html = start_tag_pattern('img').sub(fix, html)
    return PassResult(html, issues)
