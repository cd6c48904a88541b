"""
Attribute/Tag Matching Helpers

Pattern-based helpers that locate elements and read or write attributes on
raw tag text. Nothing here builds a parse tree: repairs must leave every
byte outside the changed span untouched so the output diffs cleanly against
the input. Passes only reach markup through this module, so a tolerant
parser backend can replace it without touching pass logic.

All helpers are pure string transforms and never raise on malformed input;
a pattern that does not match simply leaves the text unchanged.
"""

import re
from functools import lru_cache
from typing import Optional

_ATTR_VALUE = r'''(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<uq>[^\s"'=<>`]+))'''

_TAG_END = re.compile(r'\s*/?>\Z')

_COMMENT = re.compile(r'<!--[\s\S]*?-->')
_SCRIPT = re.compile(r'<script\b[\s\S]*?</script\s*>', re.IGNORECASE)
_STYLE = re.compile(r'<style\b[\s\S]*?</style\s*>', re.IGNORECASE)
_ANY_TAG = re.compile(r'<[^>]+>')
_NBSP = re.compile(r'&nbsp;', re.IGNORECASE)
_WHITESPACE = re.compile(r'\s+')

# style="..." or style='...' anywhere in the markup; groups dq / sq hold the value
STYLE_ATTRIBUTE = re.compile(
    r'''(?<![\w-])style\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)')''',
    re.IGNORECASE,
)


@lru_cache(maxsize=None)
def _attribute_pattern(name: str) -> re.Pattern:
    # A bare attribute (<img alt>) matches the second branch and reads as ""
    return re.compile(
        r'\s' + re.escape(name) + r'(?:\s*=\s*' + _ATTR_VALUE + r'|(?=[\s/>]|\Z))',
        re.IGNORECASE,
    )


@lru_cache(maxsize=None)
def element_pattern(tag: str) -> re.Pattern:
    """
    Pattern for a whole element: groups ``open``, ``inner`` and ``close``.

    Matching is non-greedy, so nested elements of the same name close at
    the first end tag.
    """
    name = re.escape(tag)
    return re.compile(
        rf'(?P<open><{name}\b[^>]*>)(?P<inner>[\s\S]*?)(?P<close></{name}\s*>)',
        re.IGNORECASE,
    )


@lru_cache(maxsize=None)
def start_tag_pattern(*tags: str) -> re.Pattern:
    """Pattern for the start tag of any of the given element names."""
    names = '|'.join(re.escape(tag) for tag in tags)
    return re.compile(rf'<(?:{names})\b[^>]*>', re.IGNORECASE)


def get_attribute(tag: str, name: str) -> Optional[str]:
    """
    Read an attribute value from start-tag text.

    Args:
        tag: Start tag text, e.g. '<img src="a.png" alt="">'
        name: Attribute name (case-insensitive)

    Returns:
        The raw value, "" for a bare or empty attribute, None when absent
    """
    match = _attribute_pattern(name).search(tag)
    if not match:
        return None
    return _match_value(match)


def set_or_fill_attribute(tag: str, name: str, value: str) -> str:
    """
    Write an attribute only when it is absent or present-but-empty.

    A non-empty existing value is never overwritten, which keeps repeated
    runs from stacking changes on top of earlier fixes.
    """
    match = _attribute_pattern(name).search(tag)
    if match:
        if _match_value(match).strip():
            return tag
        return tag[:match.start()] + _render(name, value) + tag[match.end():]
    return _insert_attribute(tag, name, value)


def replace_attribute(tag: str, name: str, value: str) -> str:
    """Rewrite an attribute whatever its current value, inserting it if absent."""
    match = _attribute_pattern(name).search(tag)
    if match:
        return tag[:match.start()] + _render(name, value) + tag[match.end():]
    return _insert_attribute(tag, name, value)


def strip_tags(html: str) -> str:
    """Visible text of a fragment: no tags, comments, scripts or styles; whitespace collapsed."""
    text = _COMMENT.sub('', html)
    text = _SCRIPT.sub('', text)
    text = _STYLE.sub('', text)
    text = _ANY_TAG.sub('', text)
    text = _NBSP.sub(' ', text)
    return _WHITESPACE.sub(' ', text).strip()


def _match_value(match) -> str:
    for group in ('dq', 'sq', 'uq'):
        value = match.group(group)
        if value is not None:
            return value
    return ''


def _render(name: str, value: str) -> str:
    escaped = value.replace('"', '&quot;')
    return f' {name}="{escaped}"'


def _insert_attribute(tag: str, name: str, value: str) -> str:
    end = _TAG_END.search(tag)
    if not end:
        return tag
    return tag[:end.start()] + _render(name, value) + tag[end.start():]
