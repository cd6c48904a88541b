"""
Inline Style Normalisation

Decomposes inline style text into ordered declarations, converts absolute
lengths (px, pt) to em, normalises font-size rem to em, drops fixed widths
and collapses four equal padding sides into one shorthand.

Declaration order is preserved: reordering would make visual diffs of the
repaired markup misleading. The only exception is padding compaction,
which places the shorthand where the first padding-* declaration was.

Usage:
    result = normalize_inline_style('font-size:16px;width:200px')
    result.style    # 'font-size:1em'
    result.changed  # True
"""

import math
import re
from dataclasses import dataclass
from typing import List, Tuple

# Number not glued to a preceding word or dot, so "1.2.3px" is left alone
_NUMBER = r'(?<![\w.])(\d+(?:\.\d+)?|\.\d+)'

_PX = re.compile(_NUMBER + r'\s*px\b', re.IGNORECASE)
_PT = re.compile(_NUMBER + r'\s*pt\b', re.IGNORECASE)
_REM = re.compile(_NUMBER + r'\s*rem\b', re.IGNORECASE)

_CSS_FONT_SIZE = re.compile(
    r'(?P<prefix>\bfont-size\s*:\s*)(?P<number>\d+(?:\.\d+)?|\.\d+)\s*(?P<unit>px|pt|rem)\b',
    re.IGNORECASE,
)

_LENGTH = re.compile(r'\s*(-?(?:\d+(?:\.\d+)?|\.\d+))\s*([a-z%]*)\s*', re.IGNORECASE)

PADDING_SIDES = ('padding-top', 'padding-right', 'padding-bottom', 'padding-left')


@dataclass(frozen=True)
class StyleResult:
    """Normalised style text and whether anything changed."""
    style: str
    changed: bool


def format_number(value: float) -> str:
    """Round half-up to 4 decimal places and trim trailing zeros."""
    rounded = math.floor(value * 10000 + 0.5) / 10000
    text = f"{rounded:.4f}".rstrip('0').rstrip('.')
    return '0' if text in ('', '-0') else text


def px_to_em(px: float, base_px: float = 16) -> str:
    """16px at base 16 -> '1em'."""
    return f"{format_number(px / base_px)}em"


def pt_to_em(pt: float, base_pt: float = 12) -> str:
    """12pt -> '1em' (project convention)."""
    return f"{format_number(pt / base_pt)}em"


def rem_to_em(rem: float) -> str:
    """rem maps 1:1 onto em inside a fragment."""
    return f"{format_number(rem)}em"


def parse_declarations(style: str) -> List[Tuple[str, str]]:
    """Split style text into (property, value) pairs, keeping source order."""
    declarations = []
    for part in (style or '').split(';'):
        part = part.strip()
        if not part or ':' not in part:
            continue
        prop, value = part.split(':', 1)
        declarations.append((prop.strip().lower(), value.strip()))
    return declarations


def convert_lengths(
    value: str,
    base_px: float = 16,
    base_pt: float = 12,
    font_size: bool = False,
) -> Tuple[str, bool]:
    """
    Convert px and pt lengths in a declaration value to em.

    Args:
        value: Declaration value, e.g. '1px solid #ccc'
        base_px: Pixel size of 1em
        base_pt: Point size of 1em
        font_size: Also normalise rem to em (font-size only)

    Returns:
        (converted value, changed)
    """
    changed = False

    def converter(to_em, base):
        def convert(match):
            nonlocal changed
            number = float(match.group(1))
            if not _convertible(number, base):
                return match.group(0)
            changed = True
            return to_em(number, base)
        return convert

    value = _PX.sub(converter(px_to_em, base_px), value)
    value = _PT.sub(converter(pt_to_em, base_pt), value)
    if font_size:
        value = _REM.sub(converter(lambda rem, _: rem_to_em(rem), 1), value)
    return value, changed


def normalize_inline_style(
    style: str,
    base_px: float = 16,
    base_pt: float = 12,
    remove_width: bool = True,
) -> StyleResult:
    """
    Normalise inline style text.

    Emits no issues; callers decide what a change means.

    Returns:
        StyleResult with declarations re-joined as 'prop:value; prop:value'
        when changed, or the untouched input otherwise
    """
    if not style:
        return StyleResult(style, False)

    changed = False
    converted: List[Tuple[str, str]] = []

    for prop, value in parse_declarations(style):
        if remove_width and prop == 'width':
            changed = True
            continue
        value, value_changed = convert_lengths(
            value, base_px, base_pt, font_size=(prop == 'font-size')
        )
        changed = changed or value_changed
        converted.append((prop, value))

    compacted = _compact_padding(converted)
    if compacted is not None:
        converted = compacted
        changed = True

    if not changed:
        return StyleResult(style, False)
    return StyleResult('; '.join(f"{prop}:{value}" for prop, value in converted), True)


def convert_font_size_units(css: str, base_px: float = 16, base_pt: float = 12) -> StyleResult:
    """
    Convert font-size px/pt/rem to em inside a stylesheet.

    Only font-size is touched: width removal and padding compaction need
    cascade knowledge a <style> block does not give us.
    """
    def convert(match):
        number = float(match.group('number'))
        unit = match.group('unit').lower()
        base = {'px': base_px, 'pt': base_pt}.get(unit, 1)
        if not _convertible(number, base):
            return match.group(0)
        if unit == 'px':
            em = px_to_em(number, base_px)
        elif unit == 'pt':
            em = pt_to_em(number, base_pt)
        else:
            em = rem_to_em(number)
        return match.group('prefix') + em

    converted = _CSS_FONT_SIZE.sub(convert, css)
    return StyleResult(converted, converted != css)


def _convertible(number: float, base: float) -> bool:
    # Lengths too large to round to 4 decimals are left as written
    return math.isfinite(number / base * 10000)


def _compact_padding(declarations: List[Tuple[str, str]]):
    sides = {prop: value for prop, value in declarations if prop in PADDING_SIDES}
    if len(sides) != len(PADDING_SIDES):
        return None
    if len({_length_key(value) for value in sides.values()}) != 1:
        return None

    compacted = []
    inserted = False
    for prop, value in declarations:
        if prop in PADDING_SIDES:
            if not inserted:
                compacted.append(('padding', value))
                inserted = True
            continue
        compacted.append((prop, value))
    return compacted


def _length_key(value: str):
    # "1em" and "1.0em" compare equal; anything else compares as text
    match = _LENGTH.fullmatch(value)
    if match:
        return float(match.group(1)), match.group(2).lower()
    return value.strip().lower()
