"""
Repair Configuration

Resolves caller-supplied overrides onto the default configuration and
produces an immutable RepairConfig that every pass reads but never changes.

Recognised input keys (unknown keys are ignored):
    rules.enabled, rules.disabled   - rule id lists
    basePx, basePt                  - base sizes for px/pt -> em conversion
    removeWidth                     - drop inline width declarations
    placeholders.linkText, placeholders.linkEmptyTitle,
    placeholders.linkTitle, placeholders.imgAlt,
    placeholders.iframeTitle, placeholders.newWindowHint
"""

import json
import logging
import math
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

from bs4 import BeautifulSoup

from .rules import RULE_IDS

logger = logging.getLogger(__name__)

# Placeholders containing this marker still need a human to replace them
PLACEHOLDER_MARKER = '請補上'

DEFAULT_BASE_PX = 16
DEFAULT_BASE_PT = 12


class ConfigError(ValueError):
    """Configuration or template input could not be read or parsed."""


@dataclass(frozen=True)
class Placeholders:
    """Wording inserted by auto-fixes."""
    link_text: str = '（請補上鏈結文字）'
    link_empty_title: str = '（請補上鏈結目的）'
    link_title_template: Optional[str] = None  # "{text}" is replaced by the link name
    img_alt: str = '（請補上圖片替代文字）'
    iframe_title: str = '（請補上頁框標題）'
    new_window_hint: str = '在新視窗打開鏈結'


@dataclass(frozen=True)
class RepairConfig:
    """Effective configuration for one repair call."""
    enabled_rule_ids: Optional[FrozenSet[str]] = None
    disabled_rule_ids: FrozenSet[str] = frozenset()
    base_px: float = DEFAULT_BASE_PX
    base_pt: float = DEFAULT_BASE_PT
    remove_width: bool = True
    placeholders: Placeholders = field(default_factory=Placeholders)

    def rule_enabled(self, rule_id: str) -> bool:
        """An explicit enabled set wins; otherwise everything not disabled runs."""
        if self.enabled_rule_ids is not None:
            return rule_id in self.enabled_rule_ids
        return rule_id not in self.disabled_rule_ids


_PLACEHOLDER_KEYS = {
    'linkText': 'link_text',
    'linkEmptyTitle': 'link_empty_title',
    'linkTitle': 'link_title_template',
    'imgAlt': 'img_alt',
    'iframeTitle': 'iframe_title',
    'newWindowHint': 'new_window_hint',
}


def resolve_config(
    raw: Union[RepairConfig, Mapping[str, Any], None] = None,
    template: Optional[str] = None,
) -> RepairConfig:
    """
    Merge caller overrides onto the defaults.

    Values of the wrong type are ignored with a warning so that the
    engine itself never fails on configuration content.

    Args:
        raw: Parsed configuration mapping, an existing RepairConfig, or None
        template: Optional sample fragment to learn placeholder wording from

    Returns:
        Frozen RepairConfig
    """
    if isinstance(raw, RepairConfig):
        config = _with_usable_base_sizes(raw)
        if template:
            defaults = Placeholders()
            # Explicit wording wins; the template only fills fields left at default
            learned = {
                name: value for name, value in parse_template(template).items()
                if getattr(config.placeholders, name) == getattr(defaults, name)
            }
            return replace(config, placeholders=replace(config.placeholders, **learned))
        return config

    if raw is None:
        raw = {}
    elif not isinstance(raw, Mapping):
        logger.warning(f"Ignoring configuration of type {type(raw).__name__}")
        raw = {}

    overrides: Dict[str, Any] = {}

    rules = raw.get('rules')
    if isinstance(rules, Mapping):
        enabled = _rule_id_set(rules.get('enabled'), 'rules.enabled')
        if enabled is not None:
            overrides['enabled_rule_ids'] = enabled
        disabled = _rule_id_set(rules.get('disabled'), 'rules.disabled')
        if disabled is not None:
            overrides['disabled_rule_ids'] = disabled
    elif rules is not None:
        logger.warning("Ignoring 'rules': expected an object")

    for key, attr in (('basePx', 'base_px'), ('basePt', 'base_pt')):
        value = raw.get(key)
        if value is None:
            continue
        if not usable_base_size(value):
            logger.warning(f"Ignoring '{key}': expected a positive number, got {value!r}")
            continue
        overrides[attr] = value

    remove_width = raw.get('removeWidth')
    if isinstance(remove_width, bool):
        overrides['remove_width'] = remove_width
    elif remove_width is not None:
        logger.warning(f"Ignoring 'removeWidth': expected a boolean, got {remove_width!r}")

    placeholder_values = parse_template(template) if template else {}
    placeholders = raw.get('placeholders')
    if isinstance(placeholders, Mapping):
        for key, attr in _PLACEHOLDER_KEYS.items():
            value = placeholders.get(key)
            # Empty strings fall back to the default wording
            if isinstance(value, str) and value:
                placeholder_values[attr] = value
            elif value is not None and not isinstance(value, str):
                logger.warning(f"Ignoring 'placeholders.{key}': expected a string")
    elif placeholders is not None:
        logger.warning("Ignoring 'placeholders': expected an object")

    return RepairConfig(placeholders=Placeholders(**placeholder_values), **overrides)


def usable_base_size(value: Any) -> bool:
    """A finite positive number whose reciprocal is finite too (em = length / base)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        value = float(value)
        return math.isfinite(value) and value > 0 and math.isfinite(1 / value)
    except (OverflowError, ZeroDivisionError):
        return False


def _with_usable_base_sizes(config: RepairConfig) -> RepairConfig:
    fallbacks = {}
    for attr, default in (('base_px', DEFAULT_BASE_PX), ('base_pt', DEFAULT_BASE_PT)):
        value = getattr(config, attr)
        if not usable_base_size(value):
            logger.warning(f"Ignoring {attr}={value!r}: expected a positive number, using {default}")
            fallbacks[attr] = default
    return replace(config, **fallbacks) if fallbacks else config


def _rule_id_set(value: Any, key: str) -> Optional[FrozenSet[str]]:
    if value is None:
        return None
    if not isinstance(value, (list, tuple, set, frozenset)):
        logger.warning(f"Ignoring '{key}': expected a list of rule ids")
        return None
    ids = frozenset(item for item in value if isinstance(item, str))
    unknown = sorted(ids - RULE_IDS)
    if unknown:
        logger.warning(f"Unknown rule ids in '{key}': {', '.join(unknown)}")
    return ids


def parse_template(template: str) -> Dict[str, str]:
    """
    Learn placeholder wording from a sample fragment.

    The first non-empty <a title>, <img alt> and <iframe title> supply the
    link title template, image alt and iframe title respectively.

    Returns:
        Dict of Placeholders field names to learned values
    """
    if not template:
        return {}

    soup = BeautifulSoup(template, 'html.parser')
    learned: Dict[str, str] = {}

    lookups = (
        ('a', 'title', 'link_title_template'),
        ('img', 'alt', 'img_alt'),
        ('iframe', 'title', 'iframe_title'),
    )
    for tag_name, attr, field_name in lookups:
        for tag in soup.find_all(tag_name):
            value = tag.get(attr)
            if isinstance(value, str) and value.strip():
                learned[field_name] = value.strip()
                break

    return learned


def parse_config_json(text: str) -> Dict[str, Any]:
    """
    Parse a serialised configuration object.

    Raises:
        ConfigError: If text is not a JSON object
    """
    if not text or not text.strip():
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"config is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config must be a JSON object")
    return data


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a JSON configuration file.

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    return parse_config_json(content)
