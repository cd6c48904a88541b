"""
Accessibility Repair Engine

Runs the ordered repair passes over an HTML/CSS fragment and assembles
the RepairResult. Each pass is a pure function

    (html, config) -> PassResult(html, issues)

and the pipeline threads the text and the issue ledger from one pass to
the next: pass n+1 sees every change pass n made. Locations are resolved
against the pristine input once all passes have run.

Usage:
    from a11y_repair import repair

    result = repair('<img src="logo.png">')
    print(result.repaired_html)
    print(result.to_text())
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from .advisories import (
    check_color_contrast,
    check_fake_buttons,
    check_form_labels,
    check_skip_link,
)
from .config import RepairConfig, resolve_config
from .element_passes import repair_frame_titles, repair_image_alts
from .issues import Issue, PassResult, resolve_locations
from .link_pass import repair_links
from .style_pass import normalize_inline_styles, normalize_style_blocks
from .table_pass import add_header_scopes, promote_row_headers

logger = logging.getLogger(__name__)

RepairPass = Callable[[str, RepairConfig], PassResult]

# Order matters: later passes observe earlier rewrites
PIPELINE: Tuple[Tuple[str, RepairPass], ...] = (
    ('frame-title', repair_frame_titles),
    ('img-alt', repair_image_alts),
    ('links', repair_links),
    ('table-row-header', promote_row_headers),
    ('th-scope', add_header_scopes),
    ('css-relative-units', normalize_inline_styles),
    ('css-style-tag', normalize_style_blocks),
    ('form-label', check_form_labels),
    ('skip-link', check_skip_link),
    ('color-contrast', check_color_contrast),
    ('fake-button', check_fake_buttons),
)

ConfigInput = Union[RepairConfig, Mapping[str, Any], None]


@dataclass(frozen=True)
class RepairSummary:
    """Issue counts for a repair run."""
    total_issues: int = 0
    auto_fixed: int = 0
    needs_manual_review: int = 0

    @classmethod
    def from_issues(cls, issues: Tuple[Issue, ...]) -> 'RepairSummary':
        return cls(
            total_issues=len(issues),
            auto_fixed=sum(1 for issue in issues if issue.auto_fixed),
            needs_manual_review=sum(1 for issue in issues if issue.needs_manual_review),
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            'totalIssues': self.total_issues,
            'autoFixed': self.auto_fixed,
            'needsManualReview': self.needs_manual_review,
        }


@dataclass(frozen=True)
class RepairResult:
    """Complete result of one repair call."""
    original_html: str
    repaired_html: str
    issues: Tuple[Issue, ...]
    summary: RepairSummary

    @property
    def changed(self) -> bool:
        return self.repaired_html != self.original_html

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with the camelCase keys of the repair contract."""
        return {
            'originalHtml': self.original_html,
            'repairedHtml': self.repaired_html,
            'issues': [issue.to_dict() for issue in self.issues],
            'summary': self.summary.to_dict(),
        }

    def to_json(self) -> str:
        """Export result as JSON"""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def to_text(self) -> str:
        """Generate human-readable report"""
        lines = [
            "=" * 70,
            "ACCESSIBILITY REPAIR REPORT (WCAG 2.1 AA)",
            "=" * 70,
            f"Total Issues: {self.summary.total_issues}",
            f"  Auto-fixed: {self.summary.auto_fixed}",
            f"  Needs manual review: {self.summary.needs_manual_review}",
            "=" * 70,
        ]

        if self.issues:
            lines.append("\nISSUES FOUND:\n")
            for i, issue in enumerate(self.issues, 1):
                codes = f"WCAG {issue.wcag_code}"
                if issue.local_code:
                    codes += f" / {issue.local_code}"
                status = 'FIXED' if issue.auto_fixed else 'REPORT'
                if issue.needs_manual_review:
                    status += ', REVIEW'
                location = f"line {issue.line}, col {issue.column}" if issue.located else "unknown"
                lines.extend([
                    f"{i}. [{status}] {issue.rule_id} ({codes}, level {issue.level.value})",
                    f"   Location: {location}",
                    f"   Issue: {issue.message}",
                ])
                if issue.suggestion:
                    lines.append(f"   Fix: {issue.suggestion}")
                lines.append("")

        return "\n".join(lines)


class AccessibilityRepairEngine:
    """
    Rule-based accessibility repair for HTML/CSS fragments.

    The engine holds no per-call state, so one instance can serve any
    number of calls, concurrent ones included.
    """

    def __init__(self, passes: Optional[Tuple[Tuple[str, RepairPass], ...]] = None):
        """
        Initialize the engine.

        Args:
            passes: Ordered (name, pass) pairs; defaults to PIPELINE
        """
        self.passes = passes if passes is not None else PIPELINE

    def repair(self, html: str, config: ConfigInput = None) -> RepairResult:
        """
        Repair an HTML fragment.

        Never raises on string input: a pass that finds nothing to match
        leaves the text unchanged.

        Args:
            html: HTML/CSS fragment
            config: RepairConfig, raw configuration mapping, or None for defaults

        Returns:
            RepairResult with located issues in pass order
        """
        config = resolve_config(config)

        repaired = html
        ledger: List[Issue] = []
        for name, repair_pass in self.passes:
            repaired, emitted = repair_pass(repaired, config)
            if emitted:
                logger.debug(f"Pass {name}: {len(emitted)} issue(s)")
            ledger.extend(emitted)

        issues = tuple(resolve_locations(ledger, html))
        summary = RepairSummary.from_issues(issues)
        logger.debug(
            f"Repair complete: {summary.total_issues} issues, "
            f"{summary.auto_fixed} auto-fixed, {summary.needs_manual_review} need review"
        )
        return RepairResult(
            original_html=html,
            repaired_html=repaired,
            issues=issues,
            summary=summary,
        )


def repair(html: str, config: ConfigInput = None) -> RepairResult:
    """
    Convenience function to repair an HTML fragment.

    Args:
        html: HTML/CSS fragment
        config: Optional configuration

    Returns:
        RepairResult
    """
    return AccessibilityRepairEngine().repair(html, config)


def repair_file(
    input_path: str,
    output_path: Optional[str] = None,
    config: ConfigInput = None,
) -> RepairResult:
    """
    Repair an HTML file and write the repaired markup.

    Args:
        input_path: Path to input HTML file
        output_path: Path for output file (default: input.a11y.html)
        config: Optional configuration

    Returns:
        RepairResult
    """
    input_path = Path(input_path)
    if output_path is None:
        output_path = input_path.with_suffix('.a11y.html')
    else:
        output_path = Path(output_path)

    with open(input_path, 'r', encoding='utf-8') as f:
        html = f.read()

    result = repair(html, config)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(result.repaired_html)

    logger.info(f"Repaired HTML written to: {output_path}")
    return result
