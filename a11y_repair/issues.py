"""
Issue Ledger and Location Resolver

Issues are created mid-pass with their location unset. Once every pass
has run, resolve_locations() back-fills line, column and offsets by finding
each issue's original snippet in the pristine input.

Known limitation: identical snippets resolve to their first occurrence,
so repeated markup (e.g. the same <img> in every list item) reports the
same location for every issue it raises.
"""

from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from .rules import Level, get_rule

# Snippet used by document-level advisories; never searched for
DOCUMENT_SNIPPET = '(document)'


@dataclass(frozen=True)
class Issue:
    """A single accessibility issue found (and possibly fixed) by a pass."""
    rule_id: str
    wcag_code: str
    level: Level
    message: str
    original_snippet: str
    auto_fixed: bool
    needs_manual_review: bool
    local_code: Optional[str] = None
    fixed_snippet: Optional[str] = None
    suggestion: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    start_offset: Optional[int] = None
    end_offset: Optional[int] = None

    def __post_init__(self):
        if self.auto_fixed and self.fixed_snippet is None:
            raise ValueError(f"auto-fixed issue {self.rule_id} needs a fixed snippet")

    @property
    def located(self) -> bool:
        return self.start_offset is not None

    def to_dict(self) -> Dict[str, object]:
        """Serialise with the camelCase keys of the repair result contract."""
        data = {
            'ruleId': self.rule_id,
            'wcagCode': self.wcag_code,
            'level': self.level.value,
            'message': self.message,
            'line': self.line,
            'column': self.column,
            'startOffset': self.start_offset,
            'endOffset': self.end_offset,
            'originalSnippet': self.original_snippet,
            'autoFixed': self.auto_fixed,
            'needsManualReview': self.needs_manual_review,
        }
        if self.local_code:
            data['localCode'] = self.local_code
        if self.fixed_snippet is not None:
            data['fixedSnippet'] = self.fixed_snippet
        if self.suggestion:
            data['suggestion'] = self.suggestion
        return data


def make_issue(
    rule_id: str,
    message: str,
    original_snippet: str,
    fixed_snippet: Optional[str] = None,
    needs_manual_review: bool = False,
    suggestion: Optional[str] = None,
) -> Issue:
    """
    Create an unlocated issue, taking codes and level from the catalog.

    An issue is auto-fixed exactly when a fixed snippet is supplied.
    """
    rule = get_rule(rule_id)
    return Issue(
        rule_id=rule.id,
        wcag_code=rule.wcag_code,
        local_code=rule.local_code,
        level=rule.level,
        message=message,
        original_snippet=original_snippet,
        fixed_snippet=fixed_snippet,
        auto_fixed=fixed_snippet is not None,
        needs_manual_review=needs_manual_review,
        suggestion=suggestion,
    )


def compute_line_col(source: str, offset: int) -> Tuple[int, int]:
    """1-based (line, column) of a character offset."""
    if offset <= 0:
        return 1, 1
    line = source.count('\n', 0, offset) + 1
    line_start = source.rfind('\n', 0, offset) + 1
    return line, offset - line_start + 1


def locate(issue: Issue, source: str) -> Issue:
    """Return the issue with its location filled, or unchanged if it cannot be found."""
    if issue.located:
        return issue
    snippet = issue.original_snippet
    if not snippet or snippet == DOCUMENT_SNIPPET:
        return issue
    offset = source.find(snippet)
    if offset == -1:
        return issue
    line, column = compute_line_col(source, offset)
    return replace(
        issue,
        line=line,
        column=column,
        start_offset=offset,
        end_offset=offset + len(snippet),
    )


def resolve_locations(issues: Iterable[Issue], source: str) -> List[Issue]:
    """Back-fill locations against the pristine input, keeping issue order."""
    return [locate(issue, source) for issue in issues]


class PassResult(NamedTuple):
    """Output of one pass: the rewritten text and the issues it emitted."""
    html: str
    issues: List[Issue]
