"""
guidelint - Reporting and output formatting.

Handles:
- Violation collection
- Human-readable output
- JSON output
- Exit codes
"""

from __future__ import annotations

import json
import sys
from collections import Counter
from pathlib import Path
from typing import Iterable, Optional, TextIO, Union

from guidelint.rules.base import Severity, Violation


class Reporter:
    """Collects and formats violations."""

    def __init__(self) -> None:
        self.violations: list[Violation] = []
        self.files_checked: int = 0

    def add(self, violation: Violation) -> None:
        """Add a violation."""
        self.violations.append(violation)

    def extend(self, violations: Iterable[Violation]) -> None:
        self.violations.extend(violations)

    @property
    def errors(self) -> list[Violation]:
        return [v for v in self.violations if v.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Violation]:
        return [v for v in self.violations if v.severity == Severity.WARNING]

    @property
    def counts(self) -> dict[Severity, int]:
        counter = Counter(v.severity for v in self.violations)
        return {sev: counter.get(sev, 0) for sev in Severity}

    def filter_min_severity(self, threshold: Union[str, Severity]) -> None:
        """Drop violations less severe than threshold."""
        threshold = Severity.parse(threshold)
        self.violations = [v for v in self.violations if v.severity.at_least(threshold)]

    def sorted_violations(self) -> list[Violation]:
        return sorted(
            self.violations,
            key=lambda v: (v.path, v.line, v.column, v.severity.rank, v.rule_id),
        )

    def render_human(self) -> str:
        """Render violations as human-readable text."""
        if not self.violations:
            return "guidelint: OK - no violations"

        lines = []
        for v in self.sorted_violations():
            lines.append(str(v))
            if v.context:
                lines.append(f"    {v.context}")
            if v.suggestion:
                lines.append(f"    -> {v.suggestion}")

        counts = self.counts
        summary = ", ".join(f"{counts[sev]} {sev.value}" for sev in Severity if counts[sev])
        lines.append("")
        lines.append(f"Summary: {len(self.violations)} violations in {self.files_checked} files ({summary})")
        return "\n".join(lines)

    def render_json(self) -> str:
        """Render violations as JSON."""
        return json.dumps(
            [v.to_dict() for v in self.sorted_violations()],
            indent=2,
            default=str,
        )

    def render(self, fmt: str = "human") -> str:
        if fmt == "json":
            return self.render_json()
        return self.render_human()

    def write(self, fmt: str = "human", path: Optional[Path] = None, stream: Optional[TextIO] = None) -> None:
        """Write the rendered report to a file, or to stream (stdout by default)."""
        text = self.render(fmt)
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(text + "\n")
            return
        out = stream or sys.stdout
        out.write(text + "\n")

    def exit_code(self, fail_on: Union[str, Severity] = Severity.ERROR) -> int:
        """1 if any violation is at least as severe as fail_on, else 0."""
        threshold = Severity.parse(fail_on)
        return 1 if any(v.severity.at_least(threshold) for v in self.violations) else 0
