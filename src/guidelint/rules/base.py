"""
Rule base classes and the violation record.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Union

if TYPE_CHECKING:
    from guidelint.config import Settings
    from guidelint.scanner.markdown import DocumentUnit
    from guidelint.scanner.structure import SourceUnit

    Unit = Union[SourceUnit, DocumentUnit]


class Severity(Enum):
    """Violation severity levels, most severe first."""
    ERROR = "error"         # Breaks a hard convention
    WARNING = "warning"     # Convention violated
    INFO = "info"           # Style suggestion
    HINT = "hint"           # Minor improvement

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)

    def at_least(self, threshold: "Severity") -> bool:
        """True if this severity is as severe as threshold or more."""
        return self.rank <= threshold.rank

    @classmethod
    def parse(cls, name: Union[str, "Severity"]) -> "Severity":
        if isinstance(name, Severity):
            return name
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(f"Unknown severity: {name}") from None


_SEVERITY_ORDER = [Severity.ERROR, Severity.WARNING, Severity.INFO, Severity.HINT]


@dataclass
class Violation:
    """A single rule violation found in a file."""
    rule_id: str            # e.g., "N001", "F002"
    severity: Severity
    message: str
    path: str
    line: int
    column: int = 0
    context: str = ""       # The offending source line
    suggestion: str = ""    # How to fix it

    def __str__(self):
        loc = f"{self.path}:{self.line}"
        if self.column:
            loc += f":{self.column}"
        return f"{self.severity.value.upper()} {self.rule_id} {loc} {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
            "path": self.path,
            "line": self.line,
            "column": self.column,
            "context": self.context,
            "suggestion": self.suggestion,
        }


class Rule:
    """
    Base class for style rules.

    Subclasses set `rule_id`, `name`, `severity` and `target` ("source" for
    C-family files, "document" for Markdown) and implement `check`.
    """

    rule_id: str = "X000"
    name: str = "rule"
    severity: Severity = Severity.WARNING
    target: str = "source"
    description: str = ""

    def check(self, unit: "Unit", settings: "Settings") -> List[Violation]:
        """Check a unit and return any violations found."""
        raise NotImplementedError

    def violation(self, unit: "Unit", line: int, column: int, message: str,
                  suggestion: str = "") -> Violation:
        return Violation(
            rule_id=self.rule_id,
            severity=self.severity,
            message=message,
            path=unit.path,
            line=line,
            column=column,
            context=unit.get_line(line).strip()[:240],
            suggestion=suggestion,
        )

    def __repr__(self):
        return f"<{type(self).__name__} {self.rule_id}>"
