"""
Rule engine.

Runs the enabled rules against a scanned unit, applies severity overrides
and inline suppressions, and returns sorted violations.

Inline suppression (in any comment on the offending line, or anywhere in
the file for the -file form):
    // guidelint: disable=N001,F001
    // guidelint: disable-file=C001
    <!-- guidelint: disable=D002 -->
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Set, Union

from guidelint.config import Settings
from guidelint.rules.base import Rule, Severity, Violation
from guidelint.rules.registry import builtin_rules
from guidelint.scanner.languages import LanguageProfile, get_profile, profile_for_path
from guidelint.scanner.lexer import LexerError
from guidelint.scanner.markdown import DocumentUnit, scan_document
from guidelint.scanner.structure import SourceUnit, build_unit

logger = logging.getLogger(__name__)

PARSE_ERROR_ID = "E000"
READ_ERROR_ID = "E001"

_SUPPRESS_RX = re.compile(r"guidelint:\s*disable(?P<file>-file)?=(?P<ids>[A-Za-z0-9_]+(?:\s*,\s*[A-Za-z0-9_]+)*)")


def _parse_ids(raw: str) -> Set[str]:
    return {part.strip() for part in raw.split(",") if part.strip()}


def collect_suppressions(lines: List[str]) -> tuple[Set[str], dict[int, Set[str]]]:
    """Return (file-wide suppressed IDs, {line: suppressed IDs})."""
    file_ids: Set[str] = set()
    line_ids: dict[int, Set[str]] = {}
    for line_no, line in enumerate(lines, start=1):
        if "guidelint:" not in line:
            continue
        for m in _SUPPRESS_RX.finditer(line):
            ids = _parse_ids(m.group("ids"))
            if m.group("file"):
                file_ids |= ids
            else:
                line_ids.setdefault(line_no, set()).update(ids)
    return file_ids, line_ids


def _suppressed(rule_id: str, ids: Set[str]) -> bool:
    return "all" in ids or rule_id in ids


class RuleEngine:
    """
    Evaluates style rules against scanned units.

    Usage:
        engine = RuleEngine(settings=settings)
        violations = engine.evaluate(unit)
    """

    def __init__(self, rules: Optional[Iterable[Rule]] = None, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.rules: List[Rule] = list(rules) if rules is not None else builtin_rules()
        self.failures: List[str] = []

    def active_rules(self, target: str) -> List[Rule]:
        return [
            r for r in self.rules
            if r.target == target and self.settings.rule_enabled(r.rule_id)
        ]

    def evaluate(self, unit: Union[SourceUnit, DocumentUnit]) -> List[Violation]:
        """Run every enabled rule for this unit's kind."""
        target = "document" if isinstance(unit, DocumentUnit) else "source"
        violations: List[Violation] = []

        for rule in self.active_rules(target):
            try:
                found = rule.check(unit, self.settings)
            except Exception as exc:
                logger.warning(f"Rule {rule.rule_id} failed on {unit.path}: {exc}")
                self.failures.append(f"{rule.rule_id} {unit.path}: {exc}")
                continue

            override = self.settings.severity_override(rule.rule_id)
            if override:
                severity = Severity.parse(override)
                for v in found:
                    v.severity = severity
            violations.extend(found)

        violations = self._apply_suppressions(unit.lines, violations)
        logger.debug(f"{unit.path}: {len(violations)} violations")
        return sorted(violations, key=lambda v: (v.path, v.line, v.column, v.rule_id))

    @staticmethod
    def _apply_suppressions(lines: List[str], violations: List[Violation]) -> List[Violation]:
        file_ids, line_ids = collect_suppressions(lines)
        if not file_ids and not line_ids:
            return violations
        return [
            v for v in violations
            if not _suppressed(v.rule_id, file_ids)
            and not _suppressed(v.rule_id, line_ids.get(v.line, set()))
        ]


def resolve_profile(path: Union[str, Path], settings: Settings) -> Optional[LanguageProfile]:
    """The forced language if configured, else the one claiming the extension."""
    if settings.language:
        return get_profile(settings.language)
    return profile_for_path(Path(path))


def lint_source(
    text: str,
    path: str,
    settings: Optional[Settings] = None,
    engine: Optional[RuleEngine] = None,
    profile: Optional[LanguageProfile] = None,
) -> List[Violation]:
    """
    Scan and lint one source text.

    Lexer failures become a single E000 error at the failure location.
    """
    engine = engine or RuleEngine(settings=settings)
    profile = profile or resolve_profile(path, engine.settings)
    if profile is None:
        raise ValueError(f"No language profile for {path}")

    try:
        unit = build_unit(text, path, profile)
    except LexerError as exc:
        logger.info(f"Could not scan {path}: {exc}")
        return [Violation(
            rule_id=PARSE_ERROR_ID,
            severity=Severity.ERROR,
            message=f"Parse error: {exc.message}",
            path=path,
            line=exc.line,
            column=exc.column,
        )]

    return engine.evaluate(unit)


def lint_document(
    text: str,
    path: str,
    settings: Optional[Settings] = None,
    engine: Optional[RuleEngine] = None,
) -> List[Violation]:
    """Scan and lint one Markdown document."""
    engine = engine or RuleEngine(settings=settings)
    return engine.evaluate(scan_document(text, path))
