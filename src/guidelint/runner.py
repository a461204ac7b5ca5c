"""
guidelint - File discovery and lint orchestration.
"""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

from guidelint.config import Settings
from guidelint.reporting import Reporter
from guidelint.rules.base import Severity, Violation
from guidelint.rules.engine import READ_ERROR_ID, RuleEngine, lint_document, lint_source
from guidelint.scanner.languages import source_extensions
from guidelint.scanner.lexer import read_source
from guidelint.scanner.markdown import DOC_EXTENSIONS

logger = logging.getLogger(__name__)


def _relpath_str(root: Path, p: Path) -> str:
    """Get relative path as posix string."""
    try:
        return p.relative_to(root).as_posix()
    except ValueError:
        return p.as_posix()


def should_exclude_path(settings: Settings, root: Path, path: Path) -> bool:
    """Check excluded directory names and exclude globs."""
    rel = _relpath_str(root, path)
    if any(part in settings.exclude_dirs for part in Path(rel).parts[:-1]):
        return True
    return any(_glob_matches(rel, path.name, pattern) for pattern in settings.exclude)


def _glob_matches(rel: str, name: str, pattern: str) -> bool:
    if fnmatch.fnmatch(rel, pattern) or fnmatch.fnmatch(name, pattern):
        return True
    # A leading `**/` also matches at the root
    while pattern.startswith("**/"):
        pattern = pattern[3:]
        if fnmatch.fnmatch(rel, pattern):
            return True
    return False


def is_lintable(settings: Settings, path: Path) -> bool:
    suffix = path.suffix.lower()
    if suffix in DOC_EXTENSIONS:
        return settings.check_docs
    return suffix in source_extensions()


def iter_files(paths: Iterable[Path], settings: Settings) -> Iterator[Path]:
    """
    Yield lintable files under the given paths.

    Explicit file arguments are yielded even if an exclude pattern matches
    them; directories are walked with exclusions applied.

    Raises:
        FileNotFoundError: If a path does not exist.
    """
    for root in paths:
        if root.is_file():
            if is_lintable(settings, root):
                yield root
            else:
                logger.debug(f"Skipping unsupported file {root}")
            continue
        if not root.is_dir():
            raise FileNotFoundError(f"No such file or directory: {root}")

        for path in sorted(root.rglob("*")):
            if not path.is_file():
                continue
            if should_exclude_path(settings, root, path):
                continue
            if is_lintable(settings, path):
                yield path


def _display_path(path: Path) -> str:
    return _relpath_str(Path.cwd(), path.resolve()) if path.is_absolute() else path.as_posix()


def lint_path(path: Path, engine: RuleEngine) -> list[Violation]:
    """Lint one file. Unreadable files become an E001 violation."""
    display = _display_path(path)
    try:
        text = read_source(str(path))
    except OSError as exc:
        logger.error(f"Cannot read {display}: {exc}")
        return [Violation(
            rule_id=READ_ERROR_ID,
            severity=Severity.ERROR,
            message=f"Cannot read file: {exc.strerror or exc}",
            path=display,
            line=0,
        )]

    if path.suffix.lower() in DOC_EXTENSIONS:
        return lint_document(text, display, engine=engine)
    return lint_source(text, display, engine=engine)


def run(paths: Iterable[Path], settings: Optional[Settings] = None) -> Reporter:
    """Lint every file under paths and return a Reporter with the violations."""
    settings = settings or Settings()
    engine = RuleEngine(settings=settings)
    reporter = Reporter()

    for path in iter_files(paths, settings):
        logger.debug(f"Linting {path}")
        reporter.extend(lint_path(path, engine))
        reporter.files_checked += 1

    if engine.failures:
        logger.warning(f"{len(engine.failures)} rule failures during run")
    logger.info(f"Checked {reporter.files_checked} files: {len(reporter.violations)} violations")
    return reporter
