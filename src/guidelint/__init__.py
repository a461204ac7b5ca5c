"""
guidelint - Style guide conformance checker

Checks Swift, Kotlin, Java and C# sources against naming, formatting and
comment conventions, and checks Markdown style guides for well-formed
sections and parseable code snippets.
"""

__version__ = "0.1.0"
__author__ = "guidelint contributors"

from guidelint.config import ConfigError, Settings, load_settings
from guidelint.rules import RuleEngine, Severity, Violation, lint_document, lint_source
