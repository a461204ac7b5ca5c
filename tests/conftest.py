"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from guidelint.config import ENV_CONFIG, ENV_FAIL_ON, Settings
from guidelint.scanner import SWIFT, build_unit


# =============================================================================
# ENVIRONMENT
# =============================================================================

@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path_factory):
    """Keep user config files and env vars out of every test."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(ENV_CONFIG, raising=False)
    monkeypatch.delenv(ENV_FAIL_ON, raising=False)


# =============================================================================
# SETTINGS / SCANNING FIXTURES
# =============================================================================

@pytest.fixture
def settings():
    """Default settings."""
    return Settings()


@pytest.fixture
def scan():
    """Scan source text into a SourceUnit: scan(text, profile=SWIFT, path=None)."""
    def _scan(text, profile=SWIFT, path=None):
        return build_unit(text, path or f"Sample{profile.extensions[0]}", profile)
    return _scan


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def rule_ids(violations) -> list:
    """Rule IDs of a violation list, in order."""
    return [v.rule_id for v in violations]


def decl_pairs(unit) -> list:
    """(kind value, name) for every declaration in a unit."""
    return [(d.kind.value, d.name) for d in unit.declarations]
