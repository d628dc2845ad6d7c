"""
Root test configuration.

Test organization:
- unit/        Fast, isolated, no I/O, stubbed graders
- integration/ Component boundaries, real I/O to temp locations
- property/    Invariants checked over generated inputs (hypothesis)

Run specific levels:
    pytest tests/unit -v           # Fast feedback loop
    pytest tests/integration -v    # Before commit
    pytest tests/property -v       # Invariants
    pytest tests -v                # Everything
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast isolated tests")
    config.addinivalue_line("markers", "integration: Component boundary tests")
    config.addinivalue_line("markers", "property: Generated-input invariant tests")
    config.addinivalue_line("markers", "slow: Tests that take > 1s")


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Add timing summary at end of test run."""
    stats = terminalreporter.stats

    # Collect slowest tests
    if 'passed' in stats:
        durations = []
        for report in stats['passed']:
            if hasattr(report, 'duration'):
                durations.append((report.duration, report.nodeid))

        if durations:
            durations.sort(reverse=True)
            terminalreporter.write_sep("=", "slowest 5 tests")
            for duration, nodeid in durations[:5]:
                terminalreporter.write_line(f"  {duration:.2f}s  {nodeid}")
