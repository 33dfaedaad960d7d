"""Test configuration for pytest.

Ensure the repository root is on sys.path so tests can import the `cachetrace`
package without needing PYTHONPATH set externally.
"""
import os
import sys

import pytest

# Compute project root: two directories above this file (cachetrace/tests -> cachetrace -> project root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture
def trace_file(tmp_path):
    """Write a trace file from text and return its path."""
    def _write(text, name='traces.txt'):
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return str(path)
    return _write
