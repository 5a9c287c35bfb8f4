import os
import sys

import pytest

# Ensure tests can import the top-level modules when pytest changes CWD.
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


@pytest.fixture
def sample_result():
    """Tokens and ParseResult for the built-in sample program."""
    from main import SAMPLE_PROGRAM, compile_source

    return compile_source(SAMPLE_PROGRAM)
