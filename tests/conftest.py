import os
import sys

# The interpreter modules live flat at the repository root; make them (and
# `tests.utils`) importable regardless of where pytest is started from.
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)
