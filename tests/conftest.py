# tests/conftest.py
import os
import sys
import tempfile
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

# Keep test runs from overwriting planner.log in the project root
os.environ.setdefault("HTN_LOG_FILE", os.path.join(tempfile.gettempdir(), "htn_planner_tests.log"))

# Ensure the project root is on sys.path for imports like `import htn_planner`.
PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def dinner():
    from domains import build_dinner_domain
    return build_dinner_domain()


@pytest.fixture
def dinner_state():
    from domains import initialize_state
    return initialize_state
