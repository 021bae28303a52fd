"""Pytest configuration for readsieve tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add src directory to Python path
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from readsieve.external.base import Aligner, AlignmentHit, AlignmentIndex  # noqa: E402

DATA_DIR = Path(__file__).resolve().parent / "data"


class ScriptedAligner(Aligner):
    """Aligner double returning a named hit for scripted contaminant sequences."""

    tool_name = "scripted"

    def __init__(self, contaminants=(), target="contaminant_1", hits=None):
        super().__init__()
        self.contaminants = set(contaminants)
        self.target = target
        # Optional query -> hit list override
        self.hits = hits or {}
        self.built = []
        self.queries = []

    def build_index(self, reference):
        self.built.append(Path(reference))
        return AlignmentIndex(
            reference=Path(reference), handle=object(), target_names=(self.target,)
        )

    def align(self, query, index):
        self.queries.append(query)
        if query in self.hits:
            return list(self.hits[query])
        if query in self.contaminants:
            return [AlignmentHit(target_name=self.target, query_end=len(query))]
        return []


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def scripted_aligner():
    """Factory for ScriptedAligner instances."""
    return ScriptedAligner


@pytest.fixture(autouse=True)
def reset_logging_after_test():
    """Reset readsieve logger state after each test.

    setup_logging() sets propagate=False, which breaks caplog in later tests.
    """
    yield
    app_logger = logging.getLogger("readsieve")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True
