import sys
from pathlib import Path

import pytest

# Make 'evc' importable without installing it
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeTemplate:
    def __init__(self, source="", identifier="test.evc"):
        self.source = source
        self.identifier = identifier


@pytest.fixture
def template():
    return FakeTemplate()
