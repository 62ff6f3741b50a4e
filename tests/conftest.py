import json, pathlib
import pytest

DATA = pathlib.Path(__file__).parent / "data"

@pytest.fixture
def load_fixture():
    def _load(name):
        with open(DATA / name) as f:
            return json.load(f)
    return _load
