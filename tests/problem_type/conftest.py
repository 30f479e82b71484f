import copy

import pytest
import yaml

from services.problem_type_engine.engine import ProblemTypeEngine
from services.problem_type_engine.loader import load_content_data
from services.problem_type_engine.config import DEFAULT_CONTENT_PATH


def make_type(code):
    return {
        "code": code,
        "name": f"Type {code}",
        "short_desc": f"Short {code}",
        "long_desc": f"Long {code}",
        "signs": [f"{code} sign 1", f"{code} sign 2"],
        "actions": [f"{code} action 1"],
        "cta_copy": f"CTA {code}",
        "secret_mentor": {"name": "Mentor", "role": "Role", "comment": f"Comment {code}"},
    }


def make_question(qid, axis, primary, secondary):
    return {
        "id": qid,
        "axis": axis,
        "question": f"Question {qid}?",
        "options": [
            {"label": f"{primary} answer", "value": primary},
            {"label": f"{secondary} answer", "value": secondary},
        ],
    }


# Minimal valid structure for testing. The first catalog entry is neither
# fallback default so the three fallback outcomes can be told apart.
MINIMAL_VALID_CONTENT = {
    "version": "1.0.0",
    "released_at": "2024-01-01",
    "axes": [
        {"id": "IE", "name": "Axis 1", "primary": {"value": "I", "label": "Internal"}, "secondary": {"value": "E", "label": "External"}},
        {"id": "PM", "name": "Axis 2", "primary": {"value": "P", "label": "Product"}, "secondary": {"value": "M", "label": "Market"}},
        {"id": "TS", "name": "Axis 3", "primary": {"value": "T", "label": "Team"}, "secondary": {"value": "S", "label": "System"}},
        {"id": "ES", "name": "Axis 4", "primary": {"value": "E", "label": "Early"}, "secondary": {"value": "S", "label": "Scale"}},
    ],
    "questions": [
        make_question(1, "IE", "I", "E"),
        make_question(2, "IE", "I", "E"),
        make_question(3, "PM", "P", "M"),
        make_question(4, "PM", "P", "M"),
        make_question(5, "TS", "T", "S"),
        make_question(6, "TS", "T", "S"),
        make_question(7, "ES", "E", "S"),
        make_question(8, "ES", "E", "S"),
    ],
    "types": [make_type("EPTE"), make_type("IPTE"), make_type("EMSS")],
    "fallback": {"secondary_suffix": "EMSS", "primary_prefix": "IPTE"},
}


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""
    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def create_temp_yaml(tmp_path, filename, data):
    filepath = tmp_path / filename
    with open(filepath, 'w', encoding='utf-8') as f:
        yaml.dump(data, f, allow_unicode=True)
    return str(filepath)


@pytest.fixture
def minimal_content():
    return copy.deepcopy(MINIMAL_VALID_CONTENT)


@pytest.fixture
def engine(minimal_content):
    return ProblemTypeEngine(load_content_data(minimal_content))


@pytest.fixture(scope="module")
def shipped_engine():
    """Engine loaded from the content file that ships with the package."""
    try:
        return ProblemTypeEngine.from_file(DEFAULT_CONTENT_PATH)
    except Exception as e:
        pytest.fail(f"Failed to load shipped content: {e}")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def write_yaml(tmp_path):
    def _write(filename, data):
        return create_temp_yaml(tmp_path, filename, data)
    return _write


@pytest.fixture
def type_factory():
    return make_type
