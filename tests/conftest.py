import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app import create_app  # noqa: E402
from config import TestingConfig  # noqa: E402
from questions.catalog import normalize_catalog  # noqa: E402


CATALOG = [
    {"id": "q1", "title": "Do you get tired in the afternoon?",
     "answers": [{"id": "a", "label": "Yes"}, {"id": "b", "label": "No"}]},
    {"id": "priorities", "title": "Top two priorities", "behavior": "multi-limit-2",
     "options": [{"id": "energy", "label": "More energy"},
                 {"id": "mood", "label": "Positive mood"},
                 {"id": "skin", "label": "Healthy skin"}]},
    {"id": "activity", "title": "How active are you?", "behavior": "slider",
     "minLabel": "Not at all", "maxLabel": "Very"},
    {"id": "specific_diet", "title": "Do you follow a specific diet?",
     "options": ["Yes", "No"], "skipNextIf": "No"},
    {"id": "which_diet", "title": "Which diet?", "options": ["Vegan", "Keto"]},
    {"id": "gender", "title": "Are you...", "options": ["Female", "Male"]},
]

WEIGHTS_CSV = """QUESTION_ID,OPTION,SCORE_SKU,WEIGHT,NOTES
q1,Yes,Immunity,2,
priorities,More energy,Energy,3,
priorities,Positive mood,Balance,5,
priorities,Healthy skin,Beauty,1,
activity,4,Energy,1,slider
which_diet,Keto,Detox,4,
"""


@pytest.fixture
def catalog():
    return normalize_catalog(CATALOG)


@pytest.fixture
def content_files(tmp_path):
    questions_path = tmp_path / "questions.json"
    weights_path = tmp_path / "weights.csv"
    questions_path.write_text(json.dumps(CATALOG), encoding="utf-8")
    weights_path.write_text(WEIGHTS_CSV, encoding="utf-8")
    return questions_path, weights_path


def make_config(questions_path, weights_path, **overrides):
    attrs = {"QUESTIONS_PATH": str(questions_path), "WEIGHTS_PATH": str(weights_path)}
    attrs.update(overrides)
    return type("ConfiguredTestingConfig", (TestingConfig,), attrs)


@pytest.fixture
def app_factory():
    def _factory(questions_path, weights_path, **overrides):
        return create_app(make_config(questions_path, weights_path, **overrides))
    return _factory


@pytest.fixture
def app(content_files):
    return create_app(make_config(*content_files))


@pytest.fixture
def client(app):
    return app.test_client()
