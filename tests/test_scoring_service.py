import pytest

from models.sku import TIE_BREAK_ORDER
from questions.catalog import normalize_catalog
from services.content_store import ContentStore
from services.scoring_service import ScoringService, is_undetermined, pick_top_sku, score_answers
from services.weight_index import WeightEntry, build_weight_index


ZERO = {sku: 0 for sku in TIE_BREAK_ORDER}


@pytest.fixture
def index():
    return build_weight_index([
        WeightEntry("q1", "Yes", "Immunity", 2),
        WeightEntry("priorities", "More energy", "Energy", 3),
        WeightEntry("priorities", "Positive mood", "Balance", 5),
        WeightEntry("activity", "4", "Energy", 1),
    ])


def test_end_to_end_scenario():
    questions = normalize_catalog([
        {"id": "q1", "answers": [{"id": "a", "label": "Yes"}, {"id": "b", "label": "No"}]}
    ])
    index = build_weight_index([("q1", "Yes", "Immunity", 2)])
    scores = score_answers(questions, {"q1": "a"}, index)
    assert scores == dict(ZERO, Immunity=2)
    assert pick_top_sku(scores) == "Immunity"


def test_missing_index_returns_zero_tally(catalog):
    assert score_answers(catalog, {"q1": "a"}, None) == ZERO
    assert score_answers(catalog, {"q1": "a"}, build_weight_index([])) == ZERO


def test_every_category_present_even_without_answers(catalog, index):
    assert score_answers(catalog, {}, index) == ZERO


def test_answer_can_be_label_instead_of_id(catalog, index):
    assert score_answers(catalog, {"q1": "Yes"}, index)["Immunity"] == 2


def test_unmapped_question_never_changes_tally(catalog, index):
    base = score_answers(catalog, {"q1": "a"}, index)
    assert score_answers(catalog, {"q1": "a", "gender": "Female"}, index) == base
    assert score_answers(catalog, {"q1": "a", "gender": "Male"}, index) == base


def test_unmatched_option_contributes_nothing(catalog, index):
    assert score_answers(catalog, {"q1": "b"}, index) == ZERO


def test_multi_select_adds_each_choice(catalog, index):
    scores = score_answers(catalog, {"priorities": ["energy", "mood"]}, index)
    assert scores["Energy"] == 3
    assert scores["Balance"] == 5
    reversed_scores = score_answers(catalog, {"priorities": ["mood", "energy"]}, index)
    assert reversed_scores == scores


def test_slider_value_passes_through_as_label(catalog, index):
    assert score_answers(catalog, {"activity": 4}, index)["Energy"] == 1
    assert score_answers(catalog, {"activity": 3}, index) == ZERO


def test_answers_for_unknown_questions_are_ignored(catalog, index):
    assert score_answers(catalog, {"not_in_catalog": "Yes"}, index) == ZERO


def test_unknown_category_in_index_is_ignored(catalog):
    index = build_weight_index([("q1", "Yes", "Sleep", 3)])
    assert score_answers(catalog, {"q1": "a"}, index) == ZERO


def test_scoring_is_deterministic(catalog, index):
    answers = {"q1": "a", "priorities": ["energy", "mood"], "activity": 4}
    first = score_answers(catalog, answers, index)
    assert all(score_answers(catalog, answers, index) == first for _ in range(5))
    assert first == dict(ZERO, Energy=4, Balance=5, Immunity=2)


def test_pick_all_zero_defaults_to_energy():
    assert pick_top_sku(ZERO) == "Energy"


def test_pick_first_among_equal_maximum():
    assert pick_top_sku({"Energy": 2, "Balance": 5, "Detox": 5}) == "Balance"


def test_pick_strict_maximum():
    assert pick_top_sku(dict(ZERO, Beauty=0.5)) == "Beauty"
    assert pick_top_sku({"Immunity": 1}) == "Immunity"


def test_pick_handles_empty_tally():
    assert pick_top_sku({}) == "Energy"
    assert pick_top_sku(None) == "Energy"


def test_is_undetermined():
    assert is_undetermined(ZERO)
    assert not is_undetermined(dict(ZERO, Detox=1))


def test_service_defers_until_weights_load(tmp_path, content_files):
    questions_path, weights_path = content_files
    store = ContentStore().load(str(questions_path), str(tmp_path / "missing.csv"))
    assert not store.is_ready
    assert ScoringService(store).score({"q1": "a"}) is None

    store = ContentStore().load(str(questions_path), str(weights_path))
    scores, sku = ScoringService(store).score({"q1": "a"})
    assert sku == "Immunity"
    assert scores["Immunity"] == 2
