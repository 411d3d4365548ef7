# services/scoring_service.py
import logging

from models.sku import TIE_BREAK_ORDER, DEFAULT_SKU, empty_tally

logger = logging.getLogger(__name__)

_MULTI_TYPES = (list, tuple, set, frozenset)


def score_answers(questions, answers, weights_index):
    """
    Tally per-SKU totals for an answer set.

    - questions: catalog order list of Question objects
    - answers: dict question_id -> option id / label / slider value, or a list of ids
    - weights_index: {question_id: {option_label: WeightRule}} (None before it has loaded)

    Unweighted questions and unmatched labels contribute nothing.
    """
    scores = empty_tally()
    if not weights_index:
        return scores

    answers = answers or {}
    for question in questions or []:
        value = answers.get(question.id)
        if value is None:
            continue

        by_option = weights_index.get(question.id)
        if not by_option:
            continue  # not a weighted question

        picked = value if isinstance(value, _MULTI_TYPES) else (value,)
        for v in picked:
            rule = by_option.get(question.option_label(v))
            if rule and rule.category in scores:
                scores[rule.category] += rule.weight

    return scores


def pick_top_sku(scores):
    """Highest-scoring SKU; ties go to the earliest SKU in TIE_BREAK_ORDER."""
    best, best_score = None, float('-inf')
    for sku in TIE_BREAK_ORDER:
        s = (scores or {}).get(sku, 0)
        if s > best_score:
            best, best_score = sku, s
    return best or DEFAULT_SKU


def is_undetermined(scores):
    """True when no answer carried any weight, i.e. the winner is only the default."""
    return all(not (scores or {}).get(sku, 0) for sku in TIE_BREAK_ORDER)


class ScoringService:
    """
    Scores answer sets against the catalog and weight index held by a content store.
    """

    def __init__(self, content_store):
        self.content = content_store

    def score(self, answers):
        """
        Returns (scores, sku), or None while the weight table has not loaded.
        Callers should show a pending state rather than a default result.
        """
        if not self.content.is_ready:
            logger.debug("Scoring deferred: weights not loaded")
            return None

        scores = score_answers(self.content.questions, answers, self.content.weights_index)
        sku = pick_top_sku(scores)
        logger.info(f"Scored quiz → {sku} {scores}")
        return scores, sku
