# routes/results.py
import logging

from flask import Blueprint, request, jsonify, current_app
from models.sku import ResultCard, SKU_INFO
from routes.quiz import load_state, save_state
from services.scoring_service import ScoringService, is_undetermined

logger = logging.getLogger(__name__)

results_bp = Blueprint('results', __name__)


def _scorer():
    return ScoringService(current_app.extensions['content_store'])


def _result_payload(scored):
    scores, sku = scored
    return {
        "success": True,
        "ready": True,
        "scores": scores,
        "sku": sku,
        "undetermined": is_undetermined(scores),
        "card": ResultCard.for_sku(sku).to_dict()
    }


def _not_ready():
    content = current_app.extensions['content_store']
    return jsonify({
        "success": False,
        "ready": False,
        "error": content.weights_error or "Scoring weights are still loading"
    }), 503


@results_bp.route('', methods=['GET'])
def session_result():
    """Score the answers collected in this session."""
    try:
        state = load_state()
        save_state(state)
        scored = _scorer().score(state['answers'])
        if scored is None:
            return _not_ready()
        return jsonify(_result_payload(scored))
    except Exception as e:
        logger.exception("Failed to score session")
        return jsonify({"error": str(e)}), 400


@results_bp.route('/score', methods=['POST'])
def score_answers():
    """
    Stateless scoring for clients that keep answers themselves.
    Payload: { answers: { question_id: value | [values] } }
    """
    try:
        data = request.get_json(silent=True) or {}
        answers = data.get('answers')
        if not isinstance(answers, dict):
            return jsonify({"error": "answers must be an object keyed by question id"}), 400

        scored = _scorer().score(answers)
        if scored is None:
            return _not_ready()
        return jsonify(_result_payload(scored))
    except Exception as e:
        logger.exception("Failed to score answers")
        return jsonify({"error": str(e)}), 400


@results_bp.route('/sku/<sku>', methods=['GET'])
def sku_card(sku):
    try:
        if sku not in SKU_INFO:
            return jsonify({"error": f"Unknown SKU: {sku}"}), 404
        return jsonify({"success": True, "card": ResultCard.for_sku(sku).to_dict()})
    except Exception as e:
        logger.exception("Failed to build result card")
        return jsonify({"error": str(e)}), 400
