# routes/quiz.py
import logging

from flask import Blueprint, request, jsonify, session, current_app
from services.quiz_flow import QuizFlow, new_state

logger = logging.getLogger(__name__)

quiz_bp = Blueprint('quiz_bp', __name__)

SESSION_KEYS = ('step', 'answers', 'last_activity')


def _content():
    return current_app.extensions['content_store']


def _flow():
    return QuizFlow(_content().questions, max_multi_select=current_app.config['MAX_MULTI_SELECT'])


def load_state():
    """Read quiz state from the session, resetting it if the user went idle."""
    if 'step' not in session:
        state = new_state()
    else:
        state = {k: session.get(k) for k in SESSION_KEYS}
        state['answers'] = state.get('answers') or {}
    _flow().touch(state, current_app.config['IDLE_TIMEOUT'])
    return state


def save_state(state):
    for k in SESSION_KEYS:
        session[k] = state.get(k)
    session.modified = True


def _state_payload(flow, state):
    question = flow.current_question(state)
    return {
        "success": True,
        "step": state['step'],
        "total": flow.total,
        "is_results": flow.is_results(state),
        "question": question.to_dict() if question else None,
        "answers": state['answers'],
        "can_continue": flow.can_continue(state)
    }


@quiz_bp.route('/questions', methods=['GET'])
def get_questions():
    try:
        content = _content()
        return jsonify({
            "success": True,
            "questions": [q.to_dict() for q in content.questions],
            "error": content.questions_error
        })
    except Exception as e:
        logger.exception("Failed to list questions")
        return jsonify({"error": str(e)}), 400


@quiz_bp.route('/state', methods=['GET'])
def get_state():
    try:
        state = load_state()
        save_state(state)
        return jsonify(_state_payload(_flow(), state))
    except Exception as e:
        logger.exception("Failed to read quiz state")
        return jsonify({"error": str(e)}), 400


@quiz_bp.route('/start', methods=['POST'])
def start_quiz():
    """Leave the landing screen and go straight to the first question."""
    try:
        flow = _flow()
        state = flow.start(load_state())
        save_state(state)
        return jsonify(_state_payload(flow, state))
    except Exception as e:
        logger.exception("Failed to start quiz")
        return jsonify({"error": str(e)}), 400


@quiz_bp.route('/answer', methods=['POST'])
def submit_answer():
    """
    Expected payload:
    {
      question_id: str,
      value: option id, slider number, or (multi) one option id to toggle
    }
    """
    try:
        data = request.get_json(silent=True) or {}
        question_id = data.get('question_id')
        if question_id is None or 'value' not in data:
            return jsonify({"error": "Missing question_id or value"}), 400

        question = _content().get_question(str(question_id))
        if question is None:
            return jsonify({"error": f"Unknown question: {question_id}"}), 404

        value = data['value']
        if isinstance(value, (list, dict)):
            return jsonify({"error": "value must be a single option id or number"}), 400
        if question.options and not question.has_option(value):
            return jsonify({"error": f"Unknown option {value!r} for question {question_id}"}), 400

        flow = _flow()
        state = flow.set_answer(load_state(), question, value)
        save_state(state)
        return jsonify(_state_payload(flow, state))
    except Exception as e:
        logger.exception("Failed to record answer")
        return jsonify({"error": str(e)}), 400


@quiz_bp.route('/next', methods=['POST'])
def next_step():
    try:
        flow = _flow()
        state = load_state()
        if not flow.can_continue(state):
            save_state(state)
            return jsonify({"error": "Please answer the question before continuing"}), 400
        state = flow.go_next(state)
        save_state(state)
        return jsonify(_state_payload(flow, state))
    except Exception as e:
        logger.exception("Failed to advance quiz")
        return jsonify({"error": str(e)}), 400


@quiz_bp.route('/back', methods=['POST'])
def previous_step():
    try:
        flow = _flow()
        state = flow.go_back(load_state())
        save_state(state)
        return jsonify(_state_payload(flow, state))
    except Exception as e:
        logger.exception("Failed to go back")
        return jsonify({"error": str(e)}), 400


@quiz_bp.route('/restart', methods=['POST'])
def restart_quiz():
    try:
        flow = _flow()
        state = flow.reset(load_state())
        save_state(state)
        return jsonify(_state_payload(flow, state))
    except Exception as e:
        logger.exception("Failed to restart quiz")
        return jsonify({"error": str(e)}), 400
