# services/quiz_flow.py
import logging
import time

from questions.catalog import (
    BEHAVIOR_MULTI, BEHAVIOR_MULTI_LIMIT, BEHAVIOR_SLIDER, SLIDER
)

logger = logging.getLogger(__name__)

SLIDER_MIN = 1
SLIDER_MAX = 5
SLIDER_DEFAULT = 3


def new_state(now=None):
    return {'step': 0, 'answers': {}, 'last_activity': now if now is not None else time.time()}


class QuizFlow:
    """
    Sequential navigation over the catalog.

    Step 0 is the landing screen, steps 1..N are the questions and N+1 is
    the results page. State is a plain dict so it can live in the session.
    """

    def __init__(self, questions, max_multi_select=2):
        self.questions = list(questions)
        self.max_multi_select = max_multi_select

    @property
    def total(self):
        return len(self.questions)

    def current_question(self, state):
        step = state.get('step', 0)
        if 1 <= step <= self.total:
            return self.questions[step - 1]
        return None

    def is_results(self, state):
        return state.get('step', 0) > self.total

    # -------------------------
    # Answers
    # -------------------------
    def set_answer(self, state, question, value):
        """Record an answer according to the question's selection behaviour."""
        answers = dict(state.get('answers') or {})
        behavior = question.behavior

        if behavior == BEHAVIOR_SLIDER or question.type == SLIDER:
            answers[question.id] = self._slider_value(value)
        elif behavior in (BEHAVIOR_MULTI, BEHAVIOR_MULTI_LIMIT):
            current = answers.get(question.id)
            selected = list(current) if isinstance(current, list) else []
            if value in selected:
                selected.remove(value)
            elif behavior == BEHAVIOR_MULTI or len(selected) < self.max_multi_select:
                selected.append(value)
            else:
                logger.debug(f"Ignoring selection {value!r} on {question.id}: limit {self.max_multi_select} reached")
            answers[question.id] = selected
        else:
            answers[question.id] = value

        state['answers'] = answers
        return state

    @staticmethod
    def _slider_value(value):
        try:
            v = int(round(float(value)))
        except (TypeError, ValueError):
            return SLIDER_DEFAULT
        return max(SLIDER_MIN, min(SLIDER_MAX, v))

    def can_continue(self, state):
        question = self.current_question(state)
        if question is None:
            return True
        if question.type == SLIDER or not question.required:
            return True

        value = (state.get('answers') or {}).get(question.id)
        if question.behavior == BEHAVIOR_MULTI_LIMIT:
            return isinstance(value, list) and 0 < len(value) <= self.max_multi_select
        if question.behavior == BEHAVIOR_MULTI:
            return True
        return bool(value)

    # -------------------------
    # Navigation
    # -------------------------
    def go_next(self, state):
        step = state.get('step', 0)
        if step >= self.total:
            state['step'] = self.total + 1
            return state

        next_step = step + 1
        question = self.current_question(state)
        if question is not None and self._should_skip_following(state, question):
            skipped = self.questions[step]
            answers = dict(state.get('answers') or {})
            answers.pop(skipped.id, None)
            state['answers'] = answers
            logger.debug(f"Skipping {skipped.id} after {question.id}")
            next_step = step + 2

        state['step'] = min(next_step, self.total + 1)
        return state

    def _should_skip_following(self, state, question):
        if question.skip_next_if is None:
            return False
        idx = self.questions.index(question)
        if idx + 1 >= self.total:
            return False

        value = (state.get('answers') or {}).get(question.id)
        if value is None or isinstance(value, list):
            return False
        target = question.skip_next_if.strip().lower()
        return str(value).strip().lower() == target or question.option_label(value).strip().lower() == target

    def go_back(self, state):
        state['step'] = max(0, state.get('step', 0) - 1)
        return state

    def start(self, state):
        state['answers'] = {}
        state['step'] = 1 if self.total else 0
        return state

    def reset(self, state):
        state['answers'] = {}
        state['step'] = 0
        return state

    # -------------------------
    # Idle handling
    # -------------------------
    @staticmethod
    def is_idle(state, timeout, now=None):
        now = now if now is not None else time.time()
        last = state.get('last_activity')
        return last is not None and now - last > timeout

    def touch(self, state, timeout, now=None):
        """Reset an idle session, then mark activity. Returns True if it had expired."""
        now = now if now is not None else time.time()
        expired = self.is_idle(state, timeout, now)
        if expired:
            logger.info("Session idle past timeout, resetting quiz")
            self.reset(state)
        state['last_activity'] = now
        return expired
