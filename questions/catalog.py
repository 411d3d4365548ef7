# questions/catalog.py
import json
import logging
import re
from copy import deepcopy

from questions.fallback_questions import FALLBACK_QUESTIONS

logger = logging.getLogger(__name__)

SINGLE = 'single'
MULTI = 'multi'
SLIDER = 'slider'

# Selection behaviours a catalog author can tag a question with
BEHAVIOR_SINGLE = 'single'
BEHAVIOR_MULTI = 'multi'
BEHAVIOR_MULTI_LIMIT = 'multi-limit-2'
BEHAVIOR_SLIDER = 'slider'

BEHAVIORS = (BEHAVIOR_SINGLE, BEHAVIOR_MULTI, BEHAVIOR_MULTI_LIMIT, BEHAVIOR_SLIDER)

TYPE_ALIASES = {
    'slider': SLIDER,
    'range': SLIDER,
    'scale': SLIDER,
    'likert': SLIDER,
    'single': SINGLE,
    'radio': SINGLE,
    'multi': MULTI,
    'multiple': MULTI,
    'checkbox': MULTI,
}

_OPTION_SPLIT = re.compile(r'[,;|]')


class Option:
    __slots__ = ('id', 'label')

    def __init__(self, option_id, label):
        self.id = option_id
        self.label = label

    def __eq__(self, other):
        return isinstance(other, Option) and (self.id, self.label) == (other.id, other.label)

    def __repr__(self):
        return f"Option({self.id!r}, {self.label!r})"

    def to_dict(self):
        return {'id': self.id, 'label': self.label}


class Question:
    def __init__(self, question_id, title, qtype=SINGLE, options=None, min_label=None,
                 max_label=None, required=True, behavior=None, skip_next_if=None):
        self.id = question_id
        self.title = title
        self.type = qtype
        self.options = list(options or [])
        self.min_label = min_label
        self.max_label = max_label
        self.required = required
        self.behavior = behavior or qtype
        self.skip_next_if = skip_next_if

    def option_label(self, value):
        """
        Resolve a stored answer to the label weights are keyed by.
        Matches an option id first, then an option label; free-form and
        slider values pass through as their own label.
        """
        for opt in self.options:
            if opt.id == value:
                return opt.label
        for opt in self.options:
            if opt.label == value:
                return opt.label
        return str(value)

    def has_option(self, value):
        return any(opt.id == value for opt in self.options)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'type': self.type,
            'behavior': self.behavior,
            'options': [opt.to_dict() for opt in self.options],
            'minLabel': self.min_label,
            'maxLabel': self.max_label,
            'required': self.required,
            'skipNextIf': self.skip_next_if
        }


def normalize_options(raw_question, index):
    """Accept options/answers/choices as a delimited string, a list of strings or a list of objects."""
    raw = raw_question.get('options')
    if raw is None:
        raw = raw_question.get('answers')
    if raw is None:
        raw = raw_question.get('choices')
    if raw is None:
        raw = []

    if isinstance(raw, str):
        raw = [piece.strip() for piece in _OPTION_SPLIT.split(raw)]
        raw = [piece for piece in raw if piece]

    if not isinstance(raw, list) or not raw:
        return []

    if all(isinstance(v, str) for v in raw):
        return [Option(v, v) for v in raw]

    if isinstance(raw[0], dict):
        options = []
        for i, item in enumerate(raw):
            if not isinstance(item, dict):
                continue
            option_id = _first_present(item, ('id', 'value', 'code', 'label'))
            if option_id is None:
                option_id = f"{index}_{i}"
            label = _first_present(item, ('label', 'name', 'text', 'value', 'id'))
            if label is None:
                label = option_id
            options.append(Option(str(option_id), str(label)))
        return options

    return []


def _first_present(item, keys):
    for key in keys:
        if item.get(key) is not None:
            return item[key]
    return None


def _resolve_type(raw_question, options):
    behavior = str(raw_question.get('behavior') or '').strip().lower()
    if behavior == BEHAVIOR_SLIDER:
        return SLIDER
    if behavior in (BEHAVIOR_MULTI, BEHAVIOR_MULTI_LIMIT):
        return MULTI

    declared = str(raw_question.get('type') or '').strip().lower()
    if declared in TYPE_ALIASES:
        return TYPE_ALIASES[declared]

    if not declared and not options and (raw_question.get('minLabel') or raw_question.get('maxLabel')):
        return SLIDER
    return SINGLE


def _resolve_behavior(raw_question, qtype):
    behavior = str(raw_question.get('behavior') or '').strip().lower()
    if behavior in BEHAVIORS:
        return behavior
    if behavior:
        logger.warning(f"Unknown behavior '{behavior}' on question {raw_question.get('id')!r}, using '{qtype}'")
    return qtype


def normalize_question(raw_question, index):
    """Turn one raw catalog item into a Question."""
    options = normalize_options(raw_question, index)
    qtype = _resolve_type(raw_question, options)
    behavior = _resolve_behavior(raw_question, qtype)

    question_id = raw_question.get('id')
    question_id = str(question_id) if question_id is not None else f"q_{index}"

    title = raw_question.get('title')
    if title is None:
        title = f"Question {index + 1}"

    required = raw_question.get('required')
    if not isinstance(required, bool):
        required = qtype != SLIDER

    skip_next_if = raw_question.get('skipNextIf')

    return Question(
        question_id,
        str(title),
        qtype=qtype,
        options=options,
        min_label=raw_question.get('minLabel'),
        max_label=raw_question.get('maxLabel'),
        required=required,
        behavior=behavior,
        skip_next_if=str(skip_next_if) if skip_next_if is not None else None
    )


def normalize_catalog(raw_questions):
    questions = []
    seen = set()
    for i, raw in enumerate(raw_questions or []):
        if not isinstance(raw, dict):
            logger.warning(f"Skipping catalog item {i}: expected an object, got {type(raw).__name__}")
            continue
        question = normalize_question(raw, i)
        if question.id in seen:
            logger.warning(f"Duplicate question id '{question.id}' at position {i}")
        seen.add(question.id)
        questions.append(question)
    return questions


def fallback_catalog():
    return normalize_catalog(deepcopy(FALLBACK_QUESTIONS))


def load_catalog(path):
    """
    Load and normalize the question catalog from a JSON file.
    Returns (questions, error). On any failure the built-in fallback
    catalog is returned with a displayable error message.
    """
    try:
        with open(path, encoding='utf-8') as fh:
            data = json.load(fh)
    except (OSError, ValueError) as e:
        logger.error(f"❌ Failed to load question catalog from {path}: {e}")
        return fallback_catalog(), f"Could not load questions: {e}"

    questions = normalize_catalog(data if isinstance(data, list) else [])
    if not questions:
        logger.error(f"❌ Question catalog at {path} is empty, using fallback")
        return fallback_catalog(), "Question catalog is empty"

    logger.info(f"✅ Loaded {len(questions)} questions from {path}")
    return questions, None
