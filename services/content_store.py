# services/content_store.py
import csv
import logging

from questions.catalog import load_catalog
from services.weight_index import load_weight_index

logger = logging.getLogger(__name__)


class ContentStore:
    """
    Holds the question catalog and weight index for the lifetime of the app.
    Both are loaded once; the index only changes through reload().
    """
    def __init__(self):
        self.questions = []
        self.questions_error = None
        self.weights_index = None
        self.weights_error = None
        self.questions_path = None
        self.weights_path = None

    @property
    def is_ready(self):
        return self.weights_index is not None

    def load(self, questions_path, weights_path):
        self.questions_path = questions_path
        self.weights_path = weights_path
        self.questions, self.questions_error = load_catalog(questions_path)

        try:
            self.weights_index = load_weight_index(weights_path)
            self.weights_error = None
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            logger.error(f"❌ Failed to load weights from {weights_path}: {e}")
            self.weights_index = None
            self.weights_error = f"Could not load scoring weights: {e}"

        return self

    def reload(self):
        if not self.questions_path or not self.weights_path:
            raise RuntimeError("ContentStore.reload() called before load()")
        logger.info("Reloading quiz content")
        return self.load(self.questions_path, self.weights_path)

    def get_question(self, question_id):
        return next((q for q in self.questions if q.id == question_id), None)

    def status(self):
        return {
            'ready': self.is_ready,
            'questions': len(self.questions),
            'weighted_questions': len(self.weights_index or {}),
            'questions_error': self.questions_error,
            'weights_error': self.weights_error
        }

