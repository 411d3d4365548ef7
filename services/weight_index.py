# services/weight_index.py
import csv
import logging
import math
from collections import namedtuple
from types import MappingProxyType

logger = logging.getLogger(__name__)

# Column names of the weight table (header row required, case-sensitive)
QUESTION_ID_COLUMN = 'QUESTION_ID'
OPTION_COLUMN = 'OPTION'
SKU_COLUMN = 'SCORE_SKU'
WEIGHT_COLUMN = 'WEIGHT'

DEFAULT_WEIGHT = 1.0

WeightEntry = namedtuple('WeightEntry', ['question_id', 'option_label', 'category', 'weight'])
WeightRule = namedtuple('WeightRule', ['category', 'weight'])


def parse_weight(raw):
    """Weights must be positive finite numbers; anything else counts as 1."""
    if raw is None or isinstance(raw, bool):
        return DEFAULT_WEIGHT
    try:
        weight = float(str(raw).strip())
    except (TypeError, ValueError):
        return DEFAULT_WEIGHT
    if not math.isfinite(weight) or weight <= 0:
        return DEFAULT_WEIGHT
    return weight


def _as_entry(row):
    if isinstance(row, WeightEntry):
        return row
    if isinstance(row, dict):
        return WeightEntry(
            row.get(QUESTION_ID_COLUMN),
            row.get(OPTION_COLUMN),
            row.get(SKU_COLUMN),
            row.get(WEIGHT_COLUMN)
        )
    if isinstance(row, (list, tuple)) and len(row) >= 3:
        weight = row[3] if len(row) > 3 else None
        return WeightEntry(row[0], row[1], row[2], weight)
    return None


def _clean(value):
    return '' if value is None else str(value).strip()


def build_weight_index(entries):
    """
    Build the lookup {question_id: {option_label: WeightRule}}.

    Rows missing a question id, option label or SKU are dropped without
    raising. When two rows share (question_id, option_label) the later one
    wins. The returned mapping is read-only at both levels.
    """
    index = {}
    dropped = 0

    for row in entries or []:
        entry = _as_entry(row)
        if entry is None:
            dropped += 1
            continue

        question_id = _clean(entry.question_id)
        label = _clean(entry.option_label)
        category = _clean(entry.category)
        if not question_id or not label or not category:
            dropped += 1
            continue

        by_option = index.setdefault(question_id, {})
        if label in by_option:
            logger.debug(f"Duplicate weight row for {question_id}/{label!r}: {by_option[label].category} replaced by {category}")
        by_option[label] = WeightRule(category, parse_weight(entry.weight))

    if dropped:
        logger.debug(f"Dropped {dropped} malformed weight rows")

    return MappingProxyType({qid: MappingProxyType(opts) for qid, opts in index.items()})


def _split_line(line):
    return [cell.strip() for cell in next(csv.reader([line], skipinitialspace=True), [])]


def parse_weights_csv(text):
    """
    Split comma-separated weight table text into row dicts keyed by the header.
    Each line is parsed on its own so a broken row cannot swallow the rows after it.
    """
    lines = [line for line in (text or '').splitlines() if line.strip()]
    if not lines:
        return []

    try:
        header = _split_line(lines[0])
    except csv.Error as e:
        logger.error(f"❌ Unreadable weight table header: {e}")
        return []
    if header:
        header[0] = header[0].lstrip('\ufeff')

    rows = []
    for line_no, line in enumerate(lines[1:], start=2):
        try:
            cells = _split_line(line)
        except csv.Error as e:
            logger.warning(f"Skipping weight row {line_no}: {e}")
            continue
        row = {}
        for i, name in enumerate(header):
            row[name] = cells[i] if i < len(cells) else ''
        rows.append(row)
    return rows


def load_weight_index(path):
    """Read the weight table from disk and build its index. File errors propagate."""
    with open(path, encoding='utf-8') as fh:
        rows = parse_weights_csv(fh.read())
    index = build_weight_index(rows)
    logger.info(f"✅ Loaded weights for {len(index)} questions from {path} ({len(rows)} rows)")
    return index
