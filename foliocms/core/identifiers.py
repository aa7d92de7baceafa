"""
Project identifiers.

projects.json historically carried no ``id`` field, so records read without
one get a positional id. Those ids shift whenever the array is reordered;
lookups by position are kept only for compatibility with old dashboard links.
"""

import re
import time

ID_PREFIX = 'project_'

_NUMERIC_ID = re.compile(r'^project_(\d+)$')


def positional_id(index):
    """Id for the record at zero-based ``index`` that has none of its own."""
    return f"{ID_PREFIX}{index + 1}"


def assign_missing_ids(records):
    """Return copies of ``records`` with positional ids filled in where absent.

    The ``id`` key is placed first so the record reads the same way it did
    when the id was persisted. A positional id already held by a persisted
    record is skipped in favour of the next free ``project_<n>``.
    """
    taken = {record['id'] for record in records if record.get('id')}
    result = []
    for index, record in enumerate(records):
        record_id = record.get('id')
        if not record_id:
            n = index
            while positional_id(n) in taken:
                n += 1
            record_id = positional_id(n)
            taken.add(record_id)
        result.append({'id': record_id, **{k: v for k, v in record.items() if k != 'id'}})
    return result


def new_project_id(existing_ids, now=None):
    """Time-based id guaranteed distinct from every id in ``existing_ids``.

    Starts at the current epoch milliseconds and walks forward until free,
    so ids handed out within the same millisecond still differ.
    """
    taken = set(existing_ids)
    stamp = int((time.time() if now is None else now) * 1000)

    # Never go below an already-issued time-based id
    for existing in taken:
        match = _NUMERIC_ID.match(str(existing))
        if match and int(match.group(1)) >= stamp and int(match.group(1)) > 10 ** 9:
            stamp = int(match.group(1)) + 1

    candidate = f"{ID_PREFIX}{stamp}"
    while candidate in taken:
        stamp += 1
        candidate = f"{ID_PREFIX}{stamp}"
    return candidate
