"""
JSON codec for the persisted task collection.

The whole collection (every date) is stored as one JSON array under a single key.
"""
from __future__ import annotations

import json
import logging
from typing import Iterable

from daytasks.domain.common.errors import ValidationError
from daytasks.domain.tasks.models import Task

logger = logging.getLogger(__name__)


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)


def decode_tasks(payload: str) -> list[Task]:
    """
    Parse a stored payload.

    Raises ValidationError when the payload is not JSON or not an array.
    Individual malformed records are skipped (and logged) so one bad row
    does not cost the rest of the collection.
    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"stored tasks are not valid JSON: {e}")

    if not isinstance(data, list):
        raise ValidationError(f"stored tasks must be a JSON array, got {type(data).__name__}")

    tasks: list[Task] = []
    for i, item in enumerate(data):
        try:
            tasks.append(Task.from_dict(item))
        except ValidationError as e:
            logger.warning("Skipping malformed task record #%s: %s", i, e)
    return tasks
