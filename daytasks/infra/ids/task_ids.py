from __future__ import annotations

import random
import time

from daytasks.domain.ports import IdGenerator


class TimestampIdGenerator(IdGenerator):
    """
    task_<epoch millis>_<random suffix>

    The suffix separates ids made within the same millisecond; TaskStore
    still re-draws on the (rare) exact collision.
    """

    def __init__(self, suffix_digits: int = 4) -> None:
        self._suffix_max = 10 ** suffix_digits - 1

    def new_id(self) -> str:
        millis = int(time.time() * 1000)
        return f"task_{millis}_{random.randint(0, self._suffix_max)}"
