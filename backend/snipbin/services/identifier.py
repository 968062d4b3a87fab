"""
SnipBin Backend: Identifier Service
=====================================

What:  Derives the storage/retrieval key for submitted content.
How:   md5(content + epoch_milliseconds), rendered as 32 lowercase hex chars.

Keys are time-salted, not content-only: the same text submitted twice at
different milliseconds gets two keys and two stored snippets. The dedup
lookup in SnippetStore.insert_if_absent() therefore only collapses
submissions that land in the same millisecond with the same content.
"""

import hashlib
import time
from typing import Callable


class IdentifierService:
    """
    Computes snippet keys.

    Args:
        clock: Returns the current time in epoch seconds. Defaults to
               time.time; tests pass a fixed clock.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock

    def timestamp_ms(self) -> int:
        return int(self._clock() * 1000)

    def compute_key(self, content: str) -> str:
        salted = content + str(self.timestamp_ms())
        return hashlib.md5(salted.encode("utf-8")).hexdigest()


identifier_service = IdentifierService()
