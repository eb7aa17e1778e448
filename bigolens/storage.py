"""
In-memory analysis store.

Records live for as long as the process does. The store is also the result
cache: lookups are by the exact submitted code text.
"""
from __future__ import annotations

import itertools
import threading
from datetime import datetime, timezone
from typing import Optional

from bigolens.models import AnalysisRecord, NewAnalysis


class MemStorage:
    """Dict-backed store keyed by id, with a secondary index on code."""

    def __init__(self) -> None:
        self._analyses: dict[int, AnalysisRecord] = {}
        self._by_code: dict[str, int] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._analyses)

    async def get(self, analysis_id: int) -> Optional[AnalysisRecord]:
        return self._analyses.get(analysis_id)

    async def find_by_code(self, code: str) -> Optional[AnalysisRecord]:
        analysis_id = self._by_code.get(code)
        if analysis_id is None:
            return None
        return self._analyses[analysis_id]

    async def create(self, new: NewAnalysis) -> AnalysisRecord:
        """
        Store ``new`` and return it with its id and creation time.

        If a record for the same code already exists (two identical
        submissions raced past the cache check) that record is returned and
        nothing new is stored.
        """
        with self._lock:
            existing = self._by_code.get(new.code)
            if existing is not None:
                return self._analyses[existing]

            record = AnalysisRecord(
                **new.model_dump(),
                id=next(self._ids),
                createdAt=datetime.now(timezone.utc),
            )
            self._analyses[record.id] = record
            self._by_code[record.code] = record.id
            return record

    async def list_recent(self, limit: int = 10) -> list[AnalysisRecord]:
        """Newest first; ids break ties between identical timestamps."""
        records = sorted(
            self._analyses.values(),
            key=lambda r: (r.createdAt, r.id),
            reverse=True,
        )
        return records[:max(limit, 0)]
