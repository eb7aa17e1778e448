"""
Core Code Complexity Analyzer.

Cache lookup, line counting, prompting, normalization and persistence for a
single submission. Rate limiting and credential checks belong to the HTTP
layer.
"""
from __future__ import annotations

from typing import Protocol

from bigolens.config import logger
from bigolens.models import AnalysisRecord, NewAnalysis
from bigolens.storage import MemStorage
from .line_counter import count_lines_of_code
from .normalizer import normalize_response
from .prompts import build_analysis_prompt


class CompletionProvider(Protocol):
    async def generate(self, prompt: str) -> str: ...


class CodeComplexityAnalyzer:
    """
    Code complexity analyzer using LLM.

    Takes code and a language tag, returns the stored analysis record.
    """

    def __init__(self, provider: CompletionProvider, storage: MemStorage):
        self._provider = provider
        self._storage = storage

    async def analyze(self, code: str, language: str) -> AnalysisRecord:
        """
        Analyze code complexity, reusing an earlier result for identical code.

        Args:
            code: Source code exactly as submitted
            language: Language tag used in the prompt

        Returns:
            The AnalysisRecord for this code

        Raises:
            ProviderError: If the model call fails
        """
        cached = await self._storage.find_by_code(code)
        if cached is not None:
            logger.info("Cache hit for analysis #%d", cached.id)
            return cached

        lines_of_code = count_lines_of_code(code)
        prompt = build_analysis_prompt(language, code)

        raw = await self._provider.generate(prompt)
        result = normalize_response(raw)

        record = await self._storage.create(
            NewAnalysis(
                code=code,
                language=language,
                linesOfCode=lines_of_code,
                timeComplexity=result.timeComplexity,
                spaceComplexity=result.spaceComplexity,
                explanation=result.explanation,
            )
        )
        logger.info(
            "Stored analysis #%d (%s, %d lines): time=%s space=%s",
            record.id,
            language,
            lines_of_code,
            record.timeComplexity,
            record.spaceComplexity,
        )
        return record
