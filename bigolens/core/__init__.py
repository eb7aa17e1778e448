"""Core module for code complexity analysis."""

from .models import ComplexityResult
from .analyzer import CodeComplexityAnalyzer
from .line_counter import count_lines_of_code
from .normalizer import normalize_response
from .prompts import build_analysis_prompt

__all__ = [
    "ComplexityResult",
    "CodeComplexityAnalyzer",
    "count_lines_of_code",
    "normalize_response",
    "build_analysis_prompt",
]
