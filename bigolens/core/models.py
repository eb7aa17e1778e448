"""
Data models for complexity analysis.
"""

from pydantic import BaseModel, Field


FALLBACK_COMPLEXITY = "O(?)"
FALLBACK_EXPLANATION = "Analysis unavailable."


class ComplexityResult(BaseModel):
    """
    Normalized model answer.

    All three fields are always populated; whatever the model failed to
    provide is filled with the fallback literals above.
    """

    timeComplexity: str = Field(
        default=FALLBACK_COMPLEXITY,
        description="Time complexity in Big-O notation",
    )
    spaceComplexity: str = Field(
        default=FALLBACK_COMPLEXITY,
        description="Space complexity in Big-O notation",
    )
    explanation: str = Field(
        default=FALLBACK_EXPLANATION,
        description="Why the model arrived at these complexities",
    )
