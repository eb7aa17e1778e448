"""
Prompt template for code complexity analysis.

The model is asked for a strict JSON object only. The normalizer still
understands the older labelled-line answers, but the prompt never asks for
them so the two shapes are not mixed in one reply.
"""


ANALYSIS_PROMPT = """Analyze the following {language} code and provide:
1. Time Complexity in Big-O notation
2. Space Complexity in Big-O notation
3. Brief explanation of the complexity analysis

Code:
```{language}
{code}
```

Respond with ONLY this JSON object, no markdown and no other text:
{{
    "timeComplexity": "O(...)",
    "spaceComplexity": "O(...)",
    "explanation": "Brief explanation of why these complexities were determined"
}}"""


def build_analysis_prompt(language: str, code: str) -> str:
    """
    Build the analysis prompt for the LLM.

    Args:
        language: Language tag sent by the client
        code: Source code, embedded verbatim

    Returns:
        Formatted prompt string
    """
    return ANALYSIS_PROMPT.format(language=language, code=code)
