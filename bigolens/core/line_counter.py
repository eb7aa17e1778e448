"""
Meaningful line counting.

There is no lexer here: a line is skipped when it is blank or when it starts
with something that looks like a comment opener. A line beginning with ``*``
inside a multi-line string is therefore skipped too.
"""

COMMENT_PREFIXES = ("//", "#", "/*", "*", "*/")


def is_meaningful_line(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith(COMMENT_PREFIXES)


def count_lines_of_code(code: str) -> int:
    """Count the non-blank, non-comment lines of ``code``."""
    return sum(1 for line in code.split("\n") if is_meaningful_line(line))
