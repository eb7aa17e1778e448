import pytest

from bigolens.core.line_counter import count_lines_of_code, is_meaningful_line


def test_empty_string():
    assert count_lines_of_code("") == 0


@pytest.mark.parametrize(
    "code",
    [
        "\n\n   \n\t\n",
        "// a comment\n# another\n/* block\n * middle\n */",
        "   // indented\n\n    # python comment\n",
    ],
)
def test_only_blank_and_comment_lines(code):
    assert count_lines_of_code(code) == 0


def test_counts_every_code_line():
    code = "int a = 1;\nint b = 2;\nreturn a + b;"
    assert count_lines_of_code(code) == 3


def test_mixed_java_source():
    code = """// Example
public class HelloWorld {
    /* entry point */
    public static void main(String[] args) {
        // greet
        System.out.println("Hello");

    }
}
"""
    assert count_lines_of_code(code) == 5


def test_windows_line_endings():
    assert count_lines_of_code("x = 1\r\n\r\n# c\r\ny = 2\r\n") == 2


def test_star_lines_are_skipped_even_outside_comments():
    # pointer dereference at line start looks like a block comment body
    assert count_lines_of_code("int x = 0;\n*p = x;") == 1


def test_is_meaningful_line():
    assert is_meaningful_line("  return x")
    assert not is_meaningful_line("   ")
    assert not is_meaningful_line("  # note")
    assert not is_meaningful_line("*/")
