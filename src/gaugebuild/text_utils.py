"""Text helpers for console output."""


def indent(text: str, n: int) -> str:
    """Indent every line of text by n spaces.

    Empty lines are indented too; a trailing newline is kept without
    indenting the empty remainder after it.
    """
    if n <= 0:
        return text

    padding = " " * n
    trailing_newline = text.endswith("\n")
    body = text[:-1] if trailing_newline else text
    indented = "\n".join(padding + line for line in body.split("\n"))
    return indented + "\n" if trailing_newline else indented
