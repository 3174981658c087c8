"""JSONC parser - JSON with Comments support for cleanup.jsonc.

TIER 0: No internal imports, only Python stdlib.
"""

from collections.abc import Iterator

CODE = "code"
STRING = "string"
COMMENT = "comment"


def _walk(content: str) -> Iterator[tuple[int, str]]:
    """Yield (index, state) for every character of content.

    state is STRING for string literals (quotes and escapes included),
    COMMENT for // and /* */ comments, CODE otherwise. An unclosed
    block comment runs to the end of the content.
    """
    state = CODE
    escaped = False
    i = 0
    length = len(content)

    while i < length:
        char = content[i]

        if state == STRING:
            yield i, STRING
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                state = CODE
            i += 1
            continue

        if content.startswith("//", i):
            end = content.find("\n", i)
            end = length if end == -1 else end
        elif content.startswith("/*", i):
            end = content.find("*/", i + 2)
            end = length if end == -1 else end + 2
        else:
            if char == '"':
                state = STRING
            yield i, state
            i += 1
            continue

        for j in range(i, end):
            yield j, COMMENT
        i = end


def strip_comments(content: str) -> str:
    """Strip // and /* */ comments that are outside string literals.

    Args:
        content: JSONC content with comments.

    Returns:
        Content without comments (still may have trailing commas).
    """
    return "".join(content[i] for i, state in _walk(content) if state != COMMENT)


def strip_trailing_commas(content: str) -> str:
    """Remove commas directly followed (modulo whitespace) by ] or }.

    Args:
        content: JSON content (comments already stripped).

    Returns:
        Content without trailing commas.
    """
    result = []

    for i, state in _walk(content):
        char = content[i]
        if state == CODE and char == ",":
            rest = content[i + 1 :].lstrip(" \t\r\n")
            if rest[:1] in ("]", "}"):
                continue
        result.append(char)

    return "".join(result)


def parse_jsonc(content: str) -> str:
    """Convert JSONC to JSON that json.loads() accepts."""
    return strip_trailing_commas(strip_comments(content))
