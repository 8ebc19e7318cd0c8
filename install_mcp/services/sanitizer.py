"""Package name sanitization for free-text install requests."""

from typing import Final

# Literal substrings stripped from package names. "||" is listed before "|"
# but both strip every pipe, so the walk order never changes the result.
DISALLOWED_TOKENS: Final[tuple[str, ...]] = (
    ";",
    "&&",
    "||",
    "|",
    ">",
    "<",
    "$",
    "`",
    '"',
    "'",
    "(",
    ")",
    "{",
    "}",
    "[",
    "]",
    "\n",
    "\r",
)


def strip_disallowed(raw: str, tokens: tuple[str, ...] = DISALLOWED_TOKENS) -> str:
    """Remove every disallowed token from a string.

    Tokens are removed as literal substrings. The walk repeats until a
    pass removes nothing, so removing one token cannot leave a new one
    behind (``"&(&"`` becomes ``""``, not ``"&&"``).

    Args:
        raw: Text to clean
        tokens: Substrings to remove

    Returns:
        Text without any of the tokens
    """
    result = raw
    while True:
        previous = result
        for token in tokens:
            result = result.replace(token, "")
        if result == previous:
            return result


def sanitize_package_name(raw: str, tokens: tuple[str, ...] = DISALLOWED_TOKENS) -> str:
    """Reduce free text to a single shell-safe package token.

    Strips shell metacharacters, then keeps only the first
    whitespace-delimited segment so one request cannot smuggle in extra
    install arguments.

    Args:
        raw: Package name as typed by the operator
        tokens: Substrings to remove

    Returns:
        First remaining token, or an empty string if nothing survives
    """
    parts = strip_disallowed(raw, tokens).split()
    if parts:
        return parts[0]
    return ""
