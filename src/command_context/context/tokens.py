"""Token estimation and truncation for instruction text.

These are approximations, not exact counts: a fixed number of characters
per token, matching the heuristic the model-side budgets were sized with.
"""

DEFAULT_CHARS_PER_TOKEN = 4


def estimate_tokens(text: str, chars_per_token: int = DEFAULT_CHARS_PER_TOKEN) -> int:
    """
    Estimate token count for text.

    Args:
        text: Text to estimate tokens for
        chars_per_token: Characters counted as one token

    Returns:
        Estimated token count (always >= 0)
    """
    return max(0, len(text) // chars_per_token)


def truncate_text(
    text: str,
    max_tokens: int,
    chars_per_token: int = DEFAULT_CHARS_PER_TOKEN,
) -> str:
    """
    Truncate text to fit within a token budget, keeping its beginning.

    Args:
        text: Text to truncate
        max_tokens: Maximum tokens allowed
        chars_per_token: Characters counted as one token

    Returns:
        The first max_tokens * chars_per_token characters of text
    """
    max_chars = max_tokens * chars_per_token
    if len(text) <= max_chars:
        return text
    return text[:max_chars]


def truncate_to_chars(text: str, max_chars: int, note: str = "\n... (truncated)") -> str:
    """Cap a snippet payload, preferring a line boundary near the limit."""
    if len(text) <= max_chars:
        return text

    truncated = text[:max_chars]

    # Break at the last newline if it is within 80% of the target
    last_newline = truncated.rfind("\n")
    if last_newline > max_chars * 0.8:
        truncated = truncated[:last_newline]

    return truncated + note
