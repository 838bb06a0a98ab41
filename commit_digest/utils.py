import unicodedata


EXTRA_ALLOWED = frozenset("_-")
# Control characters that still count as whitespace.
CONTROL_WHITESPACE = frozenset("\t\n\v\f\r\x85")


def _is_allowed(char: str) -> bool:
    category = unicodedata.category(char)
    return (
        category[0] in ("L", "P")
        or category == "Nd"
        or (char.isspace() and (category != "Cc" or char in CONTROL_WHITESPACE))
        or char in EXTRA_ALLOWED
    )


def sanitize_commit_message(commit_message: str) -> str:
    """Drop every character that is not a letter, digit, punctuation or whitespace.

    Emoji, symbols and control characters the model may emit are removed so
    the result can be handed straight to ``git commit -m``.
    """

    if not commit_message:
        return commit_message

    return "".join(char for char in commit_message if _is_allowed(char))
