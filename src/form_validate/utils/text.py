"""Text helpers used to build default titles and messages."""

import re

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


def start_case(name: str) -> str:
    """Convert an identifier to space separated, capitalised words.

    Examples:
        >>> start_case("first_name")
        'First Name'
        >>> start_case("billingAddress2")
        'Billing Address 2'
        >>> start_case("URLField")
        'URL Field'

    Args:
        name: Field name in snake, kebab or camel case

    Returns:
        Title string, empty when ``name`` contains no ASCII word characters

    """
    words = _WORD_RE.findall(name)
    return " ".join(word[:1].upper() + word[1:] for word in words)


def pluralize(count: int, noun: str) -> str:
    """Return ``noun`` with an "s" appended unless ``count`` is exactly 1."""
    return noun if count == 1 else f"{noun}s"
