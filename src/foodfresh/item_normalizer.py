"""Shared food name normalization utilities."""

import re

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(name: str) -> str:
    """Trim a name and collapse internal runs of whitespace to one space."""
    return _WHITESPACE.sub(" ", name.strip())


def normalize_food_name(name: str) -> str:
    """Normalize a food name for display and storage.

    Whitespace is collapsed and each word is lowercased with its first
    character upper-cased, so "  greek   YOGURT " becomes "Greek Yogurt".
    """
    collapsed = collapse_whitespace(name)
    if not collapsed:
        return ""
    return " ".join(word[:1].upper() + word[1:].lower() for word in collapsed.split(" "))
