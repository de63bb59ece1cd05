"""Title/author normalization for golden-set matching.

Deliberately narrow: lower-case, outer trim, and a single canonical
apostrophe so that "Gone Girl's" and "Gone Girl’s" compare equal.
No diacritic folding, punctuation stripping or inner whitespace collapsing.
"""

APOSTROPHE = "'"

# ASCII apostrophe and U+2019 RIGHT SINGLE QUOTATION MARK
_APOSTROPHE_TABLE = str.maketrans({"'": APOSTROPHE, "’": APOSTROPHE})


def normalize(value: str | None) -> str:
    """Canonicalize a title or author string for equality comparison."""
    if value is None:
        return ""
    return value.lower().strip().translate(_APOSTROPHE_TABLE)


def same_work(
    title_a: str | None,
    author_a: str | None,
    title_b: str | None,
    author_b: str | None,
) -> bool:
    """True when both title and author normalize to identical strings."""
    return normalize(title_a) == normalize(title_b) and normalize(author_a) == normalize(author_b)
