"""
Name normalization for the shared ingredient and tag dictionaries.

The canonical form is both the lookup key and the stored display name,
which is what lets the dictionary tables carry a plain unique constraint.
"""


def canonical_ingredient_name(raw: str) -> str:
    """
    Trim and capitalize an ingredient name.

    Only the first character of the whole string is upper-cased, the rest
    is lower-cased: "  GREEN onion " -> "Green onion".
    """
    name = raw.strip()
    return name[:1].upper() + name[1:].lower()


def canonical_tag_name(raw: str) -> str:
    """Trim and lower-case a tag name."""
    return raw.strip().lower()
