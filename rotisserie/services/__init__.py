"""
Services Package - Business logic that does not touch the database.

- normalizer.py: canonical ingredient and tag names
- cooking.py: instruction segmenting and cooking session state
"""

from rotisserie.services.cooking import CookingSession, segment_instructions
from rotisserie.services.normalizer import canonical_ingredient_name, canonical_tag_name

__all__ = [
    "CookingSession",
    "segment_instructions",
    "canonical_ingredient_name",
    "canonical_tag_name",
]
