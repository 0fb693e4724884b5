# /relgraph/parser.py

import json
from typing import Any, List
from pydantic import ValidationError

from relgraph.models import Character, ParsedEntry, RelationshipEntry
from relgraph.logger import get_logger

logger = get_logger(__name__)

def parse_relationship_field(raw: Any) -> List[RelationshipEntry]:
    """
    Turns one raw relationship field into validated entries.

    A field that is not a well-formed array yields an empty list. Elements
    that fail validation (no usable name, wrong shape) are dropped one by one
    so a single bad element never discards its siblings.
    """
    if raw is None or raw == "":
        return []

    if isinstance(raw, (str, bytes)):
        try:
            decoded = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Discarding malformed relationship field: {e}")
            return []
    else:
        decoded = raw

    if not isinstance(decoded, list):
        logger.warning(f"Discarding relationship field that is not an array (got {type(decoded).__name__}).")
        return []

    entries = []
    for index, item in enumerate(decoded):
        if not isinstance(item, dict):
            logger.debug(f"  - Dropped element {index}: not an object")
            continue
        try:
            entries.append(RelationshipEntry.model_validate(item))
        except ValidationError as e:
            logger.debug(f"  - Dropped element {index}: {e.error_count()} validation error(s)")
    return entries


def parse_character_relationships(character: Character) -> List[ParsedEntry]:
    """Parses all five relationship fields of a character, in category order."""
    parsed = []
    for category, raw in character.relationship_fields():
        for entry in parse_relationship_field(raw):
            parsed.append(ParsedEntry(source=character, category=category, entry=entry))
    return parsed


def parse_all(characters: List[Character]) -> List[ParsedEntry]:
    parsed = []
    for character in characters:
        parsed.extend(parse_character_relationships(character))
    return parsed
