# /relgraph/relationship_types.py

from typing import Callable, Dict, Optional
from pydantic import BaseModel

class RelationshipTypeConfig(BaseModel):
    value: str
    label: str
    color: str
    icon: str


# Default lookup table for relationship types. Renderers with their own
# palette pass a different ColorResolver to the engine.
RELATIONSHIP_TYPES: Dict[str, RelationshipTypeConfig] = {
    config.value: config for config in [
        RelationshipTypeConfig(value="lovers", label="Lovers", color="#FF1744", icon="fas fa-heart"),
        RelationshipTypeConfig(value="crush", label="Crush", color="#F48FB1", icon="fas fa-heart"),
        RelationshipTypeConfig(value="close_friend", label="Close Friend", color="#2196F3", icon="fas fa-heart"),
        RelationshipTypeConfig(value="friend", label="Friend", color="#64B5F6", icon="fas fa-heart"),
        RelationshipTypeConfig(value="acquaintance", label="Acquaintance", color="#9E9E9E", icon="fas fa-heart"),
        RelationshipTypeConfig(value="dislike", label="Dislike", color="#FF9800", icon="fas fa-heart-broken"),
        RelationshipTypeConfig(value="hate", label="Hate", color="#C62828", icon="fas fa-heart-broken"),
        RelationshipTypeConfig(value="neutral", label="Neutral", color="#757575", icon="fas fa-heart"),
        RelationshipTypeConfig(value="family", label="Family", color="#9C27B0", icon="fas fa-heart"),
        RelationshipTypeConfig(value="rival", label="Rival", color="#FFC107", icon="fas fa-heart"),
        RelationshipTypeConfig(value="admire", label="Admire", color="#4CAF50", icon="fas fa-heart"),
        RelationshipTypeConfig(value="other", label="Other", color="#9E9E9E", icon="fas fa-heart"),
    ]
}

ColorResolver = Callable[[Optional[str]], str]

def get_relationship_type_config(relationship_type: Optional[str]) -> RelationshipTypeConfig:
    """Case-insensitive lookup; unknown or missing types resolve to 'other'."""
    key = (relationship_type or "").lower()
    return RELATIONSHIP_TYPES.get(key, RELATIONSHIP_TYPES["other"])

def get_relationship_type_color(relationship_type: Optional[str]) -> str:
    return get_relationship_type_config(relationship_type).color
