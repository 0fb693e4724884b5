# /relgraph/force_graph.py

from typing import Dict, List, Optional, Tuple

from relgraph.models import Character, ForceGraph, ForceGraphLink, ForceGraphNode, RelationshipCategory
from relgraph.parser import parse_relationship_field

GROUP_COUNT = 6

# Default (type, link weight) for each relationship field.
CATEGORY_LINK_DEFAULTS: Dict[RelationshipCategory, Tuple[str, int]] = {
    RelationshipCategory.FAMILY: ("family", 3),
    RelationshipCategory.FRIENDS_ALLIES: ("friend", 2),
    RelationshipCategory.RIVALS_ENEMIES: ("rival", 2),
    RelationshipCategory.ROMANTIC: ("lovers", 4),
    RelationshipCategory.OTHER: ("other", 1),
}

def build_force_graph(characters: List[Character], world_id: Optional[str] = None) -> ForceGraph:
    """
    Builds the compact character-only graph used by force-graph widgets.

    Only entries linking to a character present in the input produce a link;
    external names are ignored here.
    """
    if world_id is not None:
        characters = [character for character in characters if character.world_id == world_id]

    nodes = [
        ForceGraphNode(id=character.id, name=character.name, group=index % GROUP_COUNT, image_url=character.image_url)
        for index, character in enumerate(characters)
    ]
    known_ids = {character.id for character in characters}

    links = []
    for character in characters:
        for category, raw in character.relationship_fields():
            default_type, value = CATEGORY_LINK_DEFAULTS[category]
            for entry in parse_relationship_field(raw):
                target_id = entry.target_character_id
                if target_id is None or target_id not in known_ids or target_id == character.id:
                    continue
                links.append(ForceGraphLink(
                    source=character.id,
                    target=target_id,
                    relationship=entry.label or default_type,
                    type=entry.relationship_type or default_type,
                    value=value,
                ))

    return ForceGraph(nodes=nodes, links=links)
