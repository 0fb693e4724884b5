# /relgraph/graph_builder.py

from typing import Dict, List, Optional, Set, Tuple
from pydantic import BaseModel

from relgraph.models import (
    Character, Edge, Node, ParsedEntry, RelationshipRow, canonical_pair,
)
from relgraph.parser import parse_all
from relgraph.relationship_types import ColorResolver, get_relationship_type_color
from relgraph.logger import get_logger

logger = get_logger(__name__)

EXTERNAL_ID_PREFIX = "external-"

class DirectGraph(BaseModel):
    """Nodes, direct edges and list-view rows produced from explicit entries."""
    nodes: List[Node]
    edges: List[Edge]
    relationships: List[RelationshipRow]


def normalize_name(name: str) -> str:
    """Lower-cases a name and collapses every whitespace run to one space."""
    return " ".join(name.lower().split())


def external_node_id(name: str) -> str:
    return EXTERNAL_ID_PREFIX + normalize_name(name).replace(" ", "-")


def unique_characters(characters: List[Character]) -> List[Character]:
    """Drops repeated character ids, keeping the first occurrence."""
    seen = set()
    unique = []
    for character in characters:
        if character.id in seen:
            logger.warning(f"Ignoring duplicate character id '{character.id}'.")
            continue
        seen.add(character.id)
        unique.append(character)
    return unique


def seed_nodes(characters: List[Character]) -> Dict[str, Node]:
    return {
        character.id: Node(
            id=character.id,
            name=character.name,
            slug=character.slug,
            is_external=False,
            image_url=character.image_url or None,
        )
        for character in characters
    }


def resolve_internal_target(item: ParsedEntry, known_ids) -> Optional[str]:
    """Returns the target character id when the entry links to a known character."""
    target_id = item.entry.target_character_id
    if target_id is not None and target_id in known_ids:
        return target_id
    return None


def collect_declarations(parsed: List[ParsedEntry], known_ids) -> Set[Tuple[str, str]]:
    """
    First pass: every ordered (source, target) pair of characters where the
    source has at least one entry pointing at the target. Category and label
    do not matter here.
    """
    declared = set()
    for item in parsed:
        target_id = resolve_internal_target(item, known_ids)
        if target_id is not None and target_id != item.source.id:
            declared.add((item.source.id, target_id))
    return declared


def build_direct_graph(
    characters: List[Character],
    color_resolver: ColorResolver = get_relationship_type_color,
) -> DirectGraph:
    """
    Builds the deduplicated node set and one direct edge per unordered pair.

    Entries are processed in input order. When the reverse direction already
    created the edge, its label, type and category stay as first seen; only
    the bidirectional flag can change.
    """
    characters = unique_characters(characters)
    nodes = seed_nodes(characters)
    parsed = parse_all(characters)
    declared = collect_declarations(parsed, nodes)

    external_nodes: Dict[str, Node] = {}
    adopted_images: Dict[str, str] = {}
    edges: Dict[Tuple[str, str], Edge] = {}
    rows: List[RelationshipRow] = []

    for item in parsed:
        source_id = item.source.id
        entry = item.entry
        target_id = resolve_internal_target(item, nodes)

        if target_id is not None:
            if target_id == source_id:
                logger.debug(f"  - Skipping self-reference on '{source_id}'")
                continue
            if entry.target_image_url and not nodes[target_id].image_url:
                adopted_images.setdefault(target_id, entry.target_image_url)
            row_target_id = target_id
        else:
            if entry.target_character_id is not None:
                logger.debug(
                    f"  - '{source_id}' references unknown character '{entry.target_character_id}', "
                    f"falling back to name '{entry.target_name}'"
                )
            target_id = external_node_id(entry.target_name)
            existing_node = external_nodes.get(target_id)
            if existing_node is None:
                external_nodes[target_id] = Node(
                    id=target_id,
                    name=entry.target_name,
                    slug=entry.target_slug,
                    is_external=True,
                    image_url=entry.target_image_url,
                )
            elif entry.target_image_url and not existing_node.image_url:
                external_nodes[target_id] = existing_node.model_copy(
                    update={"image_url": entry.target_image_url}
                )
            row_target_id = None

        is_mutual = (source_id, target_id) in declared and (target_id, source_id) in declared
        pair = canonical_pair(source_id, target_id)
        existing_edge = edges.get(pair)
        if existing_edge is None:
            edges[pair] = Edge(
                source=source_id,
                target=target_id,
                category=item.category,
                relationship=entry.label,
                relationship_type=entry.relationship_type,
                color=color_resolver(entry.relationship_type),
                is_bidirectional=is_mutual,
            )
        elif is_mutual and not existing_edge.is_bidirectional:
            edges[pair] = existing_edge.model_copy(update={"is_bidirectional": True})

        rows.append(RelationshipRow(
            from_id=source_id,
            from_name=item.source.name,
            to_name=entry.target_name,
            to_id=row_target_id,
            to_slug=entry.target_slug,
            category=item.category,
            relationship=entry.label,
            relationship_type=entry.relationship_type,
            image_url=entry.target_image_url,
        ))

    character_nodes = [
        node.model_copy(update={"image_url": adopted_images[node.id]}) if node.id in adopted_images else node
        for node in nodes.values()
    ]
    return DirectGraph(
        nodes=character_nodes + list(external_nodes.values()),
        edges=list(edges.values()),
        relationships=rows,
    )
