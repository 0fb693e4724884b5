# /relgraph/inference.py

from typing import Dict, List, Set
from pydantic import BaseModel

from relgraph.models import Edge, Node, RelationshipRow, canonical_pair
from relgraph.relationship_types import ColorResolver, get_relationship_type_color
from relgraph.logger import get_logger

logger = get_logger(__name__)

DEFAULT_INDIRECT_TYPE = "other"

class IndirectRelationships(BaseModel):
    edges: List[Edge]
    relationships: List[RelationshipRow]


def build_adjacency(edges: List[Edge]) -> Dict[str, Set[str]]:
    """Undirected adjacency over direct edges only."""
    adjacency: Dict[str, Set[str]] = {}
    for edge in edges:
        if edge.is_indirect:
            continue
        adjacency.setdefault(edge.source, set()).add(edge.target)
        adjacency.setdefault(edge.target, set()).add(edge.source)
    return adjacency


def find_two_hop_targets(origin: str, adjacency: Dict[str, Set[str]]) -> Dict[str, List[str]]:
    """
    Maps every node reachable from `origin` in exactly two hops (and not in
    one) to the sorted list of intermediaries that reach it.
    """
    neighbors = adjacency.get(origin, set())
    targets: Dict[str, List[str]] = {}
    for intermediary in sorted(neighbors):
        for candidate in sorted(adjacency.get(intermediary, ())):
            if candidate == origin or candidate in neighbors:
                continue
            targets.setdefault(candidate, []).append(intermediary)
    return targets


def infer_indirect_relationships(
    nodes: List[Node],
    direct_edges: List[Edge],
    color_resolver: ColorResolver = get_relationship_type_color,
) -> IndirectRelationships:
    """
    Surfaces friend-of-friend connections between known characters.

    Characters are visited in node order. The intermediary used for
    attribution is the smallest id among all intermediaries; the inferred
    edge copies relationship_type and category from the direct edge between
    that intermediary and the target, and never carries a label. An edge is
    emitted once per unordered pair and only when no direct edge exists.
    """
    node_by_id = {node.id: node for node in nodes}
    direct_by_pair = {edge.pair: edge for edge in direct_edges if not edge.is_indirect}
    adjacency = build_adjacency(direct_edges)

    inferred: Dict[tuple, Edge] = {}
    rows: List[RelationshipRow] = []

    for origin in nodes:
        if origin.is_external:
            continue
        for target_id, intermediaries in find_two_hop_targets(origin.id, adjacency).items():
            target = node_by_id.get(target_id)
            if target is None or target.is_external:
                continue

            via = intermediaries[0]
            via_edge = direct_by_pair[canonical_pair(via, target_id)]
            relationship_type = via_edge.relationship_type or DEFAULT_INDIRECT_TYPE

            pair = canonical_pair(origin.id, target_id)
            if pair not in direct_by_pair and pair not in inferred:
                inferred[pair] = Edge(
                    source=origin.id,
                    target=target_id,
                    category=via_edge.category,
                    relationship=None,
                    relationship_type=relationship_type,
                    color=color_resolver(relationship_type),
                    is_indirect=True,
                )

            rows.append(RelationshipRow(
                from_id=origin.id,
                from_name=origin.name,
                to_name=target.name,
                to_id=target_id,
                to_slug=target.slug,
                category=via_edge.category,
                relationship=None,
                relationship_type=relationship_type,
                image_url=target.image_url,
                is_indirect=True,
            ))

    logger.debug(f"Inferred {len(inferred)} indirect edge(s) from {len(rows)} two-hop path(s).")
    return IndirectRelationships(edges=list(inferred.values()), relationships=rows)
