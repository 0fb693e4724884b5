# /relgraph/engine.py

import hashlib
import json
import threading
from typing import Any, Iterable, List, Optional, Union
from cachetools import LRUCache

from relgraph.config import LayoutConfig, settings
from relgraph.graph_builder import build_direct_graph
from relgraph.inference import infer_indirect_relationships
from relgraph.layout import compute_layout
from relgraph.models import Character, RelationshipGraph
from relgraph.relationship_types import ColorResolver, get_relationship_type_color
from relgraph.logger import get_logger

logger = get_logger(__name__)

CharacterInput = Union[Character, dict]

def to_characters(records: Iterable[CharacterInput]) -> List[Character]:
    return [
        record if isinstance(record, Character) else Character.model_validate(record)
        for record in records
    ]


def build_relationship_graph(
    characters: Iterable[CharacterInput],
    layout_config: Optional[LayoutConfig] = None,
    color_resolver: ColorResolver = get_relationship_type_color,
) -> RelationshipGraph:
    """
    Runs the whole pipeline: parse, build direct edges, infer indirect
    edges, then lay out every node.

    The result is a pure function of the input; nothing is kept between calls.
    """
    characters = to_characters(characters)
    layout_config = layout_config or LayoutConfig.from_settings(settings)

    direct = build_direct_graph(characters, color_resolver)
    indirect = infer_indirect_relationships(direct.nodes, direct.edges, color_resolver)
    edges = direct.edges + indirect.edges

    nodes, viewport = compute_layout(direct.nodes, edges, layout_config)

    logger.info(
        f"Built relationship graph: {len(nodes)} node(s), {len(direct.edges)} direct edge(s), "
        f"{len(indirect.edges)} indirect edge(s)."
    )
    return RelationshipGraph(
        nodes=nodes,
        edges=edges,
        relationships=direct.relationships + indirect.relationships,
        viewport=viewport,
        view_box=viewport.as_view_box(),
    )


class GraphCache:
    """
    Caller-owned memoization of build_relationship_graph, keyed by a content
    hash of the characters and the layout config.
    """
    def __init__(
        self,
        maxsize: Optional[int] = None,
        layout_config: Optional[LayoutConfig] = None,
        color_resolver: ColorResolver = get_relationship_type_color,
    ):
        self._cache = LRUCache(maxsize=maxsize or settings.GRAPH_CACHE_SIZE)
        self._lock = threading.RLock()
        self.layout_config = layout_config or LayoutConfig.from_settings(settings)
        self.color_resolver = color_resolver

    @staticmethod
    def content_key(characters: List[Character], layout_config: LayoutConfig) -> str:
        payload: Any = {
            "characters": [character.model_dump(mode="json") for character in characters],
            "layout": layout_config.model_dump(mode="json"),
        }
        encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
        return hashlib.sha256(encoded.encode("utf-8")).hexdigest()

    def get_graph(self, characters: Iterable[CharacterInput]) -> RelationshipGraph:
        characters = to_characters(characters)
        key = self.content_key(characters, self.layout_config)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Graph cache hit for {key[:12]}")
            return cached

        graph = build_relationship_graph(characters, self.layout_config, self.color_resolver)
        with self._lock:
            self._cache[key] = graph
        return graph

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
