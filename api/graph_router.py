from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import List, Optional
import logging

# Add the root directory to the Python path
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

from relgraph.engine import GraphCache
from relgraph.force_graph import build_force_graph
from relgraph.models import Character, ForceGraph, RelationshipGraph

logger = logging.getLogger(__name__)

# --- Pydantic Models ---
class GraphRequest(BaseModel):
    characters: List[Character] = Field(default_factory=list, description="Published characters to graph.")
    world_id: Optional[str] = Field(None, description="Restrict the graph to characters of this world.")

    def selected_characters(self) -> List[Character]:
        if self.world_id is None:
            return self.characters
        return [character for character in self.characters if character.world_id == self.world_id]

# --- Router Initialization ---
router = APIRouter(
    prefix="/relationships",
    tags=["Relationships"]
)

graph_cache = GraphCache()

# --- API Endpoints ---

@router.post("/graph", response_model=RelationshipGraph)
def get_relationship_graph(request: GraphRequest):
    """Builds the laid-out relationship graph for the given characters."""
    try:
        return graph_cache.get_graph(request.selected_characters())
    except Exception as e:
        logger.error(f"Relationship graph computation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to build relationship graph.")


@router.post("/force-graph", response_model=ForceGraph)
def get_force_graph(request: GraphRequest):
    """Returns the compact character-only graph for force-graph widgets."""
    try:
        return build_force_graph(request.characters, world_id=request.world_id)
    except Exception as e:
        logger.error(f"Force graph computation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to build force graph.")
