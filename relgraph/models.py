# /relgraph/models.py

from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Shared Pydantic data structures for the relationship graph engine.

class RelationshipCategory(str, Enum):
    """The five relationship fields a character record carries."""
    FAMILY = "family"
    FRIENDS_ALLIES = "friends_allies"
    RIVALS_ENEMIES = "rivals_enemies"
    ROMANTIC = "romantic"
    OTHER = "other_relationships"


class Character(BaseModel):
    """A user-authored character as read from the persistence layer."""
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True, extra='ignore')

    id: str
    name: str
    slug: Optional[str] = None
    image_url: Optional[str] = None
    world_id: Optional[str] = None
    # Raw relationship fields: a JSON string, an already-decoded list, or None.
    family: Any = None
    friends_allies: Any = None
    rivals_enemies: Any = None
    romantic: Any = None
    other_relationships: Any = None

    def relationship_fields(self) -> Iterator[Tuple[RelationshipCategory, Any]]:
        for category in RelationshipCategory:
            yield category, getattr(self, category.value)


class RelationshipEntry(BaseModel):
    """One declared connection from a character to a named target."""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra='ignore',
    )

    target_name: str = Field(alias="name", description="Display name of the target.")
    target_character_id: Optional[str] = Field(None, alias="oc_id", description="Id of the target character, if linked.")
    target_slug: Optional[str] = Field(None, alias="oc_slug")
    label: Optional[str] = Field(None, alias="relationship", description="Free-text caption, never interpreted.")
    relationship_type: Optional[str] = Field(None, description="Category used for color/icon lookup only.")
    target_image_url: Optional[str] = Field(None, alias="image_url")
    description: Optional[str] = None

    @field_validator('target_name')
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("target name must not be blank")
        return value

    @field_validator(
        'target_character_id', 'target_slug', 'label',
        'relationship_type', 'target_image_url', 'description',
        mode='before',
    )
    @classmethod
    def _empty_is_missing(cls, value):
        if value == "":
            return None
        return value


class ParsedEntry(BaseModel):
    """A relationship entry tagged with its declaring character and category."""
    model_config = ConfigDict(frozen=True)

    source: Character
    category: RelationshipCategory
    entry: RelationshipEntry


class Node(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Character id, or a synthesized id for external targets.")
    name: str = Field(description="Display name.")
    slug: Optional[str] = None
    is_external: bool = False
    image_url: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None


class Edge(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str = Field(alias="from", description="Id of the node that first declared the relationship.")
    target: str = Field(alias="to", description="Id of the other endpoint.")
    category: RelationshipCategory
    relationship: Optional[str] = Field(None, description="Label copied from the first-seen entry.")
    relationship_type: Optional[str] = None
    color: str = Field("#9E9E9E", description="Renderer colour resolved from relationship_type.")
    is_bidirectional: bool = False
    is_indirect: bool = False

    @property
    def pair(self) -> Tuple[str, str]:
        return canonical_pair(self.source, self.target)


class RelationshipRow(BaseModel):
    """Flat list-view row, one per accepted entry or inferred direction."""
    model_config = ConfigDict(frozen=True)

    from_id: str
    from_name: str
    to_name: str
    to_id: Optional[str] = None
    to_slug: Optional[str] = None
    category: RelationshipCategory
    relationship: Optional[str] = None
    relationship_type: Optional[str] = None
    image_url: Optional[str] = None
    is_indirect: bool = False


class Viewport(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_x: float
    min_y: float
    width: float
    height: float

    def as_view_box(self) -> str:
        return " ".join(_format_number(value) for value in (self.min_x, self.min_y, self.width, self.height))


class RelationshipGraph(BaseModel):
    model_config = ConfigDict(frozen=True)

    nodes: List[Node]
    edges: List[Edge]
    relationships: List[RelationshipRow]
    viewport: Viewport
    view_box: str


class ForceGraphNode(BaseModel):
    """Node in the compact force-graph summary."""
    id: str
    name: str
    group: int
    image_url: Optional[str] = None
    size: int = 5


class ForceGraphLink(BaseModel):
    source: str
    target: str
    relationship: str
    type: str
    value: int


class ForceGraph(BaseModel):
    nodes: List[ForceGraphNode]
    links: List[ForceGraphLink]


def _format_number(value: float) -> str:
    # Whole numbers print without a trailing ".0", others keep full precision.
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def canonical_pair(a: str, b: str) -> Tuple[str, str]:
    """Order-independent key for an unordered pair of node ids."""
    return (a, b) if a <= b else (b, a)
