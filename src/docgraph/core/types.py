"""
Core type definitions for docgraph.

Two families of records live here:

- The document model parsed from a JSONL collection (DocumentPage, Chunk, UrlLink).
- The graph model handed to the renderer (GraphNode, GraphLink, GraphData).

GraphNode.type selects the model held in GraphNode.data. Input records may
carry any extra fields, including one named `kind`; none of them is reserved.
Callers dispatch on GraphNode.type, never on shape.
"""

from collections import Counter
from enum import StrEnum
from typing import Annotated, Any, Dict, List, Optional, Set, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    field_validator,
    model_validator,
)


class NodeType(StrEnum):
    """Categories of nodes in the projected graph."""
    COLLECTION = "collection"
    PAGE = "page"
    CHUNK = "chunk"
    URL_LINK = "url_link"


class LinkLabel(StrEnum):
    """Relationship labels. Every relationship is emitted with its inverse."""
    CONTAINS = "CONTAINS"
    IS_PART_OF = "IS_PART_OF"
    BELONGS_TO = "BELONGS_TO"
    IS_CHILD_OF = "IS_CHILD_OF"
    IS_PARENT_OF = "IS_PARENT_OF"
    REFERS_TO = "REFERS_TO"
    IS_REFERENCED_BY = "IS_REFERENCED_BY"


# =============================================================================
# Document model
# =============================================================================

class UrlLink(BaseModel):
    """An outbound reference. The URL string is its identity."""
    url: str

    model_config = ConfigDict(frozen=True, extra="allow")


class Chunk(BaseModel):
    """
    A sub-unit of a page's content.

    `id` is unique within its page, `unique_id` across the collection.
    A chunk without a parent (`parent_id` null) is a root chunk.
    """
    id: int
    unique_id: str = ""
    content: str = ""
    parent_id: Optional[int] = None
    parent_unique_id: Optional[str] = None
    url_links: List[UrlLink] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("unique_id", "content", mode="before")
    @classmethod
    def _null_to_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("url_links", mode="before")
    @classmethod
    def _coerce_url_links(cls, value: Any) -> Any:
        # Exporters disagree: some write [{"url": ...}], some bare strings, some null.
        if value is None:
            return []
        if isinstance(value, list):
            return [{"url": v} if isinstance(v, str) else v for v in value]
        return value

    @property
    def is_root(self) -> bool:
        return not self.parent_id


class DocumentPage(BaseModel):
    """
    A top-level document record.

    Owns its chunks exclusively. Unknown fields from the input line are kept
    on the model but nothing in docgraph reads them.
    """
    unique_id: str
    title: str = ""
    content: str = ""
    copyright: str = ""
    chunks: List[Chunk] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    summary: str = ""

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("title", "content", "copyright", "summary", mode="before")
    @classmethod
    def _null_to_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("chunks", "keywords", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def chunk_ids(self) -> Set[int]:
        return {chunk.id for chunk in self.chunks}


class CollectionSummary(BaseModel):
    """Synthetic payload of the single collection node."""
    text: str
    url: str = ""

    model_config = ConfigDict(frozen=True)


_DATA_MODELS = {
    NodeType.COLLECTION: CollectionSummary,
    NodeType.PAGE: DocumentPage,
    NodeType.CHUNK: Chunk,
    NodeType.URL_LINK: UrlLink,
}


def _data_tag(value: Any) -> Optional[str]:
    for node_type, model in _DATA_MODELS.items():
        if isinstance(value, model):
            return str(node_type)
    return None


NodeData = Annotated[
    Union[
        Annotated[CollectionSummary, Tag(NodeType.COLLECTION.value)],
        Annotated[DocumentPage, Tag(NodeType.PAGE.value)],
        Annotated[Chunk, Tag(NodeType.CHUNK.value)],
        Annotated[UrlLink, Tag(NodeType.URL_LINK.value)],
    ],
    Discriminator(_data_tag),
]


# =============================================================================
# Graph model
# =============================================================================

class GraphNode(BaseModel):
    """A renderable node. Ids are unique across one projected graph."""
    id: str
    name: str
    type: NodeType
    data: NodeData
    size_hint: float = 1.0

    @model_validator(mode="before")
    @classmethod
    def _build_data_from_type(cls, values: Any) -> Any:
        # Payloads carry no tag of their own; `type` names the model.
        if not isinstance(values, dict) or "data" not in values:
            return values
        model = _DATA_MODELS[NodeType(values.get("type"))]
        data = values["data"]
        if isinstance(data, dict):
            return {**values, "data": model.model_validate(data)}
        if not isinstance(data, model):
            raise ValueError(
                f"{type(data).__name__} payload does not match node type {values.get('type')}"
            )
        return values

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, GraphNode):
            return self.id == other.id
        return False


class GraphLink(BaseModel):
    """Directed, labelled link between two node ids."""
    source: str
    target: str
    label: LinkLabel

    model_config = ConfigDict(frozen=True)


class GraphData(BaseModel):
    """
    The output of one projection pass.

    Has no identity beyond the render it feeds; a selection change produces
    a brand new instance.
    """
    nodes: List[GraphNode] = Field(default_factory=list)
    links: List[GraphLink] = Field(default_factory=list)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def link_count(self) -> int:
        return len(self.links)

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        """Retrieve a node by id, or None."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def nodes_of_type(self, node_type: NodeType) -> List[GraphNode]:
        return [node for node in self.nodes if node.type == node_type]

    def stats(self) -> Dict[str, Any]:
        """Node and link counts, broken down by type and label."""
        return {
            "total_nodes": self.node_count,
            "total_links": self.link_count,
            "nodes_by_type": dict(Counter(str(n.type) for n in self.nodes)),
            "links_by_label": dict(Counter(str(link.label) for link in self.links)),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.model_dump(mode="json") for node in self.nodes],
            "links": [link.model_dump(mode="json") for link in self.links],
        }
