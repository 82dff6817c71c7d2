"""
Graph Projector.

Maps a list of pages onto the node/link graph the renderer draws:

    collection --CONTAINS--> page --CONTAINS--> chunk 0
    chunk --IS_CHILD_OF--> parent chunk
    chunk --REFERS_TO--> url

Every relationship is emitted in both directions with its inverse label, so
the graph is semantically undirected but arrowed both ways when drawn.

Node id scheme:
    collection                   the synthetic collection node
    page:<unique_id>             one per page
    chunk:<unique_id>:<chunk id> one per chunk
    <url>                        one per distinct URL across the whole graph
"""

from typing import Dict, List, Sequence, Set

from .. import config
from ..core.types import (
    Chunk,
    CollectionSummary,
    DocumentPage,
    GraphData,
    GraphLink,
    GraphNode,
    LinkLabel,
    NodeType,
    UrlLink,
)


def page_node_id(page_id: str) -> str:
    return f"{config.PAGE_ID_PREFIX}{config.ID_SEPARATOR}{page_id}"


def chunk_node_id(page_id: str, chunk_id: int) -> str:
    sep = config.ID_SEPARATOR
    return f"{config.CHUNK_ID_PREFIX}{sep}{page_id}{sep}{chunk_id}"


def collection_summary_text(page_count: int) -> str:
    return f"{page_count} document(s) referenced in this collection."


class _GraphAccumulator:
    """Collects nodes and links for one projection pass."""

    def __init__(self):
        self.nodes: List[GraphNode] = []
        self.links: List[GraphLink] = []
        self._url_nodes: Dict[str, GraphNode] = {}

    def add_node(self, node: GraphNode) -> None:
        self.nodes.append(node)

    def link_pair(
        self, source: str, target: str, forward: LinkLabel, inverse: LinkLabel
    ) -> None:
        """Add source->target with `forward` and target->source with `inverse`."""
        self.links.append(GraphLink(source=source, target=target, label=forward))
        self.links.append(GraphLink(source=target, target=source, label=inverse))

    def ensure_url_node(self, url_link: UrlLink) -> str:
        """Emit a url_link node the first time a URL is seen; return its id."""
        node_id = url_link.url
        if node_id not in self._url_nodes:
            node = GraphNode(
                id=node_id,
                name=config.URL_NODE_NAME,
                type=NodeType.URL_LINK,
                data=url_link,
                size_hint=config.NODE_SIZE_HINTS[NodeType.URL_LINK],
            )
            self._url_nodes[node_id] = node
            self.add_node(node)
        return node_id

    def build(self) -> GraphData:
        return GraphData(nodes=self.nodes, links=self.links)


def _project_chunk(
    acc: _GraphAccumulator, page: DocumentPage, chunk: Chunk, chunk_ids: Set[int]
) -> None:
    node_id = chunk_node_id(page.unique_id, chunk.id)
    acc.add_node(GraphNode(
        id=node_id,
        name=f"Chunk {chunk.id}",
        type=NodeType.CHUNK,
        data=chunk,
        size_hint=config.NODE_SIZE_HINTS[NodeType.CHUNK],
    ))

    # Root linking goes by the id convention, not by parent_id being null
    if chunk.id == config.ROOT_CHUNK_ID:
        acc.link_pair(
            page_node_id(page.unique_id), node_id,
            LinkLabel.CONTAINS, LinkLabel.BELONGS_TO,
        )

    has_parent = chunk.parent_id is not None and chunk.parent_id != chunk.id
    if has_parent and chunk.parent_id in chunk_ids:
        acc.link_pair(
            node_id, chunk_node_id(page.unique_id, chunk.parent_id),
            LinkLabel.IS_CHILD_OF, LinkLabel.IS_PARENT_OF,
        )

    for url_link in chunk.url_links:
        url_id = acc.ensure_url_node(url_link)
        acc.link_pair(node_id, url_id, LinkLabel.REFERS_TO, LinkLabel.IS_REFERENCED_BY)


def project(pages: Sequence[DocumentPage]) -> GraphData:
    """
    Project pages into a fresh graph.

    Pure and deterministic: the same pages in the same order always produce the
    same nodes and links in the same order. The collection node is always
    present, so an empty page list yields one node and no links.
    """
    acc = _GraphAccumulator()

    acc.add_node(GraphNode(
        id=config.COLLECTION_NODE_ID,
        name=config.COLLECTION_NODE_NAME,
        type=NodeType.COLLECTION,
        data=CollectionSummary(text=collection_summary_text(len(pages))),
        size_hint=config.NODE_SIZE_HINTS[NodeType.COLLECTION],
    ))

    for page in pages:
        page_id = page_node_id(page.unique_id)
        acc.add_node(GraphNode(
            id=page_id,
            name=page.title,
            type=NodeType.PAGE,
            data=page,
            size_hint=config.NODE_SIZE_HINTS[NodeType.PAGE],
        ))
        acc.link_pair(
            config.COLLECTION_NODE_ID, page_id,
            LinkLabel.CONTAINS, LinkLabel.IS_PART_OF,
        )

        chunk_ids = page.chunk_ids
        for chunk in page.chunks:
            _project_chunk(acc, page, chunk, chunk_ids)

    return acc.build()
