"""
Presentation Adapter and HTML renderer.

The adapter is the only seam between docgraph and whatever draws the graph.
It hands the renderer a projected graph together with two style callbacks
(color by node type, radius by size_hint) and a click handler; clicks come back
as GraphNode records and are forwarded verbatim to the session's selection.

HtmlRenderer is the bundled renderer: a standalone page running a D3 force
simulation with curved, arrowed, labelled links and a detail panel.
"""

import json
import logging
import math
import webbrowser
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Protocol

from .. import config
from ..core.errors import UnknownNodeError
from ..core.types import GraphData, GraphNode
from ..state.session import CollectionSession
from .details import node_details

logger = logging.getLogger(__name__)

ColorFn = Callable[[GraphNode], str]
RadiusFn = Callable[[GraphNode], float]
ClickFn = Callable[[GraphNode], None]


def node_color(node: GraphNode) -> str:
    """Fixed display color per node type."""
    return config.NODE_COLORS.get(node.type, config.FALLBACK_NODE_COLOR)


def node_radius(node: GraphNode) -> float:
    """Visual radius for a node; area grows linearly with size_hint."""
    return math.sqrt(max(node.size_hint, 0)) * config.NODE_REL_SIZE


class GraphRenderer(Protocol):
    """The external drawing collaborator."""

    def render(
        self,
        graph: GraphData,
        color: ColorFn,
        radius: RadiusFn,
        on_click: ClickFn,
    ) -> Any:
        ...


class PresentationAdapter:
    """
    Binds projections of a session to a renderer.

    `refresh()` must be called after every selection change; the graph is never
    patched in place.
    """

    def __init__(self, session: CollectionSession, renderer: GraphRenderer):
        self.session = session
        self.renderer = renderer
        self.graph: Optional[GraphData] = None

    def refresh(self) -> Any:
        """Re-project the current selection and hand it to the renderer."""
        self.graph = self.session.graph()
        logger.debug(
            f"Rendering {self.graph.node_count} nodes / {self.graph.link_count} links"
        )
        return self.renderer.render(self.graph, node_color, node_radius, self.handle_click)

    def handle_click(self, node: GraphNode) -> None:
        self.session.selection.set_inspected(node)

    def close_details(self) -> None:
        self.session.selection.set_inspected(None)

    def click_by_id(self, node_id: str) -> GraphNode:
        """Simulate a click on a node of the last rendered graph."""
        if self.graph is None:
            self.refresh()
        node = self.graph.get_node(node_id)
        if node is None:
            raise UnknownNodeError(node_id)
        self.handle_click(node)
        return node


# =============================================================================
# HTML renderer
# =============================================================================

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Document Collection Visualizer</title>
    <script src="https://d3js.org/d3.v7.min.js"></script>
    <style>
        :root {
            --bg-base: __BACKGROUND__;
            --bg-panel: rgba(17, 24, 39, 0.85);
            --border: #374151;
            --text-primary: #f3f4f6;
            --text-secondary: #9ca3af;
            --font-sans: -apple-system, BlinkMacSystemFont, "Segoe UI", "Inter", Roboto, sans-serif;
        }

        * { box-sizing: border-box; }

        body {
            margin: 0;
            height: 100vh;
            overflow: hidden;
            background: var(--bg-base);
            color: var(--text-primary);
            font-family: var(--font-sans);
        }

        .header {
            position: absolute;
            top: 0;
            left: 0;
            padding: 16px 24px;
            pointer-events: none;
            z-index: 10;
        }
        .header h1 { margin: 0; font-size: 22px; }
        .header p { margin: 4px 0 0; color: var(--text-secondary); font-size: 14px; }

        #graph { width: 100vw; height: 100vh; }

        .placeholder {
            display: flex;
            flex-direction: column;
            align-items: center;
            justify-content: center;
            height: 100vh;
            color: var(--text-secondary);
        }
        .placeholder h2 { margin: 0; font-size: 24px; }

        .inspector {
            position: absolute;
            top: 0;
            right: 0;
            width: 100%;
            max-width: 28rem;
            height: 100%;
            background: var(--bg-panel);
            backdrop-filter: blur(4px);
            border-left: 1px solid var(--border);
            padding: 16px;
            display: none;
            flex-direction: column;
            z-index: 20;
        }
        .inspector-header {
            display: flex;
            justify-content: space-between;
            align-items: center;
            border-bottom: 1px solid var(--border);
            padding-bottom: 12px;
        }
        .inspector-header h2 { margin: 0; font-size: 18px; }
        .inspector-close {
            background: transparent;
            border: none;
            color: var(--text-primary);
            font-size: 18px;
            cursor: pointer;
        }
        .inspector dl { overflow-y: auto; flex: 1; }
        .detail-row { border-bottom: 1px solid var(--border); padding: 8px 0; }
        .detail-row dt { font-size: 12px; color: var(--text-secondary); }
        .detail-row dd { margin: 4px 0 0; font-size: 13px; white-space: pre-wrap; word-break: break-word; }
        .detail-row a { color: #60a5fa; }

        .link-label { font-size: 6px; fill: rgba(255, 255, 255, 0.5); }
    </style>
</head>
<body>
    <div class="header">
        <h1>Document Collection Visualizer</h1>
        <p id="status">__STATUS__</p>
    </div>

    <div id="graph"></div>

    <aside class="inspector" id="inspector">
        <div class="inspector-header">
            <h2 id="insp-title"></h2>
            <button class="inspector-close" onclick="closeInspector()">&#x2715;</button>
        </div>
        <dl id="insp-rows"></dl>
    </aside>

    <script>
        const graphData = __GRAPH_DATA__;
        const showPlaceholder = __EMPTY__;

        function escapeHtml(s) {
            return String(s).replace(/[&<>"']/g, c => ({'&': '&amp;', '<': '&lt;', '>': '&gt;', '"': '&quot;', "'": '&#39;'}[c]));
        }

        function openInspector(node) {
            document.getElementById('insp-title').textContent = `${node.name} Details`;
            const rows = node.details.map(([label, value]) => {
                const body = label === 'URL'
                    ? `<a href="${escapeHtml(value)}" target="_blank" rel="noopener noreferrer">${escapeHtml(value)}</a>`
                    : escapeHtml(value);
                return `<div class="detail-row"><dt>${escapeHtml(label)}</dt><dd>${body}</dd></div>`;
            });
            document.getElementById('insp-rows').innerHTML = rows.join('');
            document.getElementById('inspector').style.display = 'flex';
        }

        function closeInspector() {
            document.getElementById('inspector').style.display = 'none';
        }

        function renderGraph() {
            const container = document.getElementById('graph');
            if (showPlaceholder) {
                container.innerHTML = `
                    <div class="placeholder">
                        <h2>No Pages Selected</h2>
                        <p>Select one or more pages to visualize them.</p>
                    </div>`;
                return;
            }

            const width = container.clientWidth;
            const height = container.clientHeight;
            const nodes = graphData.nodes.map(n => ({...n}));
            const links = graphData.links.map(l => ({...l}));

            const svg = d3.select('#graph').append('svg')
                .attr('width', width)
                .attr('height', height)
                .attr('viewBox', [0, 0, width, height]);

            svg.append('defs').append('marker')
                .attr('id', 'arrow')
                .attr('viewBox', '0 -5 10 10')
                .attr('refX', 10)
                .attr('markerWidth', 3.5)
                .attr('markerHeight', 3.5)
                .attr('orient', 'auto')
                .append('path')
                .attr('d', 'M0,-5L10,0L0,5')
                .attr('fill', 'rgba(255,255,255,0.4)');

            const root = svg.append('g');
            svg.call(d3.zoom().on('zoom', (event) => root.attr('transform', event.transform)));

            const simulation = d3.forceSimulation(nodes)
                .force('link', d3.forceLink(links).id(d => d.id).distance(40))
                .force('charge', d3.forceManyBody().strength(-60))
                .force('center', d3.forceCenter(width / 2, height / 2));

            const link = root.append('g')
                .selectAll('path')
                .data(links)
                .join('path')
                .attr('fill', 'none')
                .attr('stroke', 'rgba(255,255,255,0.2)')
                .attr('stroke-width', 0.5)
                .attr('marker-end', 'url(#arrow)');
            link.append('title').text(d => d.label);

            const node = root.append('g')
                .selectAll('g')
                .data(nodes)
                .join('g')
                .style('cursor', 'pointer')
                .on('click', (event, d) => openInspector(d))
                .call(drag(simulation));

            node.append('circle')
                .attr('r', d => d.radius)
                .attr('fill', d => d.color);
            node.append('title').text(d => d.name);

            simulation.on('tick', () => {
                link.attr('d', d => curvedPath(d.source, d.target, 0.25));
                node.attr('transform', d => `translate(${d.x},${d.y})`);
            });
        }

        function curvedPath(s, t, curvature) {
            const dx = t.x - s.x, dy = t.y - s.y;
            const dist = Math.sqrt(dx * dx + dy * dy) || 1;
            const r = t.radius || 0;
            const tx = t.x - dx / dist * r, ty = t.y - dy / dist * r;
            const cx = (s.x + tx) / 2 - dy * curvature, cy = (s.y + ty) / 2 + dx * curvature;
            return `M${s.x},${s.y} Q${cx},${cy} ${tx},${ty}`;
        }

        function drag(simulation) {
            function dragstarted(event) {
                if (!event.active) simulation.alphaTarget(0.3).restart();
                event.subject.fx = event.subject.x;
                event.subject.fy = event.subject.y;
            }
            function dragged(event) {
                event.subject.fx = event.x;
                event.subject.fy = event.y;
            }
            function dragended(event) {
                if (!event.active) simulation.alphaTarget(0);
                event.subject.fx = null;
                event.subject.fy = null;
            }
            return d3.drag().on('start', dragstarted).on('drag', dragged).on('end', dragended);
        }

        window.onload = renderGraph;
    </script>
</body>
</html>
"""


def _html_escape(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def build_render_payload(
    graph: GraphData,
    color: ColorFn = node_color,
    radius: RadiusFn = node_radius,
) -> Dict[str, Any]:
    """
    Flatten a graph into the JSON the page script consumes.

    Style callbacks are applied here so the script does no type dispatch of
    its own; detail rows are precomputed for the same reason.
    """
    return {
        "nodes": [
            {
                "id": node.id,
                "name": node.name,
                "type": str(node.type),
                "color": color(node),
                "radius": radius(node),
                "details": node_details(node),
            }
            for node in graph.nodes
        ],
        "links": [
            {"source": link.source, "target": link.target, "label": str(link.label)}
            for link in graph.links
        ],
    }


def generate_html(
    graph: GraphData,
    status: str = "",
    color: ColorFn = node_color,
    radius: RadiusFn = node_radius,
) -> str:
    """
    Generate the HTML content for the graph visualization.

    A graph holding only the collection node renders the "No Pages Selected"
    placeholder instead of a lone dot.
    """
    payload = build_render_payload(graph, color, radius)
    # "</" inside a <script> block would end it early
    json_data = json.dumps(payload).replace("</", "<\\/")
    is_empty = graph.node_count <= 1

    return (
        HTML_TEMPLATE
        .replace("__BACKGROUND__", config.BACKGROUND_COLOR)
        .replace("__STATUS__", _html_escape(status))
        .replace("__EMPTY__", "true" if is_empty else "false")
        .replace("__GRAPH_DATA__", json_data)
    )


class HtmlRenderer:
    """
    Renders graphs into a standalone HTML file.

    Clicks happen in the browser, out of reach of this process; the registered
    click handler is kept so callers can route synthetic clicks through it.
    """

    def __init__(
        self,
        output_path: str | Path = config.DEFAULT_HTML_OUTPUT,
        open_browser: bool = True,
        status: Callable[[], str] | None = None,
    ):
        self.output_path = Path(output_path)
        self.open_browser = open_browser
        self.status = status
        self.on_click: Optional[ClickFn] = None

    def render(
        self,
        graph: GraphData,
        color: ColorFn,
        radius: RadiusFn,
        on_click: ClickFn,
    ) -> Path:
        self.on_click = on_click
        status = self.status() if self.status else ""
        html_content = generate_html(graph, status=status, color=color, radius=radius)
        self.output_path.write_text(html_content, encoding="utf-8")
        logger.debug(f"Wrote visualization to {self.output_path}")

        if self.open_browser:
            webbrowser.open(self.output_path.resolve().as_uri())

        return self.output_path
