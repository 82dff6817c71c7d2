"""
Unit tests for the presentation adapter and the HTML renderer.

Ensures that:
1. Style mappings give each node type a distinct color and scale radius by size_hint.
2. Renders receive a fresh projection plus the callbacks.
3. Clicks route into the session's inspected node.
4. Generated HTML embeds the graph safely.
"""

import json
import re
from unittest.mock import MagicMock, patch

import pytest

from docgraph.core.errors import UnknownNodeError
from docgraph.core.types import NodeType
from docgraph.graph.visualize import (
    HtmlRenderer,
    PresentationAdapter,
    build_render_payload,
    generate_html,
    node_color,
    node_radius,
)
from docgraph.graph.projector import project
from docgraph.state.session import CollectionSession
from tests.factories import make_chunk, make_page


@pytest.fixture
def session(collection_text):
    s = CollectionSession()
    s.load_text(collection_text)
    return s


@pytest.fixture
def renderer():
    return MagicMock()


def _embedded_data(html):
    match = re.search(r"const graphData = (.*);\n", html)
    return json.loads(match.group(1))


class TestStyleMapping:
    def test_each_type_has_a_distinct_color(self, session):
        session.selection.select_all()
        graph = session.graph()
        colors = {t: node_color(graph.nodes_of_type(t)[0]) for t in NodeType}
        assert len(set(colors.values())) == 4
        assert colors[NodeType.COLLECTION] == "#f97316"

    def test_radius_scales_with_size_hint(self, session):
        session.selection.select_all()
        graph = session.graph()
        assert node_radius(graph.get_node("collection")) == pytest.approx(20.0)
        assert node_radius(graph.get_node("http://shared")) == pytest.approx(4.0)
        assert node_radius(graph.get_node("page:p1")) > node_radius(graph.get_node("chunk:p1:0"))


class TestPresentationAdapter:
    def test_refresh_hands_graph_and_callbacks(self, session, renderer):
        session.selection.toggle("p1")
        adapter = PresentationAdapter(session, renderer)

        adapter.refresh()

        renderer.render.assert_called_once()
        graph, color, radius, on_click = renderer.render.call_args.args
        assert "page:p1" in graph.node_ids()
        assert color is node_color
        assert radius is node_radius
        assert on_click == adapter.handle_click

    def test_refresh_reprojects_after_selection_change(self, session, renderer):
        adapter = PresentationAdapter(session, renderer)
        adapter.refresh()
        first = adapter.graph

        session.selection.toggle("p2")
        adapter.refresh()

        assert first.node_ids() == ["collection"]
        assert "page:p2" in adapter.graph.node_ids()
        assert renderer.render.call_count == 2

    def test_click_callback_sets_inspected(self, session, renderer):
        session.selection.select_all()
        adapter = PresentationAdapter(session, renderer)
        adapter.refresh()
        on_click = renderer.render.call_args.args[3]

        node = adapter.graph.get_node("chunk:p2:1")
        on_click(node)

        assert session.selection.inspected is node

    def test_click_by_id(self, session, renderer):
        session.selection.select_all()
        adapter = PresentationAdapter(session, renderer)

        node = adapter.click_by_id("http://shared")

        assert node.type == NodeType.URL_LINK
        assert session.selection.inspected == node

    def test_click_by_id_unknown(self, session, renderer):
        adapter = PresentationAdapter(session, renderer)
        with pytest.raises(UnknownNodeError):
            adapter.click_by_id("page:p1")

    def test_close_details(self, session, renderer):
        adapter = PresentationAdapter(session, renderer)
        adapter.click_by_id("collection")
        adapter.close_details()
        assert session.selection.inspected is None


class TestGenerateHtml:
    def test_structure(self, session):
        session.selection.select_all()
        html = generate_html(session.graph(), status="2 of 2 page(s) selected.")

        assert "<!DOCTYPE html>" in html
        assert "d3.forceSimulation" in html
        assert "2 of 2 page(s) selected." in html
        assert "const showPlaceholder = false;" in html

    def test_embedded_payload(self, session):
        session.selection.select_all()
        data = _embedded_data(generate_html(session.graph()))

        nodes = {n["id"]: n for n in data["nodes"]}
        assert nodes["page:p1"]["color"] == "#a855f7"
        assert nodes["page:p1"]["type"] == "page"
        assert ["Title", "First"] in nodes["page:p1"]["details"]
        assert {"source": "collection", "target": "page:p1", "label": "CONTAINS"} in data["links"]

    def test_empty_selection_shows_placeholder(self, session):
        html = generate_html(session.graph())
        assert "const showPlaceholder = true;" in html
        assert "No Pages Selected" in html

    def test_script_breakout_is_escaped(self):
        page = make_page("p1", [make_chunk(0, content="</script><script>alert(1)</script>")])
        html = generate_html(project([page]))

        assert "</script><script>alert(1)" not in html
        data = _embedded_data(html)
        chunk = next(n for n in data["nodes"] if n["id"] == "chunk:p1:0")
        assert ["Content", "</script><script>alert(1)</script>"] in chunk["details"]

    def test_status_is_escaped(self):
        html = generate_html(project([]), status="<b>x</b>")
        assert "&lt;b&gt;x&lt;/b&gt;" in html

    def test_custom_style_callbacks(self):
        payload = build_render_payload(project([]), color=lambda n: "red", radius=lambda n: 9)
        assert payload["nodes"][0]["color"] == "red"
        assert payload["nodes"][0]["radius"] == 9


class TestHtmlRenderer:
    def test_writes_file_without_browser(self, session, tmp_path):
        out = tmp_path / "view.html"
        renderer = HtmlRenderer(out, open_browser=False, status=session.status_line)
        adapter = PresentationAdapter(session, renderer)

        with patch("docgraph.graph.visualize.webbrowser.open") as mock_open:
            result = adapter.refresh()

        assert result == out
        assert "0 of 2 page(s) selected." in out.read_text(encoding="utf-8")
        assert renderer.on_click == adapter.handle_click
        mock_open.assert_not_called()

    def test_opens_browser(self, session, tmp_path):
        out = tmp_path / "view.html"
        renderer = HtmlRenderer(out, open_browser=True)

        with patch("docgraph.graph.visualize.webbrowser.open") as mock_open:
            PresentationAdapter(session, renderer).refresh()

        mock_open.assert_called_once_with(out.resolve().as_uri())
