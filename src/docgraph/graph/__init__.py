"""
Graph module for docgraph.

projector builds the node/link graph, details describes single nodes and
visualize hands graphs to a renderer.
"""
