"""Shared fixtures for tests."""

import itertools
import json

import pytest

from flowbuilder.config import FlowSettings, get_settings
from flowbuilder.editor import FlowEditor
from flowbuilder.graph.store import GraphStore
from flowbuilder.schema.codec import import_document


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop cached settings so env changes in a test take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def id_factory():
    """Return a deterministic id factory: n1, n2, ..."""
    counter = itertools.count(1)
    return lambda: f"n{next(counter)}"


@pytest.fixture
def store(id_factory) -> GraphStore:
    """Return a store holding only the seed node."""
    return GraphStore(id_factory=id_factory)


@pytest.fixture
def editor(store) -> FlowEditor:
    """Return an editor around the seed store with default settings."""
    return FlowEditor(store=store, settings=FlowSettings())


@pytest.fixture
def three_node_json() -> str:
    """Return a document with a chain 1 -> a -> b."""
    return json.dumps({
        "nodes": [
            {"id": "1", "type": "default", "position": {"x": 100, "y": 100},
             "data": {"label": "Start"}},
            {"id": "a", "position": {"x": 150, "y": 170},
             "data": {"label": "Fetch", "description": "download input"}},
            {"id": "b", "position": {"x": 150.5, "y": 240},
             "data": {"label": "Parse", "description": ""}},
        ],
        "edges": [
            {"id": "e1", "source": "1", "target": "a", "animated": True},
            {"id": "e2", "source": "a", "target": "b",
             "sourceHandle": "out", "targetHandle": "in", "animated": True,
             "style": {"strokeWidth": 2, "stroke": "black"},
             "markerEnd": {"type": "arrowclosed", "width": 20, "height": 20,
                           "color": "black"}},
        ],
    })


@pytest.fixture
def dangling_json() -> str:
    """Return a document whose only edge points at a missing node."""
    return json.dumps({
        "nodes": [
            {"id": "1", "position": {"x": 0, "y": 0}, "data": {"label": "Start"}},
        ],
        "edges": [
            {"id": "e1", "source": "1", "target": "ghost"},
        ],
    })


@pytest.fixture
def three_node_document(three_node_json):
    """Return the parsed three-node document."""
    return import_document(three_node_json)


@pytest.fixture
def three_node_store(three_node_document, id_factory) -> GraphStore:
    """Return a store loaded with the three-node document."""
    return GraphStore(three_node_document, id_factory=id_factory)


@pytest.fixture
def react_flow_json() -> str:
    """Return a flow.json as saved by the browser editor (React Flow 11)."""
    return json.dumps({
        "nodes": [
            {"id": "1", "type": "default", "position": {"x": 100, "y": 100},
             "data": {"label": "Start"}, "width": 150, "height": 40,
             "selected": False, "positionAbsolute": {"x": 100, "y": 100},
             "dragging": False},
            {"id": "4f1c2d1e-0b7a-4c52-9d0e-6a1f3b2c5d7e",
             "position": {"x": 150, "y": 170},
             "data": {"label": "Review", "description": "check output"},
             "width": 150, "height": 40, "selected": True},
        ],
        "edges": [
            {"source": "1", "sourceHandle": None,
             "target": "4f1c2d1e-0b7a-4c52-9d0e-6a1f3b2c5d7e",
             "targetHandle": None, "type": "bezier", "animated": True,
             "style": {"strokeWidth": 2, "stroke": "black"},
             "markerEnd": {"type": "arrowclosed", "width": 20, "height": 20,
                           "color": "black"},
             "id": "9a8b7c6d-5e4f-4a3b-8c2d-1e0f9a8b7c6d"},
        ],
        "viewport": {"x": 0, "y": 0, "zoom": 1},
    })
