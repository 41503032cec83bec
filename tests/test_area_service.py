# File: tests/test_area_service.py

import pytest
from fastapi.testclient import TestClient

from cms_backend.main import create_application
from cms_backend.models.area import Area
from cms_backend.services.area_service import closure_from_edges, resolve_area_ids


@pytest.mark.parametrize("strategy", ["sql", "memory"])
def test_resolve_area_ids(area_tree, strategy):
    assert resolve_area_ids(area_tree, "1", strategy) == {"1", "2", "3", "4"}
    assert resolve_area_ids(area_tree, "2", strategy) == {"2", "4"}
    assert resolve_area_ids(area_tree, 4, strategy) == {"4"}
    assert resolve_area_ids(area_tree, "5", strategy) == {"5"}


@pytest.mark.parametrize("strategy", ["sql", "memory"])
def test_resolve_unknown_area(area_tree, strategy):
    assert resolve_area_ids(area_tree, "42", strategy) == set()
    assert resolve_area_ids(area_tree, "north", strategy) == set()


def test_closure_from_edges():
    edges = [(1, None), (2, 1), (3, 1), (4, 3), (5, None), (6, 5)]
    assert closure_from_edges(edges, 1) == {1, 2, 3, 4}
    assert closure_from_edges(edges, 3) == {3, 4}
    assert closure_from_edges(edges, 6) == {6}
    assert closure_from_edges(edges, 9) == set()


def test_memory_strategy_through_api(settings):
    app = create_application(settings.model_copy(update={"area_resolver": "memory"}))
    with TestClient(app) as client:
        with app.state.session_factory() as db:
            db.add_all([Area(id=1), Area(id=2, parent_id=1), Area(id=3)])
            db.commit()
        client.post("/api/projects", data={"name": "child", "areas": "2"})
        client.post("/api/projects", data={"name": "other", "areas": "3"})

        body = client.get("/api/projects", params={"areas": "1"}).json()
        assert [p["name"] for p in body["data"]] == ["child"]
