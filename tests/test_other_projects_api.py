# File: tests/test_other_projects_api.py

from conftest import image


def test_create_without_image_then_replace(client, upload_dir):
    resp = client.post("/api/other-projects", data={"name": "Alpha"})
    assert resp.status_code == 201
    created = resp.json()
    assert created["main_image"] is None
    assert created["is_featured"] is False

    resp = client.put(
        f"/api/other-projects/{created['id']}",
        files=[("main_image", image("cover.webp", content_type="image/webp"))],
    )
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["main_image"].endswith("-cover.webp")
    assert updated["name"] == "Alpha"
    assert (upload_dir / updated["main_image"]).exists()


def test_replacing_image_deletes_old_file(client, upload_dir):
    created = client.post(
        "/api/other-projects",
        data={"name": "Beta"},
        files=[("main_image", image("old.png"))],
    ).json()
    old = created["main_image"]
    assert (upload_dir / old).exists()

    updated = client.put(
        f"/api/other-projects/{created['id']}",
        files=[("main_image", image("new.png"))],
    ).json()
    assert updated["main_image"] != old
    assert not (upload_dir / old).exists()
    assert (upload_dir / updated["main_image"]).exists()


def test_update_without_image_keeps_it(client, upload_dir):
    created = client.post(
        "/api/other-projects",
        data={"name": "Gamma", "short_intro": "intro", "detail": "d", "is_featured": "true"},
        files=[("main_image", image("keep.png"))],
    ).json()

    updated = client.put(f"/api/other-projects/{created['id']}", data={"detail": "d2"}).json()
    assert updated["main_image"] == created["main_image"]
    assert updated["short_intro"] == "intro"
    assert updated["detail"] == "d2"
    assert updated["is_featured"] is True
    assert (upload_dir / created["main_image"]).exists()


def test_is_featured_coercion(client):
    created = client.post("/api/other-projects", data={"name": "A", "is_featured": "yes"}).json()
    assert created["is_featured"] is False

    updated = client.put(f"/api/other-projects/{created['id']}", data={"is_featured": "true"}).json()
    assert updated["is_featured"] is True

    updated = client.put(f"/api/other-projects/{created['id']}", data={"is_featured": "TRUE"}).json()
    assert updated["is_featured"] is False


def test_create_requires_name(client):
    resp = client.post("/api/other-projects", data={"detail": "x"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Name is required"}


def test_rejects_non_image(client, upload_dir):
    resp = client.post(
        "/api/other-projects",
        data={"name": "Bad"},
        files=[("main_image", image("photo.exe", b"MZ", "application/octet-stream"))],
    )
    assert resp.status_code == 400
    assert client.get("/api/other-projects").json() == []
    assert list(upload_dir.iterdir()) == []


def test_only_one_main_image(client):
    resp = client.post(
        "/api/other-projects",
        data={"name": "Two"},
        files=[("main_image", image("a.png")), ("main_image", image("b.png"))],
    )
    assert resp.status_code == 400


def test_list_without_limit_returns_plain_array(client):
    for name in ("a", "b", "c"):
        client.post("/api/other-projects", data={"name": name})
    resp = client.get("/api/other-projects")
    assert resp.status_code == 200
    assert [p["name"] for p in resp.json()] == ["c", "b", "a"]


def test_list_with_limit_is_paginated(client):
    for i in range(5):
        client.post("/api/other-projects", data={"name": f"o{i}"})
    body = client.get("/api/other-projects", params={"limit": 2, "page": 3}).json()
    assert body["total"] == 5
    assert body["page"] == 3
    assert body["totalPages"] == 3
    assert [p["name"] for p in body["data"]] == ["o0"]


def test_list_filters_featured(client):
    client.post("/api/other-projects", data={"name": "plain"})
    client.post("/api/other-projects", data={"name": "star", "is_featured": "true"})

    featured = client.get("/api/other-projects", params={"is_featured": "true"}).json()
    assert [p["name"] for p in featured] == ["star"]

    others = client.get("/api/other-projects", params={"is_featured": "false"}).json()
    assert [p["name"] for p in others] == ["plain"]

    page = client.get("/api/other-projects", params={"is_featured": "true", "limit": 10}).json()
    assert page["total"] == 1


def test_delete_removes_image(client, upload_dir):
    created = client.post(
        "/api/other-projects",
        data={"name": "Gone"},
        files=[("main_image", image("gone.gif", content_type="image/gif"))],
    ).json()
    resp = client.delete(f"/api/other-projects/{created['id']}")
    assert resp.json() == {"message": "Other project deleted successfully"}
    assert not (upload_dir / created["main_image"]).exists()
    assert client.get(f"/api/other-projects/{created['id']}").status_code == 404


def test_missing_other_project(client):
    assert client.get("/api/other-projects/1").json() == {"error": "Other project not found"}
    assert client.put("/api/other-projects/1", data={"name": "x"}).status_code == 404
    assert client.delete("/api/other-projects/1").status_code == 404
