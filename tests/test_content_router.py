from __future__ import annotations

from fastapi.testclient import TestClient

from portfolio_api.core.container import Container
from portfolio_api.main import create_app


SKILL = {"name": "Python", "level": 95, "icon": "🐍", "color": "#3776AB", "order": 1}


def test_public_lists_start_empty(client):
    for path in ("/api/skills", "/api/services", "/api/projects", "/api/experiences", "/api/blog"):
        response = client.get(path)
        assert response.status_code == 200, path
        assert response.json() == [], path


def test_writes_require_session(client):
    assert client.post("/api/skills", json=SKILL).status_code == 401
    assert client.patch("/api/skills/abc", json={"level": 1}).status_code == 401
    assert client.delete("/api/projects/abc").status_code == 401
    assert client.get("/api/admin/blog").status_code == 401
    assert client.get("/api/contact").status_code == 401
    assert client.get("/api/newsletter/subscribers").status_code == 401


def test_skill_crud_round_trip(admin_client):
    created = admin_client.post("/api/skills", json=SKILL)
    assert created.status_code == 201
    skill = created.json()
    assert skill["isAdditional"] is False
    assert skill["createdAt"] == skill["updatedAt"]

    patched = admin_client.patch(f"/api/skills/{skill['id']}", json={"level": 90})
    assert patched.status_code == 200
    assert patched.json()["level"] == 90
    assert patched.json()["name"] == "Python"

    assert admin_client.get("/api/skills").json()[0]["level"] == 90

    assert admin_client.delete(f"/api/skills/{skill['id']}").json() == {"success": True}
    assert admin_client.delete(f"/api/skills/{skill['id']}").status_code == 404
    assert admin_client.patch(f"/api/skills/{skill['id']}", json={"level": 1}).status_code == 404
    assert admin_client.get("/api/skills").json() == []


def test_skill_validation(admin_client):
    too_high = admin_client.post("/api/skills", json={**SKILL, "level": 101})
    blank_name = admin_client.post("/api/skills", json={**SKILL, "name": "  "})
    created = admin_client.post("/api/skills", json=SKILL).json()
    null_name = admin_client.patch(f"/api/skills/{created['id']}", json={"name": None})

    assert too_high.status_code == 400
    assert blank_name.status_code == 400
    assert null_name.status_code == 400


def test_skills_and_services_are_ordered(admin_client):
    admin_client.post("/api/skills", json={**SKILL, "name": "Second", "order": 2})
    admin_client.post("/api/skills", json={**SKILL, "name": "First", "order": 1})
    admin_client.post(
        "/api/services",
        json={"title": "Later", "description": "d", "icon": "x", "order": 5, "features": ["a", "b"]},
    )
    admin_client.post("/api/services", json={"title": "Sooner", "description": "d", "icon": "x", "order": 1})

    assert [s["name"] for s in admin_client.get("/api/skills").json()] == ["First", "Second"]
    services = admin_client.get("/api/services").json()
    assert [s["title"] for s in services] == ["Sooner", "Later"]
    assert services[1]["features"] == ["a", "b"]


def test_project_get_and_patch_only_touches_given_fields(admin_client):
    created = admin_client.post(
        "/api/projects",
        json={
            "title": "Dashboard",
            "description": "Analytics",
            "technologies": ["React", "D3.js"],
            "githubUrl": "https://github.com/example/dashboard",
            "featured": True,
        },
    ).json()

    fetched = admin_client.get(f"/api/projects/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["technologies"] == ["React", "D3.js"]

    patched = admin_client.patch(f"/api/projects/{created['id']}", json={"demoUrl": "https://demo.example.com"}).json()
    assert patched["demoUrl"] == "https://demo.example.com"
    assert patched["githubUrl"] == "https://github.com/example/dashboard"
    assert patched["featured"] is True

    cleared = admin_client.patch(f"/api/projects/{created['id']}", json={"demoUrl": None}).json()
    assert cleared["demoUrl"] is None

    assert admin_client.get("/api/projects/missing").status_code == 404


def test_experience_crud(admin_client):
    created = admin_client.post(
        "/api/experiences",
        json={"period": "2020 - 2024", "title": "BSc", "company": "University", "description": "CS", "gpa": "3.9"},
    )
    assert created.status_code == 201
    experience_id = created.json()["id"]

    patched = admin_client.patch(f"/api/experiences/{experience_id}", json={"coursework": "Algorithms"})
    assert patched.json()["coursework"] == "Algorithms"
    assert patched.json()["gpa"] == "3.9"
    assert admin_client.delete(f"/api/experiences/{experience_id}").json() == {"success": True}


def test_blog_publication_and_slugs(admin_client):
    draft = admin_client.post(
        "/api/blog",
        json={"title": "Hello", "slug": "hello-world", "excerpt": "Hi", "content": "Body", "tags": ["intro"]},
    )
    assert draft.status_code == 201
    post = draft.json()
    assert post["published"] is False
    assert post["publishedAt"] is None

    assert admin_client.get("/api/blog").json() == []
    assert admin_client.get("/api/blog/hello-world").status_code == 404
    assert len(admin_client.get("/api/admin/blog").json()) == 1

    published = admin_client.patch(f"/api/blog/{post['id']}", json={"published": True}).json()
    assert published["publishedAt"] is not None
    assert [p["slug"] for p in admin_client.get("/api/blog").json()] == ["hello-world"]
    assert admin_client.get("/api/blog/hello-world").json()["tags"] == ["intro"]

    duplicate = admin_client.post(
        "/api/blog",
        json={"title": "Again", "slug": "hello-world", "excerpt": "x", "content": "y"},
    )
    bad_slug = admin_client.post(
        "/api/blog",
        json={"title": "Bad", "slug": "Not A Slug", "excerpt": "x", "content": "y"},
    )
    assert duplicate.status_code == 400
    assert bad_slug.status_code == 400

    assert admin_client.delete(f"/api/blog/{post['id']}").json() == {"success": True}
    assert admin_client.get("/api/admin/blog").json() == []


def test_contact_messages(client):
    created = client.post(
        "/api/contact",
        json={"name": "Visitor", "email": "Visitor@Example.com", "subject": "Hi", "message": "Hello there"},
    )
    assert created.status_code == 201
    assert created.json()["success"] is True
    message_id = created.json()["id"]

    invalid = client.post(
        "/api/contact",
        json={"name": "Visitor", "email": "nope", "subject": "Hi", "message": "Hello there"},
    )
    assert invalid.status_code == 400

    client.post("/api/auth/register", json={"name": "Admin", "email": "admin@example.com", "password": "admin-pass-1"})
    messages = client.get("/api/contact").json()
    assert [m["id"] for m in messages] == [message_id]
    assert messages[0]["email"] == "visitor@example.com"
    assert messages[0]["phone"] is None


def test_newsletter_subscription_lifecycle(client):
    first = client.post("/api/newsletter/subscribe", json={"email": "Reader@Example.com", "name": "Reader"})
    assert first.status_code == 201
    assert first.json()["isActive"] is True

    assert client.post("/api/newsletter/subscribe", json={"email": "reader@example.com"}).status_code == 400

    assert client.post("/api/newsletter/unsubscribe", json={"email": "reader@example.com"}).json() == {"success": True}
    assert client.post("/api/newsletter/unsubscribe", json={"email": "reader@example.com"}).json() == {"success": False}

    again = client.post("/api/newsletter/subscribe", json={"email": "reader@example.com"})
    assert again.status_code == 201
    assert again.json()["id"] == first.json()["id"]
    assert again.json()["name"] == "Reader"
    assert again.json()["unsubscribedAt"] is None

    client.post("/api/auth/register", json={"name": "Admin", "email": "admin@example.com", "password": "admin-pass-1"})
    subscribers = client.get("/api/newsletter/subscribers").json()
    assert [s["email"] for s in subscribers] == ["reader@example.com"]


def test_demo_seed_populates_empty_store(settings_factory):
    client = TestClient(create_app(container=Container(settings_factory(seed_demo_content=True))))

    assert len(client.get("/api/skills").json()) == 8
    assert len(client.get("/api/services").json()) == 3
    projects = client.get("/api/projects").json()
    assert [p["order"] for p in projects] == [1, 2, 3]
