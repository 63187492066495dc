"""
Tests for project API endpoints.

Covers the owner-scoping rules end to end: a provider only ever sees,
changes or deletes its own projects.
"""

import uuid

import pytest


@pytest.fixture
def ada(signup):
    return signup("Ada", "ada@example.com", user_type="serviceProvider")


@pytest.fixture
def grace(signup):
    return signup("Grace", "grace@example.com", user_type="serviceProvider")


@pytest.fixture
def bob(signup):
    return signup("Bob", "bob@example.com")


def new_project(client, owner, client_user, **overrides) -> dict:
    body = {
        "title": "Kitchen remodel",
        "description": "Full kitchen refit",
        "client": client_user["user"]["id"],
        "category": "renovation",
        "budget": 15000,
    }
    body.update(overrides)
    response = client.post("/api/projects", json=body, headers=owner["headers"])
    assert response.status_code == 201, response.text
    return response.json()["project"]


class TestCreateProject:
    def test_create(self, client, ada, bob, providers):
        response = client.post(
            "/api/projects",
            json={
                "title": "Kitchen remodel",
                "description": "Full kitchen refit",
                "client": bob["user"]["id"],
                "category": "renovation",
                "budget": 15000,
            },
            headers=ada["headers"],
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Project created successfully"
        project = data["project"]
        assert project["status"] == "pending"
        assert project["serviceProvider"] == providers.get_by_email("ada@example.com").id
        assert project["client"] == bob["user"]["id"]
        assert project["startDate"] is not None

    def test_caller_without_profile(self, client, bob):
        response = client.post(
            "/api/projects",
            json={
                "title": "Shed",
                "description": "Garden shed",
                "client": bob["user"]["id"],
                "category": "construction",
            },
            headers=bob["headers"],
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Only service providers can create projects"

    def test_invalid_category(self, client, ada, bob):
        response = client.post(
            "/api/projects",
            json={
                "title": "Pool",
                "description": "Pool install",
                "client": bob["user"]["id"],
                "category": "landscaping",
            },
            headers=ada["headers"],
        )

        assert response.status_code == 400

    def test_requires_auth(self, client):
        assert client.post("/api/projects", json={}).status_code == 401


class TestReadProjects:
    def test_list_only_own_projects(self, client, ada, grace, bob):
        mine = new_project(client, ada, bob)
        new_project(client, grace, bob, title="Bathroom")

        response = client.get("/api/projects", headers=ada["headers"])

        assert response.status_code == 200
        assert [p["id"] for p in response.json()["projects"]] == [mine["id"]]

    def test_get_own_project(self, client, ada, bob):
        project = new_project(client, ada, bob)

        response = client.get(f"/api/projects/{project['id']}", headers=ada["headers"])

        assert response.status_code == 200
        assert response.json()["project"]["title"] == "Kitchen remodel"

    def test_other_providers_project_is_not_found(self, client, ada, grace, bob):
        project = new_project(client, ada, bob)

        response = client.get(f"/api/projects/{project['id']}", headers=grace["headers"])

        assert response.status_code == 404
        assert response.json()["message"] == "Project not found"

    def test_missing_and_malformed_ids_are_not_found(self, client, ada):
        for project_id in (str(uuid.uuid4()), "not-a-uuid"):
            response = client.get(f"/api/projects/{project_id}", headers=ada["headers"])
            assert response.status_code == 404

    def test_regular_user_denied(self, client, bob):
        response = client.get("/api/projects", headers=bob["headers"])

        assert response.status_code == 403
        assert response.json()["message"] == "Access denied"


class TestUpdateProject:
    def test_update_allowed_fields(self, client, ada, bob):
        project = new_project(client, ada, bob)

        response = client.put(
            f"/api/projects/{project['id']}",
            json={
                "status": "in-progress",
                "milestones": [{"title": "Demolition", "status": "completed"}],
            },
            headers=ada["headers"],
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Project updated successfully"
        assert data["project"]["status"] == "in-progress"
        assert data["project"]["milestones"][0]["title"] == "Demolition"

    def test_owner_and_client_cannot_be_rewritten(self, client, ada, grace, bob):
        project = new_project(client, ada, bob)

        response = client.put(
            f"/api/projects/{project['id']}",
            json={
                "title": "Kitchen and pantry",
                "serviceProvider": "someone-else",
                "client": grace["user"]["id"],
            },
            headers=ada["headers"],
        )

        assert response.status_code == 200
        updated = response.json()["project"]
        assert updated["title"] == "Kitchen and pantry"
        assert updated["serviceProvider"] == project["serviceProvider"]
        assert updated["client"] == bob["user"]["id"]

    def test_unknown_field_rejected(self, client, ada, bob):
        project = new_project(client, ada, bob)

        response = client.put(
            f"/api/projects/{project['id']}",
            json={"createdAt": "2020-01-01T00:00:00Z"},
            headers=ada["headers"],
        )

        assert response.status_code == 400

    @pytest.mark.parametrize(
        "field",
        [
            "title",
            "description",
            "status",
            "category",
            "startDate",
            "images",
            "documents",
            "milestones",
            "reviews",
        ],
    )
    def test_required_field_cannot_be_cleared(self, client, ada, bob, field):
        project = new_project(client, ada, bob)

        response = client.put(
            f"/api/projects/{project['id']}",
            json={field: None},
            headers=ada["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"
        stored = client.get(f"/api/projects/{project['id']}", headers=ada["headers"])
        assert stored.json()["project"][field] is not None

    def test_other_providers_project(self, client, ada, grace, bob):
        project = new_project(client, ada, bob)

        response = client.put(
            f"/api/projects/{project['id']}",
            json={"status": "cancelled"},
            headers=grace["headers"],
        )

        assert response.status_code == 404


class TestDeleteProject:
    def test_delete_then_gone(self, client, ada, bob):
        project = new_project(client, ada, bob)

        response = client.delete(f"/api/projects/{project['id']}", headers=ada["headers"])
        assert response.status_code == 200
        assert response.json() == {"message": "Project deleted successfully"}

        again = client.get(f"/api/projects/{project['id']}", headers=ada["headers"])
        assert again.status_code == 404

    def test_cannot_delete_others_project(self, client, ada, grace, bob, projects):
        project = new_project(client, ada, bob)

        response = client.delete(f"/api/projects/{project['id']}", headers=grace["headers"])

        assert response.status_code == 404
        assert project["id"] in projects.rows


def test_provider_signup_to_project_scenario(client, signup):
    """Provider registers without a license, creates a project, and keeps it private."""
    registered = client.post(
        "/api/services/register",
        data={"name": "Ada", "email": "ada@x.com", "password": "secret123"},
    )
    assert registered.status_code == 201
    ada_headers = {"Authorization": f"Bearer {registered.json()['token']}"}
    customer = signup("Client", "client@x.com")
    rival = signup("Grace", "grace@x.com", user_type="serviceProvider")

    created = client.post(
        "/api/projects",
        json={
            "title": "Deck",
            "description": "Cedar deck with steps",
            "client": customer["user"]["id"],
            "category": "construction",
        },
        headers=ada_headers,
    )
    assert created.status_code == 201
    project = created.json()["project"]
    assert project["status"] == "pending"

    listing = client.get("/api/projects", headers=ada_headers)
    assert [p["id"] for p in listing.json()["projects"]] == [project["id"]]

    foreign = client.get(f"/api/projects/{project['id']}", headers=rival["headers"])
    assert foreign.status_code == 404
