"""Tests for the FastAPI service mode."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from repotree.orchestrator import Orchestrator
from repotree.service import create_app


@pytest.fixture
def client(fake_github, config) -> TestClient:
    app = create_app(lambda: Orchestrator(fake_github.client, config=config))
    return TestClient(app)


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analysis_endpoint_returns_summary(client: TestClient) -> None:
    response = client.get("/repos/acme/widgets")

    assert response.status_code == 200
    payload = response.json()
    assert payload["owner"] == "acme"
    assert payload["repository"]["name"] == "widgets"
    assert payload["repository"]["stars"] == 42
    assert payload["files"] == 4
    assert payload["folders"] == 2
    assert payload["complexity"] == 2
    assert payload["tech_stack"] == ["TypeScript", "Markdown", "Node.js"]
    assert payload["important_files"] == ["README.md", "package.json", "src/index.ts"]
    assert payload["project_type"] == "Web Application"
    assert payload["structure_quality"] == "Simple & Clean"


def test_missing_repository_maps_to_404(client: TestClient, fake_github) -> None:
    response = client.get("/repos/acme/nope")

    assert response.status_code == 404
    assert response.json() == {"detail": "Repository not found"}
    assert fake_github.paths == ["/repos/acme/nope"]


def test_upstream_tree_failure_maps_to_502(client: TestClient, fake_github) -> None:
    fake_github.fail("/repos/acme/widgets/git/trees/abc123", 500)

    response = client.get("/repos/acme/widgets")

    assert response.status_code == 502
    assert response.json() == {"detail": "Failed to fetch repository tree"}


def test_export_tree_as_plain_text(client: TestClient) -> None:
    response = client.get("/repos/acme/widgets/export/tree")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text.splitlines()[0] == "├── 📝 README.md"


def test_export_json_document(client: TestClient) -> None:
    response = client.get("/repos/acme/widgets/export/json")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    document = json.loads(response.text)
    assert document["repository"]["stats"]["files"] == 4


def test_export_list_honours_search_and_filter(client: TestClient) -> None:
    response = client.get(
        "/repos/acme/widgets/export/list", params={"search": "src", "filter": "folders"}
    )

    assert response.status_code == 200
    assert response.text == "src\nsrc/lib"


def test_export_rejects_unknown_format(client: TestClient) -> None:
    response = client.get("/repos/acme/widgets/export/pdf")

    assert response.status_code == 422


def test_export_detailed_list(client: TestClient) -> None:
    response = client.get(
        "/repos/acme/widgets/export/list", params={"filter": "files", "search": "util", "detailed": "true"}
    )

    assert response.status_code == 200
    assert response.text == "⚡ src/lib/util.ts (2.0KB)"


def test_export_tree_with_expanded_folders(client: TestClient) -> None:
    response = client.get("/repos/acme/widgets/export/tree", params=[("expand", "src"), ("expand", "src/lib")])

    assert response.status_code == 200
    assert response.text.endswith("        └── ⚡ util.ts\n")


def test_export_rejects_unknown_folder(client: TestClient) -> None:
    response = client.get("/repos/acme/widgets/export/tree", params={"expand": "README.md"})

    assert response.status_code == 400
