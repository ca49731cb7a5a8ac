# -*- coding: utf-8 -*-
"""
Testes da API de conversão (FastAPI TestClient).
"""

import pytest
from fastapi.testclient import TestClient

from src.config import config
from src.main import app


@pytest.fixture
def client():
    return TestClient(app)


class TestParseEndpoint:

    def test_parse_returns_slices(self, client):
        response = client.post("/slices/parse", json={
            "markdown": "Intro\n:::notification:orange\n**Let op:** tekst\n:::",
            "external_id": "blog-1",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["external_id"] == "blog-1"
        assert data["slice_count"] == 2
        assert [s["sliceType"] for s in data["slices"]] == ["typography", "notification"]
        assert data["slices"][1]["variation"] == "orange"
        assert data["slices"][1]["fields"]["boldText"] == "Let op:"
        assert data["warnings"] == []
        assert data["latency_ms"] >= 0

    def test_unknown_marker_is_reported_as_warning(self, client):
        response = client.post("/slices/parse", json={"markdown": ":::onbekend\nfoo\n:::"})

        assert response.status_code == 200
        data = response.json()
        assert data["slices"] == []
        assert "onbekend" in data["warnings"][0]

    def test_empty_markdown(self, client):
        response = client.post("/slices/parse", json={"markdown": ""})
        assert response.status_code == 200
        assert response.json()["slice_count"] == 0

    def test_missing_markdown_is_rejected(self, client):
        response = client.post("/slices/parse", json={})
        assert response.status_code == 422

    def test_markdown_too_large(self, client, monkeypatch):
        monkeypatch.setattr(config, "max_markdown_length", 10)

        response = client.post("/slices/parse", json={"markdown": "x" * 11})
        assert response.status_code == 413


class TestConfigEndpoints:

    def test_types(self, client):
        response = client.get("/slices/types")

        assert response.status_code == 200
        data = response.json()
        assert "pros_cons" in data["supported"]
        assert "typography" in data["supported"]
        assert set(data["enabled"]) <= set(data["flags"])

    def test_instructions_follow_config(self, client, monkeypatch):
        monkeypatch.setattr(config.slices, "table", True)

        response = client.get("/slices/instructions")

        assert response.status_code == 200
        data = response.json()
        assert ":::table" in data["instructions"]
        assert "table" in data["enabled"]

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["enabled_slices"] == config.slices.enabled_slices()
