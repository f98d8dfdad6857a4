"""End-to-end tests: example configuration, YAML schemas and the handler chain.

These tests load the shipped example files, so they double as a check that
the examples stay valid.
"""

from pathlib import Path

import pytest

from resource_normalizer.config import load_config
from resource_normalizer.handlers import HandlerContext, HandlerResponse, NormalizeHandler
from resource_normalizer.normalization import CanonicalDocument, RequestContext
from resource_normalizer.schema import load_schema_registry
from tests.helpers import article_payload

REPO_ROOT = Path(__file__).parents[2]
ENV_VARS = ("NORMALIZER_BASE_URL", "NORMALIZER_SCHEMA_PATH", "LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT")


@pytest.fixture
def app_config(monkeypatch):
    """Configuration loaded from normalizer.example.yaml."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(REPO_ROOT)
    config, _ = load_config(REPO_ROOT / "normalizer.example.yaml")
    return config


@pytest.fixture
def chain(app_config):
    """Normalize handler wired from configuration, plus a fake fetch step."""
    registry = app_config.build_registry()
    request = RequestContext(schema=registry, url=app_config.base_url)
    handler = NormalizeHandler(
        app_config.relationship_type_map, normalizer=app_config.build_normalizer()
    )

    def run(payload):
        return handler.request(
            HandlerContext(request=request),
            lambda req: HandlerResponse(content=payload, request=req),
        )

    return run


class TestExampleFiles:
    """The shipped example files load and agree with each other."""

    def test_schema_file_types(self):
        registry = load_schema_registry(REPO_ROOT / "schemas.example.yaml")
        assert registry.known_type_names() == ["article", "comment", "user", "profile", "tag"]

    def test_config_points_at_schema_file(self, app_config):
        assert app_config.schema_path == Path("schemas.example.yaml")
        assert app_config.base_url == "https://api.example.com/api/articles"


class TestNormalizeThroughHandler:
    """Raw responses through the handler chain."""

    def test_article_response(self, chain):
        document = chain(article_payload())

        validated = CanonicalDocument.model_validate(document)
        article = validated.resources()[0]
        assert article.type == "article"
        assert article.id == "how-to-train-your-dragon"
        assert article.attributes["tagList"] == ["dragons", "training"]
        assert article.relationships["author"].data.type == "user"
        assert article.relationships["author"].links["self"] == (
            "https://api.example.com/api/articles/how-to-train-your-dragon/relationships/author"
        )
        assert validated.included_keys() == [("user", "jake")]

    def test_articles_response(self, chain):
        payload = {
            "articles": [
                article_payload("first")["article"],
                article_payload("second", author={"username": "ann"})["article"],
            ],
            "articlesCount": 2,
        }

        document = chain(payload)

        assert [item["id"] for item in document["data"]] == ["first", "second"]
        assert [(item["type"], item["id"]) for item in document["included"]] == [
            ("user", "jake"),
            ("user", "ann"),
        ]

    def test_comments_response(self, chain):
        payload = {
            "comments": [
                {"id": 1, "body": "Nice", "createdAt": "2026-01-01T00:00:00Z",
                 "author": {"username": "jake"}},
                {"id": 2, "body": "Thanks", "createdAt": "2026-01-02T00:00:00Z",
                 "author": {"username": "jake"}},
            ]
        }

        document = chain(payload)

        assert [item["id"] for item in document["data"]] == ["1", "2"]
        assert document["data"][0]["relationships"]["author"]["data"] == {"type": "user", "id": "jake"}
        # one copy per comment
        assert len(document["included"]) == 2

    def test_empty_comments_response(self, chain):
        assert chain({"comments": []}) == {"data": [], "included": []}

    def test_tags_response(self, chain):
        document = chain({"tags": ["dragons", "training"]})

        assert document == {
            "data": [
                {"type": "tag", "id": "dragons", "attributes": {"name": "dragons"}},
                {"type": "tag", "id": "training", "attributes": {"name": "training"}},
            ]
        }

    def test_profile_response(self, chain):
        document = chain({"profile": {"username": "jake", "bio": None, "following": False}})

        assert document == {
            "data": {
                "type": "profile",
                "id": "jake",
                "attributes": {"username": "jake", "bio": None, "following": False},
            }
        }
