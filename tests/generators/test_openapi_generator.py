"""Tests for genspine.generators.openapi."""

import json

import pytest

from genspine import evaluator
from genspine.codegen import Writer
from genspine.core.errors import GenerationError
from genspine.generators import openapi


class TestDocument:
    """document() of the bank API."""

    @pytest.fixture
    def doc(self, bank_roots):
        return openapi.document(bank_roots[0])

    def test_info(self, doc):
        assert doc["openapi"] == "3.0.3"
        assert doc["info"] == {"title": "Bank API", "version": "2.0"}

    def test_paths(self, doc):
        assert sorted(doc["paths"]) == ["/accounts", "/accounts/{id}"]
        assert sorted(doc["paths"]["/accounts"]) == ["get", "post"]
        assert sorted(doc["paths"]["/accounts/{id}"]) == ["delete", "get"]

    def test_operation(self, doc):
        op = doc["paths"]["/accounts/{id}"]["get"]
        assert op["operationId"] == "account#show"
        assert op["parameters"] == [{"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}}]
        schema = op["responses"]["200"]["content"]["application/json"]["schema"]
        assert schema["properties"]["balance"] == {"type": "number"}

    def test_request_body(self, doc):
        body = doc["paths"]["/accounts"]["post"]["requestBody"]
        assert body["content"]["application/json"]["schema"]["required"] == ["name"]

    def test_description(self, doc):
        assert doc["paths"]["/accounts"]["get"]["description"] == "List all accounts."


class TestGenerate:
    """openapi.generate()."""

    def test_file(self, bank_roots, tmp_path):
        [f] = openapi.generate(bank_roots)
        path = Writer(tmp_path).write(f)
        assert path == str(tmp_path / "gen" / "http" / "openapi.json")
        assert json.loads((tmp_path / "gen" / "http" / "openapi.json").read_text())["info"]["title"] == "Bank API"

    def test_one_document_per_root(self, tmp_path):
        """Further roots get suffixed file names instead of failing."""
        roots = evaluator.run("twin_design")
        writer = Writer(tmp_path)
        paths = [writer.write(f) for f in openapi.generate(roots)]
        assert paths == [
            str(tmp_path / "gen" / "http" / "openapi.json"),
            str(tmp_path / "gen" / "http" / "openapi_1.json"),
        ]

    def test_no_api(self):
        with pytest.raises(GenerationError, match="^openapi: "):
            openapi.generate([])
