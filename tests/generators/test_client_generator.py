"""Tests for genspine.generators.client."""

import json

import pytest

from genspine.codegen import Writer
from genspine.generators import client


class FakeResponse:
    def __init__(self, content: bytes):
        self.content = content

    def read(self):
        return self.content

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False


class RecordingOpener:
    """Stands in for urllib.request.urlopen."""

    def __init__(self, content: bytes = b""):
        self.content = content
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return FakeResponse(self.content)


class TestClientGenerator:
    """client.generate() and the generated client."""

    @pytest.fixture
    def module(self, bank_roots, tmp_path, load_generated):
        writer = Writer(tmp_path)
        for f in client.generate(bank_roots):
            writer.write(f)
        return load_generated("gen.http.account.client")

    def test_files(self, bank_roots):
        assert [f.output_path(set()) for f in client.generate(bank_roots)] == ["gen/http/account/client.py"]

    def test_path_parameters(self, module):
        opener = RecordingOpener(b'{"id": 3, "name": "alice", "balance": 1.5}')
        result = module.Client("http://bank.test/", opener=opener).show(3)

        assert result == {"id": 3, "name": "alice", "balance": 1.5}
        request = opener.requests[0]
        assert request.full_url == "http://bank.test/accounts/3"
        assert request.get_method() == "GET"
        assert request.data is None

    def test_body(self, module):
        opener = RecordingOpener(b'{"id": 7}')
        module.Client("http://bank.test", opener=opener).create("bob")

        request = opener.requests[0]
        assert request.get_method() == "POST"
        assert json.loads(request.data) == {"name": "bob"}

    def test_parameters_quoted(self, module):
        opener = RecordingOpener()
        assert module.Client("http://bank.test", opener=opener).delete("a/b") is None
        assert opener.requests[0].full_url == "http://bank.test/accounts/a%2Fb"
