"""Tests for the HTTP key/value store."""

from urllib.parse import unquote

import httpx
import pytest

from typedconfig import StoreOperationError
from typedconfig.stores import HttpConfigStore


class FakeKeyValueServer:
    """Minimal REST key/value endpoint for httpx.MockTransport."""

    def __init__(self, values=None, fail_with=None):
        self.values = dict(values or {})
        self.fail_with = fail_with
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with:
            return httpx.Response(self.fail_with)

        key = unquote(request.url.raw_path.decode("ascii").split("?")[0].rsplit("/", 1)[-1])
        if request.method == "GET":
            if key not in self.values:
                return httpx.Response(404)
            return httpx.Response(200, text=self.values[key])
        if request.method == "PUT":
            self.values[key] = request.content.decode("utf-8")
            return httpx.Response(204)
        if request.method == "DELETE":
            if self.values.pop(key, None) is None:
                return httpx.Response(404)
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def server():
    return FakeKeyValueServer({"timeout": "30"})


@pytest.fixture
def client(server):
    c = httpx.Client(transport=httpx.MockTransport(server))
    yield c
    c.close()


@pytest.fixture
def store(client):
    return HttpConfigStore("http://config.local/v1/kv/", client=client)


class TestRead:

    def test_existing_key(self, store, server):
        assert store.read("timeout") == "30"
        assert str(server.requests[0].url) == "http://config.local/v1/kv/timeout"

    def test_missing_key_is_none(self, store):
        assert store.read("missing") is None

    def test_server_error_propagates(self, client):
        failing = httpx.Client(transport=httpx.MockTransport(FakeKeyValueServer(fail_with=500)))
        store = HttpConfigStore("http://config.local", client=failing)

        with pytest.raises(httpx.HTTPStatusError):
            store.read("timeout")


class TestWrite:

    def test_put_value(self, store, server):
        store.write("retries", "5")

        assert server.values["retries"] == "5"
        assert server.requests[-1].method == "PUT"

    def test_none_deletes(self, store, server):
        store.write("timeout", None)

        assert "timeout" not in server.values
        assert server.requests[-1].method == "DELETE"

    def test_key_is_percent_encoded(self, store, server):
        """Reserved characters stay inside the key's path segment."""
        store.write("feature?flag#1", "on")

        request = server.requests[-1]
        assert request.url.raw_path == b"/v1/kv/feature%3Fflag%231"
        assert request.url.query == b""
        assert server.values == {"timeout": "30", "feature?flag#1": "on"}
        assert store.read("feature?flag#1") == "on"

    def test_deleting_missing_key_is_not_an_error(self, store):
        store.write("never-set", None)

    def test_read_only_store_rejects_writes(self, client, server):
        store = HttpConfigStore("http://config.local", client=client, read_only=True)

        assert store.can_write is False
        with pytest.raises(StoreOperationError, match="read-only"):
            store.write("timeout", "1")
        assert server.requests == []


class TestLifecycle:

    def test_injected_client_not_closed(self, store, client):
        store.close()
        assert client.is_closed is False

    def test_closed_store_rejects_calls(self, store):
        store.close()
        with pytest.raises(StoreOperationError, match="closed"):
            store.read("timeout")

    def test_owned_client_closed(self):
        store = HttpConfigStore("http://config.local", api_key="secret", timeout_seconds=2.0)
        client = store._client

        assert client.headers["Authorization"] == "Bearer secret"
        assert client.timeout.read == 2.0

        with store:
            pass

        assert client.is_closed is True

    def test_name_mentions_url(self, store):
        assert store.name == "HTTP (http://config.local/v1/kv)"
