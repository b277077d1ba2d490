"""Tests for ResourceClient against an in-memory Chef server."""

import json
import threading
from unittest.mock import MagicMock

import pytest

from chefapi.errors import HTTPConflict, HTTPError, HTTPNotFound
from chefapi.resources.base import Resource, ResourceType
from chefapi.resources.resource_client import ResourceClient


class Widget(Resource):
    resource_type = ResourceType(chef_type="widget", chef_id="name")


class FakeChefServer:
    """Thread-safe stand-in for Connection backed by dicts."""

    def __init__(self, thread_count: int = 4, server_fields: dict | None = None) -> None:
        self.thread_count = thread_count
        self.server_fields = server_fields or {}
        self.collections: dict[str, dict[str, dict]] = {}
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def seed(self, collection: str, *items: dict) -> None:
        store = self.collections.setdefault(collection, {})
        for item in items:
            store[item["name"]] = dict(item)

    def _split(self, path: str) -> tuple[str, str | None]:
        collection, _, chef_id = path.partition("/")
        return collection, chef_id or None

    def _missing(self, path: str) -> HTTPNotFound:
        return HTTPNotFound(f"404 for {path}", status_code=404, path=path)

    def get(self, path):
        with self._lock:
            self.calls.append(("GET", path))
            collection, chef_id = self._split(path)
            store = self.collections.get(collection, {})
            if chef_id is None:
                return {
                    name: f"https://chef.example.com/{collection}/{name}" for name in store
                }
            if chef_id not in store:
                raise self._missing(path)
            return dict(store[chef_id])

    def post(self, path, body):
        with self._lock:
            self.calls.append(("POST", path))
            data = json.loads(body)
            store = self.collections.setdefault(path, {})
            if data["name"] in store:
                raise HTTPConflict(f"409 for {path}", status_code=409, path=path)
            store[data["name"]] = {**data, **self.server_fields}
            return {
                "uri": f"https://chef.example.com/{path}/{data['name']}",
                **self.server_fields,
            }

    def put(self, path, body):
        with self._lock:
            self.calls.append(("PUT", path))
            collection, chef_id = self._split(path)
            store = self.collections.get(collection, {})
            if chef_id not in store:
                raise self._missing(path)
            store[chef_id] = json.loads(body)
            return dict(store[chef_id])

    def delete(self, path):
        with self._lock:
            self.calls.append(("DELETE", path))
            collection, chef_id = self._split(path)
            store = self.collections.get(collection, {})
            if chef_id not in store:
                raise self._missing(path)
            return store.pop(chef_id)


@pytest.fixture
def server():
    return FakeChefServer()


@pytest.fixture
def widgets(server):
    return ResourceClient(server, Widget)


class TestAll:
    def test_builds_identity_only_resources(self, server, widgets):
        server.seed("widgets", {"name": "a", "size": 1}, {"name": "b", "size": 2})
        result = widgets.all()
        assert sorted(r.chef_id for r in result) == ["a", "b"]
        assert all(r["size"] is None for r in result)
        assert server.calls == [("GET", "widgets")]

    def test_empty_collection(self, widgets):
        assert widgets.all() == []


class TestFind:
    def test_get_existing(self, server, widgets):
        server.seed("widgets", {"name": "a", "size": 1})
        widget = widgets.get("a")
        assert isinstance(widget, Widget)
        assert widget["size"] == 1

    def test_get_missing_raises(self, widgets):
        with pytest.raises(HTTPNotFound):
            widgets.get("missing")

    def test_find_missing_returns_none(self, widgets):
        assert widgets.find("missing") is None

    def test_find_accepts_resource(self, server, widgets):
        server.seed("widgets", {"name": "a", "size": 1})
        ref = Widget(server, {"name": "a"})
        assert widgets.find(ref)["size"] == 1

    def test_find_is_layered_on_get(self, widgets):
        widgets.get = MagicMock(side_effect=HTTPNotFound("gone", status_code=404))
        assert widgets.find("a") is None
        widgets.get.assert_called_once_with("a")

    def test_find_propagates_other_errors(self):
        conn = MagicMock()
        conn.get.side_effect = HTTPError("500 for widgets/a", status_code=500)
        with pytest.raises(HTTPError):
            ResourceClient(conn, Widget).find("a")

    def test_empty_identity_rejected(self, widgets):
        with pytest.raises(ValueError):
            widgets.get("")


class TestCreate:
    def test_posts_and_merges_server_fields(self):
        server = FakeChefServer(server_fields={"created_at": "2026-01-01", "size": 9})
        widgets = ResourceClient(server, Widget)

        created = widgets.create({"name": "a", "size": 1, "color": "red"})

        assert created["color"] == "red"
        assert created["size"] == 9
        assert created["created_at"] == "2026-01-01"
        assert created["uri"] == "https://chef.example.com/widgets/a"
        assert server.calls == [("POST", "widgets")]

    def test_create_then_find_is_superset(self):
        server = FakeChefServer(server_fields={"created_at": "2026-01-01"})
        widgets = ResourceClient(server, Widget)
        submitted = {"name": "a", "size": 1}

        created = widgets.create(submitted)
        found = widgets.find(created.chef_id)

        for key, value in submitted.items():
            assert found[key] == value
        assert found["created_at"] == "2026-01-01"

    def test_accepts_resource(self, server, widgets):
        local = Widget(server, {"name": "a"})
        created = widgets.create(local)
        assert created == local
        assert created is not local

    def test_conflict_propagates(self, server, widgets):
        server.seed("widgets", {"name": "a"})
        with pytest.raises(HTTPConflict):
            widgets.create({"name": "a"})

    def test_rejects_unconvertible(self, widgets):
        with pytest.raises(TypeError):
            widgets.create(42)


class TestUpdate:
    def test_returns_server_copy_only(self):
        conn = MagicMock()
        conn.put.return_value = {"name": "a", "size": 2}

        updated = ResourceClient(conn, Widget).update(
            {"name": "a", "size": 1, "local_only": True}
        )

        assert updated["size"] == 2
        assert "local_only" not in updated.to_hash()
        path, body = conn.put.call_args[0]
        assert path == "widgets/a"
        assert json.loads(body)["local_only"] is True

    def test_missing_raises_not_found(self, widgets):
        with pytest.raises(HTTPNotFound):
            widgets.update({"name": "missing"})


class TestDelete:
    def test_returns_deleted_representation(self, server, widgets):
        server.seed("widgets", {"name": "a", "size": 1})
        deleted = widgets.delete("a")
        assert deleted["size"] == 1
        assert widgets.find("a") is None

    def test_missing_raises_not_found(self, widgets):
        with pytest.raises(HTTPNotFound):
            widgets.delete("missing")


class TestDeleteAll:
    @pytest.mark.parametrize(
        "count,workers",
        [(1, 1), (5, 1), (5, 5), (20, 4), (50, 7), (3, 8)],
    )
    def test_deletes_everything_once(self, count, workers):
        server = FakeChefServer(thread_count=workers)
        names = [f"w{i}" for i in range(count)]
        server.seed("widgets", *({"name": n} for n in names))

        deleted = ResourceClient(server, Widget).delete_all()

        assert len(deleted) == count
        assert {d.chef_id for d in deleted} == set(names)
        assert server.collections["widgets"] == {}
        delete_calls = [c for c in server.calls if c[0] == "DELETE"]
        assert len(delete_calls) == count

    def test_empty_collection(self, widgets):
        assert widgets.delete_all() == []

    def test_failure_propagates(self, server):
        server.seed("widgets", *({"name": f"w{i}"} for i in range(6)))
        original_delete = server.delete

        def flaky_delete(path):
            if path == "widgets/w3":
                raise HTTPError("500 for widgets/w3", status_code=500, path=path)
            return original_delete(path)

        server.delete = flaky_delete
        with pytest.raises(HTTPError, match="w3"):
            ResourceClient(server, Widget).delete_all()
