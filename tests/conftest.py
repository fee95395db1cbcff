"""
Pytest fixtures for the otto dashboard tests.
"""

import pytest

from otto.app import create_app


def make_record(name, state, image="nginx:1.25", status="Up 2 hours", ports=None,
                labels=None, container_id=None):
    """Raw container record shaped like the engine's list response."""
    return {
        "Id": container_id or (name.encode().hex() * 64)[:64],
        "Names": ["/" + name],
        "Image": image,
        "State": state,
        "Status": status,
        "Labels": labels or {},
        "Ports": ports or [],
    }


SAMPLE_INFO = {
    "ServerVersion": "27.3.1",
    "Name": "homelab",
    "NCPU": 8,
    "MemTotal": 8 * 1024 * 1024 * 1024,
}


class FakeEngine:
    """Stands in for engine.Engine and records every call made to it."""

    def __init__(self, records=None, info=None, list_error=None, info_error=None,
                 action_error=None, reachable=True):
        self.records = records if records is not None else []
        self.engine_info = info if info is not None else dict(SAMPLE_INFO)
        self.list_error = list_error
        self.info_error = info_error
        self.action_error = action_error
        self.reachable = reachable
        self.calls = []

    def open(self):
        self.calls.append(("open",))
        return self.reachable

    def close(self):
        self.calls.append(("close",))

    def list_containers(self, all=True):
        self.calls.append(("list", all))
        if self.list_error:
            raise self.list_error
        return self.records

    def info(self):
        self.calls.append(("info",))
        if self.info_error:
            raise self.info_error
        return self.engine_info

    def ping(self):
        self.calls.append(("ping",))
        return self.reachable

    def _action(self, name, container_id):
        self.calls.append((name, container_id))
        if self.action_error:
            raise self.action_error

    def start(self, container_id):
        self._action("start", container_id)

    def stop(self, container_id):
        self._action("stop", container_id)

    def pause(self, container_id):
        self._action("pause", container_id)

    def unpause(self, container_id):
        self._action("unpause", container_id)


@pytest.fixture
def records():
    return [
        make_record("web", "running", ports=[
            {"IP": "0.0.0.0", "PrivatePort": 80, "PublicPort": 8081, "Type": "tcp"},
        ]),
        make_record("cache", "paused", image="redis:7"),
        make_record("job", "exited", image="busybox", status="Exited (0) 3 days ago"),
        make_record("db", "created", image="postgres:16"),
    ]


@pytest.fixture
def engine(records):
    return FakeEngine(records=records)


@pytest.fixture
def client(engine):
    app = create_app(engine=engine, engine_enabled=True)
    app.config["TESTING"] = True
    return app.test_client()
