"""
Engine client wiring.

Wraps the docker SDK client that talks to the local container engine.
Connection settings come from the host environment (docker.from_env).
"""

import logging
import threading
from contextlib import contextmanager

import docker
import requests
from docker.errors import APIError, DockerException, NotFound

from otto import config

logger = logging.getLogger(__name__)


class EngineError(Exception):
    """The engine rejected or failed a call."""


class EngineConnectionError(EngineError):
    """The engine could not be reached."""


class ContainerNotFound(EngineError):
    """No container with the given id."""


class ContainerConflict(EngineError):
    """The container is not in a state that allows the action."""


def translate_error(exc):
    """Map a docker SDK / transport exception onto the engine error types."""
    message = str(exc)
    if isinstance(exc, NotFound):
        return ContainerNotFound(message)
    if isinstance(exc, APIError) and exc.status_code == 409:
        return ContainerConflict(message)
    if isinstance(exc, requests.exceptions.ConnectionError):
        return EngineConnectionError(message)
    if isinstance(exc, DockerException) and 'Error while fetching server API version' in message:
        return EngineConnectionError(message)
    return EngineError(message)


@contextmanager
def engine_call():
    try:
        yield
    except (DockerException, requests.exceptions.RequestException) as e:
        raise translate_error(e) from e


class Engine:
    """
    One long-lived handle on the container engine, shared by all requests.

    The raw client is opened once; if the engine is down at that point the
    open is attempted again on the next call. Individual calls are never
    retried.
    """

    def __init__(self, client=None, timeout=config.ENGINE_TIMEOUT,
                 version=config.ENGINE_API_VERSION):
        self._client = client
        self._timeout = timeout
        self._version = version
        self._lock = threading.Lock()

    def open(self):
        """Connect eagerly. Failure is logged, not raised."""
        try:
            self._raw()
        except EngineError as e:
            logger.error(f'Error connecting to engine: {e}')
            return False
        return True

    def _raw(self):
        if self._client is not None:
            return self._client
        with self._lock:
            if self._client is None:
                kwargs = {'version': self._version}
                if self._timeout is not None:
                    kwargs['timeout'] = self._timeout
                with engine_call():
                    self._client = docker.from_env(**kwargs)
        return self._client

    def close(self):
        if self._client is not None:
            self._client.close()
            self._client = None

    def list_containers(self, all=True):
        """Raw container records, stopped ones included when all is set."""
        client = self._raw()
        with engine_call():
            return client.api.containers(all=all)

    def info(self):
        client = self._raw()
        with engine_call():
            return client.info()

    def ping(self):
        try:
            client = self._raw()
            with engine_call():
                return bool(client.ping())
        except EngineError:
            return False

    def start(self, container_id):
        client = self._raw()
        with engine_call():
            client.api.start(container_id)

    def stop(self, container_id):
        client = self._raw()
        with engine_call():
            client.api.stop(container_id)

    def pause(self, container_id):
        client = self._raw()
        with engine_call():
            client.api.pause(container_id)

    def unpause(self, container_id):
        client = self._raw()
        with engine_call():
            client.api.unpause(container_id)
