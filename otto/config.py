"""
Otto configuration.

Every setting can be overridden through an environment variable.
The engine connection itself (DOCKER_HOST, DOCKER_TLS_VERIFY,
DOCKER_CERT_PATH) is read by the docker SDK, not here.
"""

import os


def _flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in ('0', 'false', 'off', 'no')


# ============================================================
# SERVER
# ============================================================

HOST = os.environ.get('OTTO_HOST', '0.0.0.0')
PORT = int(os.environ.get('OTTO_PORT', '8080'))

# ============================================================
# ENGINE
# ============================================================

# Off serves the static page only, without touching the engine
ENGINE_ENABLED = _flag('OTTO_ENGINE', True)

# Seconds; unset keeps the docker SDK default
_timeout = os.environ.get('OTTO_ENGINE_TIMEOUT')
ENGINE_TIMEOUT = int(_timeout) if _timeout else None

ENGINE_API_VERSION = os.environ.get('OTTO_ENGINE_API_VERSION', 'auto')

# ============================================================
# LOGGING
# ============================================================

LOG_LEVEL = os.environ.get('OTTO_LOG_LEVEL', 'INFO').upper()
