"""Helpers to call the ZeroMQ coach microservice from the Tk application."""

from __future__ import annotations

import logging

import zmq

import config

DEFAULT_PORTS = {
    "coach": config.COACH_SERVICE_PORT,
}

TIMEOUT_MS = config.COACH_TIMEOUT_MS
_CONTEXT = zmq.Context.instance()

logger = logging.getLogger(__name__)


# ---------- Low-level send helpers ----------
def _make_socket(port: int, timeout_ms: int = TIMEOUT_MS):
    socket = _CONTEXT.socket(zmq.REQ)
    socket.setsockopt(zmq.RCVTIMEO, timeout_ms)
    socket.setsockopt(zmq.SNDTIMEO, timeout_ms)
    socket.setsockopt(zmq.LINGER, 0)
    socket.connect(f"tcp://localhost:{port}")
    return socket


def _send_json(port: int, payload: dict, timeout_ms: int = TIMEOUT_MS):
    socket = _make_socket(port, timeout_ms)
    try:
        socket.send_json(payload)
        return socket.recv_json(), None
    except zmq.error.Again:
        return None, f"Timed out contacting service on port {port}."
    except Exception as exc:  # pragma: no cover - defensive
        logger.exception("Service error on port %s", port)
        return None, f"Service error on port {port}: {exc}"
    finally:
        socket.close()


# ---------- Microservice callers ----------
def coach_completion(system_instruction: str, prompt: str, port: int = DEFAULT_PORTS["coach"]):
    """
    Ask the coach microservice for a single text completion.
    Returns (text, None) on success or (None, error_message).
    """
    response, error = _send_json(port, {"system": system_instruction, "prompt": prompt})
    if error:
        return None, error
    if not isinstance(response, dict) or not response.get("ok"):
        message = response.get("error") if isinstance(response, dict) else None
        return None, message or "Unknown coach error."
    result = response.get("result") or {}
    return result.get("text", ""), None
