"""Microservice that turns a system instruction + prompt into coaching text."""

import logging
import os
import sys
import threading

import zmq
from dotenv import load_dotenv
from openai import OpenAI

load_dotenv()

DEFAULT_PORT = 5570
DEFAULT_MODEL = "gpt-4o-mini"

logger = logging.getLogger("coach-service")


def _error(message):
    """Return a consistent error payload."""
    return {"ok": False, "error": message}


def _extract_fields(payload):
    """Pull out system/prompt strings or return an error message."""
    if not isinstance(payload, dict):
        return None, None, "Request must be a JSON object."
    system = payload.get("system")
    prompt = payload.get("prompt")
    if not isinstance(prompt, str) or not prompt.strip():
        return None, None, "Request must contain a non-empty 'prompt' string."
    if system is not None and not isinstance(system, str):
        return None, None, "'system' must be a string when provided."
    return system or "", prompt, None


def complete(client, model, system, prompt):
    """Single-shot chat completion; returns the reply text (may be empty)."""
    messages = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})
    response = client.chat.completions.create(model=model, messages=messages)
    return response.choices[0].message.content or ""


def process_request(payload, client, model=DEFAULT_MODEL):
    """
    payload: dict with "system" and "prompt" strings
    returns dict with ok/result or ok/error
    """
    if client is None:
        return _error("Coach service has no OPENAI_API_KEY configured.")
    system, prompt, error = _extract_fields(payload)
    if error:
        return _error(error)
    try:
        text = complete(client, model, system, prompt)
    except Exception as exc:
        logger.exception("Completion request failed")
        return _error(f"Completion failed: {exc}")
    return {"ok": True, "result": {"text": text}}


def build_client(api_key):
    if not api_key:
        logger.warning("OPENAI_API_KEY not set; every request will be refused.")
        return None
    return OpenAI(api_key=api_key)


def shutdown_listener(stop_flag):
    """
    Waits for the user to type 'q' then Enter to request shutdown.
    Sets stop_flag[0] = True so the main loop can exit cleanly.
    """
    logger.info("Press 'q' then Enter to stop the coach service...")
    for line in sys.stdin:
        if line.strip().lower() == "q":
            stop_flag[0] = True
            logger.info("Shutdown requested...")
            break


def start_shutdown_listener(stop_flag):
    listener_thread = threading.Thread(
        target=shutdown_listener,
        args=(stop_flag,),
        daemon=True
    )
    listener_thread.start()
    return listener_thread


def serve_requests(socket, stop_flag, client, model):
    """Process inbound requests until stop_flag is set."""
    while not stop_flag[0]:
        if socket.poll(timeout=1000):
            try:
                payload = socket.recv_json()
            except ValueError:
                socket.send_json(_error("Invalid JSON in request body."))
                continue
            socket.send_json(process_request(payload, client, model))


def build_server_socket(port):
    context = zmq.Context()
    socket = context.socket(zmq.REP)
    address = f"tcp://*:{port}"
    socket.bind(address)
    return context, socket, address


def shutdown(context, socket):
    """Close resources cleanly."""
    logger.info("Shutting down coach service...")
    socket.close()
    context.term()


def run_service(port, api_key, model):
    context, socket, address = build_server_socket(port)
    logger.info("Coach service listening on %s (model %s)", address, model)
    client = build_client(api_key)
    stop_flag = [False]
    start_shutdown_listener(stop_flag)
    try:
        serve_requests(socket, stop_flag, client, model)
    except KeyboardInterrupt:
        logger.info("Interrupted via keyboard.")
    finally:
        shutdown(context, socket)


def main(port=None):
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    port = port or int(os.getenv("COACH_SERVICE_PORT", DEFAULT_PORT))
    run_service(
        port,
        os.getenv("OPENAI_API_KEY", ""),
        os.getenv("COACH_MODEL", DEFAULT_MODEL),
    )
    sys.exit(0)


if __name__ == "__main__":
    port = None
    if len(sys.argv) > 1:
        try:
            port = int(sys.argv[1])
        except ValueError:
            print(f"Invalid port '{sys.argv[1]}', using the configured default instead.")
    main(port)
