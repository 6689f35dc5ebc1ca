#!/usr/bin/env python3
"""JSON-lines режим: один запрос на строку stdin, один ответ на строку stdout."""
import json
import sys

from pydantic import ValidationError

from hashsalt.hashing import HashConfigError, compute_hash, generate_random_salt
from hashsalt.ipc_schema import HashRequest, IPCResponse, SaltRequest


def handle_request(req, logger=None) -> IPCResponse:
    if not isinstance(req, dict):
        return IPCResponse(error="Request must be a JSON object")

    cmd = req.get("cmd")
    try:
        if cmd == "hash":
            request = HashRequest.model_validate(req)
            result = compute_hash(
                request.strings,
                request.algorithm,
                salt=request.salt,
                use_random_salt=request.random_salt,
                logger=logger,
            )
            return IPCResponse(result=result)
        if cmd == "salt":
            request = SaltRequest.model_validate(req)
            return IPCResponse(result=[generate_random_salt() for _ in range(request.count)])
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        return IPCResponse(error=f"Invalid request: {messages}")
    except HashConfigError as e:
        return IPCResponse(error=str(e))
    return IPCResponse(error=f"Unknown command: {cmd}")


def serve(stdin=None, stdout=None, logger=None) -> int:
    """Обрабатывает запросы до конца stdin. Возвращает число обработанных строк."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    handled = 0
    for line in stdin:
        if not line.strip():
            continue
        try:
            req = json.loads(line)
        except json.JSONDecodeError:
            response = IPCResponse(error="Invalid JSON")
        else:
            response = handle_request(req, logger=logger)
        if response.error and logger:
            logger.warning(f"Запрос отклонен: {response.error}")
        stdout.write(response.model_dump_json() + "\n")
        stdout.flush()
        handled += 1
    return handled
