"""CLI action handlers.

Handlers return process exit codes and write answers to stdout; errors are
surfaced as one JSON object on stderr. Safe to import in tests (no
top-level side effects).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import IO, Any, Dict, Iterator, Optional

from ..base.constants import CONTENT_TYPE_EVENT_STREAM, CONTENT_TYPES_NDJSON, SSE_DATA_PREFIX
from ..base.errors import ChatStreamError
from ..base.models import ChatAnswer
from ..base.streaming import StreamCallbacks, decode_stream
from ..client import MedChatClient


def sniff_content_type(payload: bytes) -> str:
    """Guess the framing of a captured body from its first non-blank line."""
    for raw in payload.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith(SSE_DATA_PREFIX.encode()):
            return CONTENT_TYPE_EVENT_STREAM
        return CONTENT_TYPES_NDJSON[0]
    return "application/json"


def iter_slices(payload: bytes, size: int) -> Iterator[bytes]:
    for i in range(0, len(payload), size):
        yield payload[i : i + size]


def _error_json(error: ChatStreamError) -> Dict[str, Any]:
    return {
        "error": error.message,
        "code": error.code.value,
        "status": error.status,
        "server_code": error.server_code,
    }


def _printing_callbacks(out: IO[str], err: IO[str], live: bool) -> StreamCallbacks:
    def on_content(delta: str) -> None:
        if live:
            out.write(delta)
            out.flush()

    def on_error(error: ChatStreamError) -> None:
        print(json.dumps(_error_json(error)), file=err)

    return StreamCallbacks(on_content=on_content, on_error=on_error)


def _report(answer: ChatAnswer, args: argparse.Namespace, out: IO[str]) -> int:
    if args.json:
        print(json.dumps(answer.to_dict(), ensure_ascii=False), file=out)
    elif answer.text:
        out.write("\n")
    return 0 if answer.ok else 1


def handle_decode(
    args: argparse.Namespace,
    *,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> int:
    """Decode a captured response body and print the answer.

    Returns ``0`` when the stream completed, ``1`` on a stream error and
    ``2`` when the file cannot be read.
    """
    out = stdout or sys.stdout
    err = stderr or sys.stderr
    try:
        payload = sys.stdin.buffer.read() if args.file == "-" else Path(args.file).read_bytes()
    except OSError as exc:
        print(json.dumps({"error": str(exc)}), file=err)
        return 2
    content_type = args.content_type or sniff_content_type(payload)
    answer = decode_stream(
        iter_slices(payload, args.chunk_size),
        _printing_callbacks(out, err, live=not args.json),
        session_id=args.session_id,
        content_type=content_type,
    )
    return _report(answer, args, out)


def handle_ask(
    args: argparse.Namespace,
    *,
    client: Optional[MedChatClient] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> int:
    """Stream a live answer; the token comes from ``MEDCHAT_ID_TOKEN``/``MEDCHAT_API_TOKEN``."""
    out = stdout or sys.stdout
    err = stderr or sys.stderr
    context: Dict[str, Any] = {"mode": args.mode}
    if args.patient_id:
        context["patientId"] = args.patient_id
    if args.reference_scope:
        context["referenceScope"] = args.reference_scope
    try:
        client = client or MedChatClient()
        answer = client.send_message_stream(
            args.session_id,
            args.query,
            context,
            _printing_callbacks(out, err, live=not args.json),
        )
    except ChatStreamError as exc:
        print(json.dumps(_error_json(exc)), file=err)
        return 2
    return _report(answer, args, out)


__all__ = ["handle_decode", "handle_ask", "sniff_content_type", "iter_slices"]
