"""CLI parser construction for medchat-stream.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ..config.defaults import MEDCHAT_CLI_DEFAULT_CHUNK_SIZE, MEDCHAT_DEFAULT_MODE

_MODES = ("PATIENT_ONLY", "REFERENCES_ONLY", "PATIENT_AND_REFERENCES")


def _positive_int(v: str) -> int:
    n = int(v)
    if n <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return n


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with ``decode`` and ``ask`` subcommands. No I/O or
        network calls occur here.
    """
    p = argparse.ArgumentParser(prog="medchat-stream", description="Chat answer stream decoder")
    p.add_argument("--log-level", default=None, help="Override MEDCHAT_LOG_LEVEL (e.g. DEBUG)")
    sub = p.add_subparsers(dest="cmd", required=True)

    # decode
    p_dec = sub.add_parser("decode", help="Replay a captured response body through the decoder")
    p_dec.add_argument("file", help="Path to the captured body, or '-' for stdin")
    p_dec.add_argument(
        "--content-type",
        default=None,
        help="Declared Content-Type; sniffed from the first line when omitted",
    )
    p_dec.add_argument("--session-id", default="")
    p_dec.add_argument("--chunk-size", type=_positive_int, default=MEDCHAT_CLI_DEFAULT_CHUNK_SIZE)
    p_dec.add_argument("--json", action="store_true", help="Print the final answer as JSON")

    # ask
    p_ask = sub.add_parser("ask", help="Stream a live answer from the chat API")
    p_ask.add_argument("session_id")
    p_ask.add_argument("query")
    p_ask.add_argument("--mode", choices=_MODES, default=MEDCHAT_DEFAULT_MODE)
    p_ask.add_argument("--patient-id", default=None)
    p_ask.add_argument("--reference-scope", default=None)
    p_ask.add_argument("--json", action="store_true", help="Print the final answer as JSON")

    return p


__all__ = ["build_parser"]
