"""The ``operate`` command: extract a shell command from an AI reply and run it."""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass
from typing import BinaryIO, Optional, TextIO
from xml.etree.ElementTree import ParseError, XMLPullParser

__all__ = ["ExtractError", "OperateResult", "extract_operate_response", "process_operation"]


@dataclass(frozen=True)
class OperateResult:
    """The command proposed by the AI, what it does and an optional warning."""

    command: str
    explanation: str
    warning: Optional[str] = None


class ExtractError(ValueError):
    """The AI reply lacks a required field or is not well-formed XML."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"Failed to extract {field} from AI response: {message}")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def extract_operate_response(ai_response: str) -> OperateResult:
    """Read ``<command>``, ``<explanation>`` and ``<warning>`` from an XML reply."""
    parser = XMLPullParser(events=("start", "end"))
    events = []
    try:
        parser.feed(ai_response)
        events.extend(parser.read_events())
        parser.close()
        events.extend(parser.read_events())
    except ParseError as exc:
        raise ExtractError("xml", f"XML parsing error: {exc}") from None

    command: Optional[str] = None
    explanation: Optional[str] = None
    warning: Optional[str] = None
    current: Optional[str] = None

    for event, element in events:
        name = _local_name(element.tag)
        if event == "start":
            current = name
            continue
        if current == name:
            text = (element.text or "").strip()
            if name == "command":
                command = text
            elif name == "explanation":
                explanation = text
            elif name == "warning" and text:
                warning = text
        current = None

    if command is None:
        raise ExtractError("command", "Missing <command> tag")
    if explanation is None:
        raise ExtractError("explanation", "Missing <explanation> tag")
    return OperateResult(command=command, explanation=explanation, warning=warning)


def _write_bytes(stream: TextIO, data: bytes) -> None:
    stream.flush()
    buffer: Optional[BinaryIO] = getattr(stream, "buffer", None)
    if buffer is not None:
        buffer.write(data)
        buffer.flush()
    else:
        stream.write(data.decode("utf-8", errors="replace"))
        stream.flush()


def _shell_argv(command: str) -> list[str]:
    if os.name == "nt":
        return ["cmd", "/C", command]
    return ["sh", "-c", command]


def process_operation(result: OperateResult) -> None:
    """Show the explanation, ask for confirmation and run the command in a shell."""
    print("\n--- What this will do ---")
    print(result.explanation)

    if result.warning is not None:
        print(f"\n\x1b[33mWarning: {result.warning}\x1b[0m")

    print(f"\n{result.command} [y/N] ", end="", flush=True)
    answer = sys.stdin.readline()
    print()

    if answer.strip().lower() != "y":
        print("Operation canceled.")
        return

    output = subprocess.run(_shell_argv(result.command), capture_output=True)

    if output.stdout:
        _write_bytes(sys.stdout, output.stdout)
    if output.stderr:
        _write_bytes(sys.stderr, output.stderr)

    if output.returncode != 0:
        print(f"\nCommand failed with exit code: {output.returncode}", file=sys.stderr)