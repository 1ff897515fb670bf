"""Pull a JSON payload out of a free-form AI reply.

The reply may wrap the payload in a fenced ```json block, emit it bare between
prose, emit several candidate blocks, or stop mid-object when the model hits its
output limit. Candidates are tried in order of appearance. Malformed complete
ones go through json_repair. Truncated tails are closed with an open-bracket
stack, falling back to json_repair, and only they are flagged as repaired.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from json_repair import repair_json

logger = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"```[ \t]*(?:json|JSON)?[ \t]*\n?(.*?)```", re.DOTALL)
_OPEN_FENCE = re.compile(r"```[ \t]*(?:json|JSON)?[ \t]*\n?(.*)$", re.DOTALL)
_DANGLING_KEY = re.compile(r',?\s*"(?:[^"\\]|\\.)*"\s*:\s*$')

_CLOSERS = {"{": "}", "[": "]"}

# Upper bound on cut-back attempts for one truncated candidate
MAX_REPAIR_ATTEMPTS = 200


@dataclass(frozen=True)
class ExtractedPayload:
    payload: dict[str, Any]
    repaired: bool = False


def extract(text: str) -> dict[str, Any] | None:
    """Return the first JSON object found in ``text``, or None."""
    result = extract_payload(text)
    return result.payload if result else None


def extract_payload(text: str) -> ExtractedPayload | None:
    """Find, parse and if necessary repair the JSON object in an AI reply.

    Never raises. None means the reply carries no usable payload and the scene
    should be left untouched.
    """
    if not isinstance(text, str) or not text.strip():
        return None

    complete, truncated = _collect_candidates(text)

    for candidate in complete:
        parsed = _loads_object(candidate)
        if parsed is not None:
            return ExtractedPayload(parsed)

    for candidate in complete:
        repaired = _repair_with_library(candidate)
        if repaired is not None:
            logger.info("Repaired malformed JSON payload with json_repair")
            return ExtractedPayload(repaired)

    for candidate in truncated:
        repaired = close_truncated(candidate)
        if repaired is not None:
            logger.info("Repaired truncated JSON payload (%d chars)", len(candidate))
            return ExtractedPayload(repaired, repaired=True)

    for candidate in truncated:
        repaired = _repair_with_library(candidate)
        if repaired is not None:
            logger.info("Repaired truncated JSON payload with json_repair")
            return ExtractedPayload(repaired, repaired=True)

    logger.debug("No JSON payload found in response: %.200s", text)
    return None


def _collect_candidates(text: str) -> tuple[list[str], list[str]]:
    """Split ``text`` into complete candidates and truncated tails, in order."""
    complete: list[str] = []
    truncated: list[str] = []

    fence_end = 0
    for match in _FENCED_BLOCK.finditer(text):
        body = match.group(1).strip()
        if body.startswith(("{", "[")):
            complete.append(body)
        fence_end = match.end()

    open_fence = _OPEN_FENCE.search(text, fence_end)
    if open_fence:
        body = open_fence.group(1).strip()
        if body.startswith("{"):
            truncated.append(body)

    objects, tail = _scan_bare_objects(text)
    complete.extend(objects)
    if tail:
        truncated.append(tail)

    return _unique(complete), _unique(truncated)


def _scan_bare_objects(text: str) -> tuple[list[str], str | None]:
    """Find balanced top-level ``{...}`` spans; also return an unclosed tail."""
    objects: list[str] = []
    depth = 0
    start = -1
    in_string = False
    escaped = False

    for index, char in enumerate(text):
        if depth == 0:
            if char == "{":
                depth = 1
                start = index
                in_string = False
            continue
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                objects.append(text[start : index + 1])

    tail = text[start:].rstrip().rstrip("`").rstrip() if depth > 0 else None
    return objects, tail


def close_truncated(fragment: str) -> dict[str, Any] | None:
    """Best-effort repair of a JSON object cut off before its closing brackets.

    Closes an open string, drops a dangling comma or key, then appends the
    closers inferred from the open-bracket stack. When that still doesn't
    parse, cuts the fragment back to earlier value boundaries and retries.
    """
    fragment = fragment.strip()
    if not fragment.startswith("{"):
        return None

    cut_points = _value_boundaries(fragment)
    attempts = [len(fragment)] + list(reversed(cut_points))[:MAX_REPAIR_ATTEMPTS]

    for end in attempts:
        closed = _close(fragment[:end])
        if closed is None:
            continue
        parsed = _loads_object(closed)
        if parsed is not None:
            return parsed
    return None


def _close(fragment: str) -> str | None:
    state = _bracket_state(fragment)
    if state is None:
        return None
    stack, in_string, escaped = state
    if not stack:
        return fragment

    if in_string:
        if escaped:
            fragment = fragment[:-1]
        fragment += '"'

    fragment = fragment.rstrip()
    while fragment.endswith(","):
        fragment = fragment[:-1].rstrip()
    fragment = _DANGLING_KEY.sub("", fragment)

    # Removing a dangling key can't change the bracket stack, only trailing text
    return fragment + "".join(_CLOSERS[opener] for opener in reversed(stack))


def _bracket_state(fragment: str) -> tuple[list[str], bool, bool] | None:
    """Open-bracket stack after scanning ``fragment``; None if brackets mismatch."""
    stack: list[str] = []
    in_string = False
    escaped = False
    for char in fragment:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in _CLOSERS:
            stack.append(char)
        elif char in "}]":
            if not stack or _CLOSERS[stack[-1]] != char:
                return None
            stack.pop()
    return stack, in_string, escaped


def _value_boundaries(fragment: str) -> list[int]:
    """Offsets (exclusive ends) where a complete value or member ends."""
    boundaries: list[int] = []
    in_string = False
    escaped = False
    for index, char in enumerate(fragment):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == ",":
            boundaries.append(index)
        elif char in "}]":
            boundaries.append(index + 1)
    return boundaries


def _repair_with_library(candidate: str) -> dict[str, Any] | None:
    if not candidate.lstrip().startswith("{"):
        return None
    try:
        repaired = repair_json(candidate, return_objects=True)
    except Exception as exc:
        logger.debug("json_repair failed: %s", exc)
        return None
    if isinstance(repaired, dict) and repaired:
        return repaired
    return None


def _loads_object(candidate: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))
