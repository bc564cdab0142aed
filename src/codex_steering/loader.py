"""Budgeted loading of steering documents.

Files are read strictly in discovery order against a single running byte
budget. Each file yields exactly one outcome; only filesystem failures that
are not attributable to a single file abort the load.

Combined text layout::

    [Steering: scope=global file=$CODEX_HOME/steering/a.md]
    <text>

    [Steering: scope=project file=.codex/steering/01.md truncated=true]
    <text>

    [Steering: note]
    Omitted 1 file(s) due to steering.doc_max_bytes=15.
    - scope=project file=.codex/steering/02.md reason=over-budget

The note is appended after the budget is spent and is not charged against it.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import BinaryIO

from .discovery import discover_steering_files
from .exceptions import SteeringIOError
from .models import Included
from .models import OmissionReason
from .models import Omitted
from .models import SteeringConfig
from .models import SteeringFile
from .models import SteeringFileOutcome
from .models import SteeringLoadResult
from .utils import is_blank
from .utils import salvage_utf8_prefix

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = "\n\n"
READ_CHUNK_SIZE = 64 * 1024


async def load_steering_docs(config: SteeringConfig) -> SteeringLoadResult:
    """Discover and load steering documents within the configured budget.

    Args:
        config: Working directory, codex home, enable flag and byte budget

    Returns:
        Load result with one outcome per discovered file

    Raises:
        SteeringIOError: If repository root detection fails or an opened file cannot be read
    """
    discovery = await asyncio.to_thread(discover_steering_files, config)
    max_bytes = config.steering_doc_max_bytes

    if not config.steering_enabled or max_bytes == 0:
        logger.debug(f"Steering disabled; skipping {len(discovery.files)} file(s)")
        disabled = Omitted(OmissionReason.DISABLED)
        return SteeringLoadResult(
            enabled=False,
            max_bytes=max_bytes,
            discovery=discovery,
            files=tuple(SteeringFileOutcome.for_file(f, disabled) for f in discovery.files),
            combined=None,
        )

    remaining = max_bytes
    parts: list[str] = []
    outcomes: list[SteeringFileOutcome] = []

    for file in discovery.files:
        if remaining == 0:
            outcomes.append(SteeringFileOutcome.for_file(file, Omitted(OmissionReason.OVER_BUDGET)))
            continue

        try:
            file_size, data = await asyncio.to_thread(_read_file, file.path, remaining)
        except OSError as e:
            logger.debug(f"Failed to open {file.display_path}: {e}")
            outcomes.append(SteeringFileOutcome.for_file(file, Omitted(OmissionReason.IO, str(e))))
            continue

        truncated = file_size > remaining
        text = _decode(data, truncated)
        if text is None:
            outcomes.append(SteeringFileOutcome.for_file(file, Omitted(OmissionReason.NON_UTF8)))
            continue

        if is_blank(text):
            outcomes.append(SteeringFileOutcome.for_file(file, Omitted(OmissionReason.EMPTY)))
            continue

        included = len(text.encode("utf-8"))
        parts.append(f"{format_header(file, truncated)}\n{text}")
        outcomes.append(SteeringFileOutcome.for_file(file, Included(bytes=included, truncated=truncated)))
        remaining = max(0, remaining - included)

    combined = BLOCK_SEPARATOR.join(parts) if parts else None

    over_budget = [
        o for o in outcomes if isinstance(o.status, Omitted) and o.status.reason is OmissionReason.OVER_BUDGET
    ]
    if over_budget:
        note = format_omission_note(max_bytes, over_budget)
        combined = f"{combined}{BLOCK_SEPARATOR}{note}" if combined is not None else note

    return SteeringLoadResult(
        enabled=True,
        max_bytes=max_bytes,
        discovery=discovery,
        files=tuple(outcomes),
        combined=combined,
    )


def load_steering_docs_sync(config: SteeringConfig) -> SteeringLoadResult:
    """Blocking wrapper around :func:`load_steering_docs` for code outside an event loop."""
    return asyncio.run(load_steering_docs(config))


def format_header(file: SteeringFile, truncated: bool) -> str:
    """Header line placed above each included file's text."""
    suffix = " truncated=true" if truncated else ""
    return f"[Steering: scope={file.scope.value} file={file.display_path}{suffix}]"


def format_omission_note(max_bytes: int, omitted: list[SteeringFileOutcome]) -> str:
    """Trailing note listing files dropped because the budget ran out."""
    lines = [
        "[Steering: note]",
        f"Omitted {len(omitted)} file(s) due to steering.doc_max_bytes={max_bytes}.",
    ]
    for outcome in omitted:
        lines.append(f"- scope={outcome.scope.value} file={outcome.display_path} reason=over-budget")
    return "\n".join(lines)


def _file_size(handle: BinaryIO) -> int:
    # Unknown size counts as 0, so the read is never flagged as truncated.
    try:
        return os.fstat(handle.fileno()).st_size
    except OSError:
        return 0


def _read_file(path: Path, limit: int) -> tuple[int, bytes]:
    """Open, size and read up to ``limit`` bytes of a file, closing it before returning.

    Runs in a worker thread so a cancelled load never leaves a handle open.

    Raises:
        OSError: If the file cannot be opened
        SteeringIOError: If the opened file cannot be read
    """
    with open(path, "rb") as handle:
        file_size = _file_size(handle)
        try:
            data = _read_capped(handle, limit)
        except OSError as e:
            raise SteeringIOError(f"Failed to read steering file {path}: {e}") from e
    return file_size, data


def _read_capped(handle: BinaryIO, limit: int) -> bytes:
    # Chunked so memory tracks the file, not the budget.
    chunks = []
    while limit > 0:
        chunk = handle.read(min(limit, READ_CHUNK_SIZE))
        if not chunk:
            break
        chunks.append(chunk)
        limit -= len(chunk)
    return b"".join(chunks)


def _decode(data: bytes, truncated: bool) -> str | None:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        if not truncated:
            return None
    return salvage_utf8_prefix(data)
