"""Line-oriented input reading for seed runs.

This module opens local files or S3 objects as byte streams and splits
them into numbered lines without ever truncating an oversized line.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Protocol

from core.config import SeedConfig
from core.constants import READ_BUFFER_BYTES
from core.errors import LineTooLongError, SeedDependencyError, SeedIngestError
from core.s3_uri import is_s3_uri, parse_s3_uri
from core.types import SeedJob
from seed.job_queue import JobQueue
from seed.run_scope import RunScope

_UTF8_BOM = b"\xef\xbb\xbf"


class ByteStream(Protocol):
    """Minimal readable byte stream."""

    def read(self, size: int = -1) -> bytes: ...


@contextmanager
def open_input(input_path: str, config: SeedConfig | None = None) -> Iterator[ByteStream]:
    """Open a seed input source as a byte stream.

    Args:
        input_path: Local file path or ``s3://bucket/key`` URI.
        config: Optional runtime config for S3 session options.

    Yields:
        Readable byte stream, closed on exit.

    Raises:
        OSError: If a local file cannot be opened.
        SeedIngestError: If an S3 object cannot be fetched.
    """
    if is_s3_uri(input_path):
        body = _open_s3_body(input_path, config)
        try:
            yield body
        finally:
            body.close()
        return
    local_path = Path(input_path).expanduser()
    if local_path.is_dir():
        raise IsADirectoryError(f"Input path {local_path} is a directory, expected a file.")
    with open(local_path, "rb", buffering=READ_BUFFER_BYTES) as stream:
        yield stream


def iter_lines(
    stream: ByteStream,
    max_line_bytes: int,
    chunk_size: int = READ_BUFFER_BYTES,
) -> Iterator[tuple[int, bytes]]:
    """Yield one-based line numbers with line bytes.

    Line terminators (``\\n`` and a preceding ``\\r``) are removed, as is a
    UTF-8 byte order mark at the start of the first line.

    Args:
        stream: Readable byte stream.
        max_line_bytes: Longest accepted line, terminator excluded.
        chunk_size: Bytes requested per read call.

    Yields:
        ``(line_number, raw_line)`` pairs in input order.

    Raises:
        LineTooLongError: If a line exceeds ``max_line_bytes``.
    """
    pending = bytearray()
    line_number = 0
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        search_from = len(pending)
        pending += chunk
        start = 0
        while True:
            newline = pending.find(b"\n", max(start, search_from))
            if newline < 0:
                break
            line_number += 1
            yield line_number, _finish_line(pending[start:newline], line_number, max_line_bytes)
            start = newline + 1
        del pending[:start]
        if len(pending) > _pending_limit(line_number, max_line_bytes):
            raise LineTooLongError(line_number + 1, max_line_bytes)
    if pending:
        line_number += 1
        yield line_number, _finish_line(pending, line_number, max_line_bytes)


class StreamReader:
    """Single producer feeding numbered lines into the job queue."""

    def __init__(self, stream: ByteStream, queue: JobQueue, scope: RunScope, max_line_bytes: int):
        self._stream = stream
        self._queue = queue
        self._scope = scope
        self._max_line_bytes = max_line_bytes
        self.lines_read = 0

    def run(self) -> None:
        """Push every line, blank ones included, then close the queue.

        The queue is closed only after a clean end of input; on a read
        error or cancellation the exception propagates instead.
        """
        for line_number, raw in iter_lines(self._stream, self._max_line_bytes):
            self._scope.raise_if_cancelled()
            self.lines_read = line_number
            self._queue.put(SeedJob(line_number=line_number, raw=raw))
        self._queue.close()


def _pending_limit(lines_done: int, max_line_bytes: int) -> int:
    """Longest unterminated tail allowed, counting a CR and a first-line BOM."""
    if lines_done == 0:
        return max_line_bytes + 1 + len(_UTF8_BOM)
    return max_line_bytes + 1


def _finish_line(line: bytearray, line_number: int, max_line_bytes: int) -> bytes:
    if line_number == 1 and line.startswith(_UTF8_BOM):
        line = line[len(_UTF8_BOM):]
    if line.endswith(b"\r"):
        line = line[:-1]
    if len(line) > max_line_bytes:
        raise LineTooLongError(line_number, max_line_bytes)
    return bytes(line)


def _open_s3_body(input_path: str, config: SeedConfig | None) -> Any:
    """Fetch an S3 object and return its streaming body.

    Raises:
        SeedDependencyError: If boto3 is missing.
        SeedIngestError: If the object cannot be fetched.
    """
    location = parse_s3_uri(input_path)
    try:
        import boto3
        from botocore.exceptions import BotoCoreError, ClientError
    except ImportError as error:
        raise SeedDependencyError(
            "S3 input requires boto3, but it is not installed. "
            "Install boto3 to seed from s3:// sources."
        ) from error
    session = boto3.session.Session(**_build_boto3_session_kwargs(config))
    s3_client = session.client("s3")
    try:
        response = s3_client.get_object(Bucket=location.bucket, Key=location.key)
    except (BotoCoreError, ClientError) as error:
        raise SeedIngestError(
            f"Failed to fetch s3://{location.bucket}/{location.key}: {error}. "
            "Check the object key and AWS credentials."
        ) from error
    return response["Body"]


def _build_boto3_session_kwargs(config: SeedConfig | None) -> dict[str, str]:
    kwargs: dict[str, str] = {}
    if config is None:
        return kwargs
    if config.s3_profile:
        kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        kwargs["region_name"] = config.s3_region
    return kwargs
