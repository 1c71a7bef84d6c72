import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional, Tuple

from fastapi import Depends, Request
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from relayable.relay.errors import PayloadTooLarge, ValidationFailed
from relayable.relay.staging import StagedUpload, StagingFile, StagingStore
from relayable.rest.dependencies.providers import get_staging_store
from relayable.rest.errors import violation

LOGGER = logging.getLogger(__name__)

# allowance for boundaries, part headers and small form fields around the file
MULTIPART_OVERHEAD = 64 * 1024

PART_BEGIN = "part_begin"
PART_DATA = "part_data"
PART_END = "part_end"
HEADER_FIELD = "header_field"
HEADER_VALUE = "header_value"
HEADER_END = "header_end"
HEADERS_FINISHED = "headers_finished"


def check_upload_length(
    request: Request,
    staging: StagingStore = Depends(get_staging_store)
) -> None:
    """Rejects an upload whose declared Content-Length cannot fit under the size limit."""
    content_length = request.headers.get("content-length")
    if content_length is None:
        return
    try:
        length = int(content_length)
    except ValueError:
        raise ValidationFailed([violation("body", "Invalid Content-Length header", "content_length")])
    if length > staging.max_bytes + MULTIPART_OVERHEAD:
        LOGGER.warning(f"Rejected upload to {request.url.path}: Content-Length {length} exceeds {staging.max_bytes}")
        raise PayloadTooLarge(staging.max_bytes)


class MultipartFileReceiver:
    """
    Streams a multipart/form-data request body straight into the staging store.

    Only the first part named field_name that carries a filename is kept; other
    parts are read and dropped. The request body is never buffered in full.
    """

    def __init__(self, request: Request, staging: StagingStore, field_name: str = "file"):
        self.request = request
        self.staging = staging
        self.field_name = field_name
        self.staging_file: Optional[StagingFile] = None
        self._messages: List[Tuple[str, bytes]] = []
        self._headers: Dict[bytes, bytes] = {}
        self._header_field = b""
        self._header_value = b""
        self._target: Optional[StagingFile] = None

    def on_part_begin(self) -> None:
        self._messages.append((PART_BEGIN, b""))

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        self._messages.append((PART_DATA, data[start:end]))

    def on_part_end(self) -> None:
        self._messages.append((PART_END, b""))

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._messages.append((HEADER_FIELD, data[start:end]))

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._messages.append((HEADER_VALUE, data[start:end]))

    def on_header_end(self) -> None:
        self._messages.append((HEADER_END, b""))

    def on_headers_finished(self) -> None:
        self._messages.append((HEADERS_FINISHED, b""))

    def _missing_file(self) -> ValidationFailed:
        return ValidationFailed([violation(self.field_name, "Field required", "missing")])

    @asynccontextmanager
    async def receive(self) -> AsyncIterator[StagedUpload]:
        try:
            await self._consume()
            if self.staging_file is None:
                raise self._missing_file()
            staged = await self.staging_file.finish()
            yield staged
        finally:
            if self.staging_file is not None:
                await self.staging_file.discard()

    async def _consume(self) -> None:
        media_type, params = parse_options_header(self.request.headers.get("content-type", ""))
        boundary = params.get(b"boundary")
        if media_type.strip().lower() != b"multipart/form-data" or not boundary:
            raise self._missing_file()

        callbacks = {
            "on_part_begin": self.on_part_begin,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_headers_finished": self.on_headers_finished,
        }
        parser = MultipartParser(boundary, callbacks)
        # bounds bodies sent without a Content-Length
        limit = self.staging.max_bytes + MULTIPART_OVERHEAD
        received = 0
        try:
            async for chunk in self.request.stream():
                received += len(chunk)
                if received > limit:
                    LOGGER.warning(f"Rejected upload to {self.request.url.path}: body exceeds {limit} bytes")
                    raise PayloadTooLarge(self.staging.max_bytes)
                parser.write(chunk)
                await self._handle_messages()
            parser.finalize()
        except MultipartParseError as e:
            raise ValidationFailed([violation("body", f"Invalid multipart body: {e}", "multipart_invalid")]) from e
        await self._handle_messages()

    async def _handle_messages(self) -> None:
        messages, self._messages = self._messages, []
        for message_type, data in messages:
            if message_type == PART_BEGIN:
                self._headers = {}
                self._target = None
            elif message_type == HEADER_FIELD:
                self._header_field += data
            elif message_type == HEADER_VALUE:
                self._header_value += data
            elif message_type == HEADER_END:
                self._headers[self._header_field.lower()] = self._header_value
                self._header_field = b""
                self._header_value = b""
            elif message_type == HEADERS_FINISHED:
                await self._start_part()
            elif message_type == PART_DATA:
                if self._target is not None:
                    await self._target.write(data)
            elif message_type == PART_END:
                self._target = None

    async def _start_part(self) -> None:
        _, options = parse_options_header(self._headers.get(b"content-disposition", b""))
        name = options.get(b"name", b"").decode("utf-8", errors="replace")
        if name != self.field_name or b"filename" not in options or self.staging_file is not None:
            return
        filename = options[b"filename"].decode("utf-8", errors="replace")
        self.staging_file = await self.staging.create(filename)
        self._target = self.staging_file
