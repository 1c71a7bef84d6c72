import logging
import os
import time
import uuid
from dataclasses import dataclass
from typing import BinaryIO, Optional

from starlette.concurrency import run_in_threadpool

from relayable.relay.errors import PayloadTooLarge, StagingIOError

LOGGER = logging.getLogger(__name__)


@dataclass
class StagedUpload:
    path: str
    filename: str
    size: int

    def open(self) -> BinaryIO:
        return open(self.path, "rb")


class StagingFile:
    """
    A file being received into the staging directory.

    Chunks are written as they arrive; a chunk that would take the file past
    max_bytes is refused before any of it reaches disk.
    """

    def __init__(self, path: str, filename: str, fh: BinaryIO, max_bytes: int):
        self.path = path
        self.filename = filename
        self.max_bytes = max_bytes
        self.size = 0
        self._fh = fh

    async def write(self, chunk: bytes) -> None:
        if self.size + len(chunk) > self.max_bytes:
            LOGGER.warning(f"Rejected upload '{self.filename}': exceeds {self.max_bytes} bytes")
            raise PayloadTooLarge(self.max_bytes)
        try:
            await run_in_threadpool(self._fh.write, chunk)
        except OSError as e:
            raise StagingIOError(f"Could not stage upload: {e.strerror or e}") from e
        self.size += len(chunk)

    async def finish(self) -> StagedUpload:
        try:
            await self._close()
        except OSError as e:
            raise StagingIOError(f"Could not stage upload: {e.strerror or e}") from e
        LOGGER.info(f"Staged upload '{self.filename}' ({self.size} bytes) at {self.path}")
        return StagedUpload(path=self.path, filename=self.filename, size=self.size)

    async def discard(self) -> None:
        try:
            await self._close()
        except OSError as e:
            LOGGER.error(f"Could not close staged file {self.path}: {e}", exc_info=True)
        try:
            os.remove(self.path)
            LOGGER.debug(f"Removed staged file {self.path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            LOGGER.error(f"Could not remove staged file {self.path}: {e}", exc_info=True)

    async def _close(self) -> None:
        if self._fh is not None:
            fh, self._fh = self._fh, None
            await run_in_threadpool(fh.close)


class StagingStore:
    """
    Holds incoming attachments on local disk while they are forwarded upstream.
    Callers own the StagingFile they create and must discard it when done.
    """

    def __init__(self, directory: str, max_bytes: int):
        self.directory = directory
        self.max_bytes = max_bytes

    def ensure_directory(self) -> None:
        if not os.path.isdir(self.directory):
            os.makedirs(self.directory, exist_ok=True)
            LOGGER.info(f"Created upload staging directory {self.directory}")

    @staticmethod
    def safe_filename(filename: Optional[str]) -> str:
        # clients may send paths; keep the last component only
        name = os.path.basename((filename or "").replace("\\", "/")).strip()
        if name in ("", ".", ".."):
            return "upload"
        return name

    def staged_name(self, filename: str) -> str:
        millis = int(time.time() * 1000)
        return f"{millis}-{uuid.uuid4().hex[:8]}-{filename}"

    async def create(self, filename: Optional[str]) -> StagingFile:
        name = self.safe_filename(filename)
        path = os.path.join(self.directory, self.staged_name(name))
        try:
            fh = await run_in_threadpool(open, path, "xb")
        except OSError as e:
            raise StagingIOError(f"Could not stage upload: {e.strerror or e}") from e
        return StagingFile(path, name, fh, self.max_bytes)
