from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO
import logging

LOGGER = logging.getLogger(__name__)

ASSISTANTS_PURPOSE = "assistants"


@dataclass
class UploadedFile:
    file_id: str
    filename: str
    purpose: str
    size: int
    created_at: int


class FilesProvider(ABC):

    @abstractmethod
    async def upload_file(self, file_name: str, stream: BinaryIO, purpose: str = ASSISTANTS_PURPOSE) -> UploadedFile:
        """
        Uploads the stream under file_name and returns the provider's record of it.
        """
        pass

    @abstractmethod
    async def delete_file(self, file_id: str) -> bool:
        """
        Deletes a file by its file_id.
        Don't throw an exception if it does not exist, just return False.
        """
        pass
