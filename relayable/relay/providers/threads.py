from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional
import logging

LOGGER = logging.getLogger(__name__)


@dataclass
class Thread:
    thread_id: str
    created_at: int


@dataclass
class Message:
    message_id: str
    thread_id: str
    role: str
    content: str
    created_at: int
    file_ids: List[str] = field(default_factory=list)


class ThreadsProvider(ABC):

    @abstractmethod
    async def create_thread(self) -> Thread:
        """
        Creates a new, empty thread and returns it.
        """
        pass

    @abstractmethod
    async def create_message(self, thread_id: str, role: str, content: str,
                             file_ids: Optional[List[str]] = None) -> Message:
        """
        Appends a message to the thread. file_ids reference files already
        uploaded through the files provider.
        """
        pass

    @abstractmethod
    async def list_messages(self, thread_id: str) -> List[Message]:
        """
        Returns every message in the thread, oldest first.
        """
        pass
