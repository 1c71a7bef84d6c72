from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

LOGGER = logging.getLogger(__name__)


@dataclass
class Assistant:
    assistant_id: str
    name: Optional[str]
    model: str
    instructions: Optional[str]
    created_at: int
    description: Optional[str] = None


@dataclass
class DeletionAck:
    assistant_id: str
    deleted: bool


class AssistantsProvider(ABC):

    @abstractmethod
    async def create_assistant(self, name: str, model: str, instructions: str) -> Assistant:
        pass

    @abstractmethod
    async def get_assistant(self, assistant_id: str) -> Assistant:
        """
        Raises UpstreamNotFound when the id is unknown to the provider.
        """
        pass

    @abstractmethod
    async def update_assistant(self, assistant_id: str, fields: Dict[str, Any]) -> Assistant:
        """
        Applies a partial update. Only keys present in fields are sent;
        an empty dict is still forwarded as a no-op update.
        """
        pass

    @abstractmethod
    async def delete_assistant(self, assistant_id: str) -> DeletionAck:
        pass
