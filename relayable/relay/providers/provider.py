from abc import ABC, abstractmethod
from relayable.relay.providers.assistants import AssistantsProvider
from relayable.relay.providers.threads import ThreadsProvider
from relayable.relay.providers.files import FilesProvider
import logging
LOGGER = logging.getLogger(__name__)


class Provider(ABC):

    assistants: AssistantsProvider = None
    threads: ThreadsProvider = None
    files: FilesProvider = None

    @abstractmethod
    async def close(self) -> None:
        """
        Releases any connections held to the upstream service.
        """
        pass
