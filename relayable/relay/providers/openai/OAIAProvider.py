import logging
from relayable.relay.config import Config
from relayable.relay.providers.provider import Provider
from relayable.relay.providers.openai.OAIAAssistants import OAIAAssistantsProvider
from relayable.relay.providers.openai.OAIAThreads import OAIAThreadsProvider
from relayable.relay.providers.openai.OAIAFiles import OAIAFilesProvider
from openai import AsyncOpenAI
from typing_extensions import override

LOGGER = logging.getLogger(__name__)


class OAIAProvider(Provider):

    def __init__(self, openai_client: AsyncOpenAI):
        super().__init__()
        self.openai_client = openai_client
        self.assistants = OAIAAssistantsProvider(openai_client)
        self.threads = OAIAThreadsProvider(openai_client)
        self.files = OAIAFilesProvider(openai_client)

    @classmethod
    def from_config(cls, config: Config) -> "OAIAProvider":
        # retries are disabled: each gateway call is exactly one upstream request
        openai_client = AsyncOpenAI(
            api_key=config.openai_api_key,
            organization=config.openai_organization,
            project=config.openai_project,
            base_url=config.openai_base_url,
            timeout=config.upstream_timeout,
            max_retries=0,
        )
        LOGGER.info(f"Using OpenAI API with a {config.upstream_timeout}s timeout per call")
        return cls(openai_client)

    @override
    async def close(self) -> None:
        await self.openai_client.close()
        LOGGER.info("Closed OpenAI client")
