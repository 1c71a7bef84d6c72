from relayable.relay.providers.files import FilesProvider, UploadedFile, ASSISTANTS_PURPOSE
from relayable.relay.providers.openai.OAIAErrors import upstream_error
from typing import BinaryIO
from typing_extensions import override
import openai
import logging

LOGGER = logging.getLogger(__name__)


class OAIAFilesProvider(FilesProvider):

    def __init__(self, openai_client):
        self.openai_client = openai_client

    @override
    async def upload_file(self, file_name: str, stream: BinaryIO, purpose: str = ASSISTANTS_PURPOSE) -> UploadedFile:
        try:
            openai_file = await self.openai_client.files.create(
                file=(file_name, stream),
                purpose=purpose
            )
        except openai.APIError as e:
            raise upstream_error(e) from e
        LOGGER.info(f"Successfully uploaded '{file_name}' to OpenAI. File ID: {openai_file.id}")
        return UploadedFile(
            file_id=openai_file.id,
            filename=openai_file.filename or file_name,
            purpose=openai_file.purpose,
            size=openai_file.bytes,
            created_at=openai_file.created_at,
        )

    @override
    async def delete_file(self, file_id: str) -> bool:
        try:
            await self.openai_client.files.delete(file_id)
        except openai.NotFoundError:
            LOGGER.warning(f"File {file_id} not found on provider. Considered 'deleted' for provider part.")
            return False
        except openai.APIError as e:
            raise upstream_error(e) from e
        LOGGER.info(f"Successfully deleted file {file_id} from provider.")
        return True
