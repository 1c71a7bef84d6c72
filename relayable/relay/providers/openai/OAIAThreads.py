from relayable.relay.providers.threads import ThreadsProvider, Thread, Message
from relayable.relay.providers.openai.OAIAErrors import upstream_error
from typing import List, Optional
from typing_extensions import override
import openai
import logging

LOGGER = logging.getLogger(__name__)

PAGE_SIZE = 100


def to_message(openai_message) -> Message:
    # only text parts carry content; image parts are dropped
    text_parts = [part.text.value for part in openai_message.content if part.type == "text"]
    file_ids = [attachment.file_id for attachment in (openai_message.attachments or []) if attachment.file_id]
    return Message(
        message_id=openai_message.id,
        thread_id=openai_message.thread_id,
        role=openai_message.role,
        content="\n".join(text_parts),
        created_at=openai_message.created_at,
        file_ids=file_ids,
    )


class OAIAThreadsProvider(ThreadsProvider):

    def __init__(self, openai_client):
        self.openai_client = openai_client

    @override
    async def create_thread(self) -> Thread:
        try:
            openai_thread = await self.openai_client.beta.threads.create()
        except openai.APIError as e:
            raise upstream_error(e) from e
        LOGGER.info(f"Successfully created thread {openai_thread.id} from provider")
        return Thread(thread_id=openai_thread.id, created_at=openai_thread.created_at)

    @override
    async def create_message(self, thread_id: str, role: str, content: str,
                             file_ids: Optional[List[str]] = None) -> Message:
        kwargs = {}
        if file_ids:
            kwargs['attachments'] = [
                {"file_id": file_id, "tools": [{"type": "file_search"}]} for file_id in file_ids
            ]
        try:
            openai_message = await self.openai_client.beta.threads.messages.create(
                thread_id=thread_id,
                role=role,
                content=content,
                **kwargs
            )
        except openai.APIError as e:
            raise upstream_error(e) from e
        LOGGER.info(f"Created {role} message {openai_message.id} in thread {thread_id}")
        return to_message(openai_message)

    @override
    async def list_messages(self, thread_id: str) -> List[Message]:
        messages = []
        try:
            async for openai_message in self.openai_client.beta.threads.messages.list(
                thread_id=thread_id, limit=PAGE_SIZE, order="asc"
            ):
                LOGGER.debug(f"Processing message: {openai_message.id}")
                messages.append(to_message(openai_message))
        except openai.APIError as e:
            raise upstream_error(e) from e
        return messages
