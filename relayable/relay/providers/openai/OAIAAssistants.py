from relayable.relay.providers.assistants import AssistantsProvider, Assistant, DeletionAck
from relayable.relay.providers.openai.OAIAErrors import upstream_error
from typing import Any, Dict
from typing_extensions import override
import openai
import logging

LOGGER = logging.getLogger(__name__)


def to_assistant(openai_assistant) -> Assistant:
    return Assistant(
        assistant_id=openai_assistant.id,
        name=openai_assistant.name,
        model=openai_assistant.model,
        instructions=openai_assistant.instructions,
        created_at=openai_assistant.created_at,
        description=getattr(openai_assistant, 'description', None),
    )


class OAIAAssistantsProvider(AssistantsProvider):

    def __init__(self, openai_client):
        self.openai_client = openai_client

    @override
    async def create_assistant(self, name: str, model: str, instructions: str) -> Assistant:
        try:
            openai_assistant = await self.openai_client.beta.assistants.create(
                name=name,
                model=model,
                instructions=instructions,
            )
        except openai.APIError as e:
            raise upstream_error(e) from e
        LOGGER.info(f"Created assistant {openai_assistant.id} with name '{name}' on model {model}")
        return to_assistant(openai_assistant)

    @override
    async def get_assistant(self, assistant_id: str) -> Assistant:
        try:
            openai_assistant = await self.openai_client.beta.assistants.retrieve(assistant_id)
        except openai.APIError as e:
            raise upstream_error(e) from e
        return to_assistant(openai_assistant)

    @override
    async def update_assistant(self, assistant_id: str, fields: Dict[str, Any]) -> Assistant:
        try:
            openai_assistant = await self.openai_client.beta.assistants.update(assistant_id, **fields)
        except openai.APIError as e:
            raise upstream_error(e) from e
        LOGGER.info(f"Updated assistant {assistant_id} fields: {sorted(fields.keys())}")
        return to_assistant(openai_assistant)

    @override
    async def delete_assistant(self, assistant_id: str) -> DeletionAck:
        try:
            deleted = await self.openai_client.beta.assistants.delete(assistant_id)
        except openai.APIError as e:
            raise upstream_error(e) from e
        LOGGER.info(f"Deleted assistant {assistant_id}: {deleted.deleted}")
        return DeletionAck(assistant_id=deleted.id, deleted=deleted.deleted)
