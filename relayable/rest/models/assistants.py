from pydantic import BaseModel, Field, StrictStr
from typing import Optional

from relayable.relay.providers.assistants import Assistant, DeletionAck


class AssistantCreateRequest(BaseModel):
    name: StrictStr = Field(min_length=1)
    model: StrictStr = Field(min_length=1)
    instructions: StrictStr = Field(min_length=1)


class AssistantUpdateRequest(BaseModel):
    # fields may be omitted but not sent as null
    name: StrictStr = None
    model: StrictStr = None
    instructions: StrictStr = None


class AssistantResponse(BaseModel):
    id: str
    object: str = "assistant"
    name: Optional[str] = None
    model: str
    instructions: Optional[str] = None
    description: Optional[str] = None
    created_at: int

    @classmethod
    def from_assistant(cls, assistant: Assistant) -> "AssistantResponse":
        return cls(
            id=assistant.assistant_id,
            name=assistant.name,
            model=assistant.model,
            instructions=assistant.instructions,
            description=assistant.description,
            created_at=assistant.created_at,
        )


class AssistantDeleteResponse(BaseModel):
    id: str
    object: str = "assistant.deleted"
    deleted: bool

    @classmethod
    def from_ack(cls, ack: DeletionAck) -> "AssistantDeleteResponse":
        return cls(id=ack.assistant_id, deleted=ack.deleted)
