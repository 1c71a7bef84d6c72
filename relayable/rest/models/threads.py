from pydantic import BaseModel, Field, StrictStr
from typing import List, Literal

from relayable.relay.providers.threads import Thread, Message


class ThreadResponse(BaseModel):
    id: str
    object: str = "thread"
    created_at: int

    @classmethod
    def from_thread(cls, thread: Thread) -> "ThreadResponse":
        return cls(id=thread.thread_id, created_at=thread.created_at)


class MessageCreateRequest(BaseModel):
    content: StrictStr = Field(min_length=1)
    role: Literal["user", "assistant"]


class MessageResponse(BaseModel):
    id: str
    object: str = "thread.message"
    thread_id: str
    role: str
    content: str
    file_ids: List[str] = Field(default_factory=list)
    created_at: int

    @classmethod
    def from_message(cls, message: Message) -> "MessageResponse":
        return cls(
            id=message.message_id,
            thread_id=message.thread_id,
            role=message.role,
            content=message.content,
            file_ids=list(message.file_ids),
            created_at=message.created_at,
        )
