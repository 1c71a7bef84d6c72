from typing import Optional
from fastapi import APIRouter, Depends, status
import logging

from relayable.relay.providers.provider import Provider
from relayable.rest.models.assistants import (
    AssistantCreateRequest, AssistantUpdateRequest, AssistantResponse, AssistantDeleteResponse
)
from relayable.rest.dependencies.providers import get_provider

router = APIRouter(prefix="/assistants", tags=["Assistant"])
LOGGER = logging.getLogger(__name__)


@router.post("", response_model=AssistantResponse, status_code=status.HTTP_201_CREATED)
async def create_assistant(
    request_body: AssistantCreateRequest,
    provider: Provider = Depends(get_provider)
):
    """Create a new assistant."""
    assistant = await provider.assistants.create_assistant(
        name=request_body.name,
        model=request_body.model,
        instructions=request_body.instructions
    )
    return AssistantResponse.from_assistant(assistant)


@router.get("/{assistant_id}", response_model=AssistantResponse)
async def get_assistant(
    assistant_id: str,
    provider: Provider = Depends(get_provider)
):
    assistant = await provider.assistants.get_assistant(assistant_id)
    return AssistantResponse.from_assistant(assistant)


@router.put("/{assistant_id}", response_model=AssistantResponse)
async def update_assistant(
    assistant_id: str,
    request_body: Optional[AssistantUpdateRequest] = None,
    provider: Provider = Depends(get_provider)
):
    """Update any subset of name, model and instructions. An empty body is a no-op update."""
    fields = request_body.model_dump(exclude_unset=True) if request_body else {}
    assistant = await provider.assistants.update_assistant(assistant_id, fields)
    return AssistantResponse.from_assistant(assistant)


@router.delete("/{assistant_id}", response_model=AssistantDeleteResponse)
async def delete_assistant(
    assistant_id: str,
    provider: Provider = Depends(get_provider)
):
    ack = await provider.assistants.delete_assistant(assistant_id)
    return AssistantDeleteResponse.from_ack(ack)
