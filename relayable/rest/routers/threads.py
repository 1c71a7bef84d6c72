from typing import List
from fastapi import APIRouter, Depends, Request, status
import logging

from relayable.relay.config import Config
from relayable.relay.providers.provider import Provider
from relayable.relay.staging import StagingStore
from relayable.rest.models.threads import ThreadResponse, MessageCreateRequest, MessageResponse
from relayable.rest.models.files import UploadedFileResponse, FileAttachmentResponse
from relayable.rest.dependencies.providers import get_provider, get_staging_store, get_config
from relayable.rest.uploads import MultipartFileReceiver, check_upload_length

router = APIRouter(prefix="/threads", tags=["Thread"])
LOGGER = logging.getLogger(__name__)

ATTACHMENT_PROMPT = "Please analyze the attached file"


@router.post("", response_model=ThreadResponse, status_code=status.HTTP_201_CREATED)
async def create_thread(provider: Provider = Depends(get_provider)):
    """Create a new, empty thread."""
    thread = await provider.threads.create_thread()
    return ThreadResponse.from_thread(thread)


@router.post("/{thread_id}/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_message(
    thread_id: str,
    request_body: MessageCreateRequest,
    provider: Provider = Depends(get_provider)
):
    """Append a message to a thread."""
    message = await provider.threads.create_message(
        thread_id=thread_id,
        role=request_body.role,
        content=request_body.content
    )
    return MessageResponse.from_message(message)


ATTACHMENT_REQUEST_BODY = {
    "required": True,
    "content": {
        "multipart/form-data": {
            "schema": {
                "type": "object",
                "properties": {"file": {"type": "string", "format": "binary"}},
                "required": ["file"],
            }
        }
    },
}


@router.post(
    "/{thread_id}/files",
    response_model=FileAttachmentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_upload_length)],
    openapi_extra={"requestBody": ATTACHMENT_REQUEST_BODY}
)
async def attach_file(
    thread_id: str,
    request: Request,
    provider: Provider = Depends(get_provider),
    staging: StagingStore = Depends(get_staging_store),
    config: Config = Depends(get_config)
):
    """
    Upload a file to the assistant service and post a user message referencing it.

    The body is streamed into staging as it arrives, so an oversized file is
    refused before more than the size limit is written. The two upstream calls
    are not atomic. If the message cannot be created the uploaded file is left
    without a referencing message; it is deleted again only when orphan
    compensation is enabled.
    """
    async with MultipartFileReceiver(request, staging, field_name="file").receive() as staged:
        with staged.open() as stream:
            uploaded = await provider.files.upload_file(staged.filename, stream)

    try:
        message = await provider.threads.create_message(
            thread_id=thread_id,
            role="user",
            content=ATTACHMENT_PROMPT,
            file_ids=[uploaded.file_id]
        )
    except Exception as e:
        LOGGER.warning(f"Orphaned upstream file {uploaded.file_id} ('{uploaded.filename}'): "
                       f"message creation in thread {thread_id} failed: {e}")
        if config.compensate_orphaned_uploads:
            await _discard_orphaned_file(provider, uploaded.file_id)
        raise

    LOGGER.info(f"Attached file {uploaded.file_id} to thread {thread_id} with message {message.message_id}")
    return FileAttachmentResponse(
        file=UploadedFileResponse.from_uploaded_file(uploaded),
        message=MessageResponse.from_message(message)
    )


async def _discard_orphaned_file(provider: Provider, file_id: str) -> None:
    try:
        deleted = await provider.files.delete_file(file_id)
        LOGGER.info(f"Compensating delete of orphaned file {file_id}: deleted={deleted}")
    except Exception as e:
        LOGGER.error(f"Compensating delete of orphaned file {file_id} failed: {e}", exc_info=True)


@router.get("/{thread_id}/messages", response_model=List[MessageResponse])
async def get_messages(
    thread_id: str,
    provider: Provider = Depends(get_provider)
):
    """Get all messages in a thread, oldest first."""
    messages = await provider.threads.list_messages(thread_id)
    return [MessageResponse.from_message(message) for message in messages]
