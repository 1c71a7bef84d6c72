# Export all models for easy importing
from .assistants import (
    AssistantCreateRequest, AssistantUpdateRequest, AssistantResponse, AssistantDeleteResponse
)
from .threads import ThreadResponse, MessageCreateRequest, MessageResponse
from .files import UploadedFileResponse, FileAttachmentResponse
from .errors import Violation, ValidationErrorResponse, ErrorResponse

__all__ = [
    # Assistant models
    "AssistantCreateRequest", "AssistantUpdateRequest", "AssistantResponse", "AssistantDeleteResponse",

    # Thread models
    "ThreadResponse", "MessageCreateRequest", "MessageResponse",

    # File models
    "UploadedFileResponse", "FileAttachmentResponse",

    # Error models
    "Violation", "ValidationErrorResponse", "ErrorResponse",
]
