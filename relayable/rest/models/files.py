from pydantic import BaseModel

from relayable.relay.providers.files import UploadedFile
from relayable.rest.models.threads import MessageResponse


class UploadedFileResponse(BaseModel):
    id: str
    object: str = "file"
    filename: str
    purpose: str
    bytes: int
    created_at: int

    @classmethod
    def from_uploaded_file(cls, uploaded: UploadedFile) -> "UploadedFileResponse":
        return cls(
            id=uploaded.file_id,
            filename=uploaded.filename,
            purpose=uploaded.purpose,
            bytes=uploaded.size,
            created_at=uploaded.created_at,
        )


class FileAttachmentResponse(BaseModel):
    file: UploadedFileResponse
    message: MessageResponse
