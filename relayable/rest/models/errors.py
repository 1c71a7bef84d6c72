from pydantic import BaseModel
from typing import List


class Violation(BaseModel):
    field: str
    message: str
    type: str
    location: str


class ValidationErrorResponse(BaseModel):
    errors: List[Violation]


class ErrorResponse(BaseModel):
    error: str
