"""
API models and schemas for the FastAPI application.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class BookInput(BaseModel):
    """Book part of a create request."""
    title: str = Field(..., description="Book title")


class AuthorInput(BaseModel):
    """Author part of a create request."""
    first_name: str = Field(..., description="Author first name")
    last_name: str = Field(..., description="Author last name")
    age: int = Field(..., description="Author age in years")


class BookCreateRequest(BaseModel):
    """Request body for creating a book together with its author."""
    book: BookInput
    author: AuthorInput

    model_config = {
        "json_schema_extra": {
            "example": {
                "book": {"title": "The Martian"},
                "author": {"first_name": "Andy", "last_name": "Weir", "age": 48}
            }
        }
    }


class BookRepresentation(BaseModel):
    """Public representation of a book joined with its author."""
    id: int = Field(..., description="Unique book identifier")
    title: str = Field(..., description="Book title")
    author_name: str = Field(..., description="Author first and last name")
    author_age: int = Field(..., description="Author age in years")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    status_code: int = Field(..., description="HTTP status code")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    database_status: str = Field(..., description="Database connection status")
