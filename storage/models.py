"""
Pydantic models for the stored entities: authors, books and users.
"""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, Field, validator


MIN_TITLE_LENGTH = 3


class AuthorCreate(BaseModel):
    """Fields required to create an author."""
    first_name: str = Field(..., description="Author first name")
    last_name: str = Field(..., description="Author last name")
    age: int = Field(..., description="Author age in years")


class Author(AuthorCreate):
    """Stored author record."""
    id: int = Field(..., description="Unique author identifier")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class BookCreate(BaseModel):
    """
    Fields required to create a book.

    Validating this model enforces the book constraints; errors are reported
    per field by the API layer.
    """
    title: str = Field(..., description="Book title")
    author_id: int = Field(..., description="Identifier of the book's author")

    @validator('title')
    def validate_title(cls, v):
        """Titles must be present and reasonably long."""
        if not v or not v.strip():
            raise ValueError("can't be blank")
        if len(v.strip()) < MIN_TITLE_LENGTH:
            raise ValueError(f"is too short (minimum is {MIN_TITLE_LENGTH} characters)")
        return v


class Book(BaseModel):
    """Stored book record."""
    id: int = Field(..., description="Unique book identifier")
    title: str = Field(..., description="Book title")
    author_id: int = Field(..., description="Identifier of the book's author")


class User(BaseModel):
    """Stored API user."""
    id: int = Field(..., description="Unique user identifier")
    username: str = Field(..., description="Unique user name")
    created_at: datetime = Field(default_factory=datetime.utcnow, description="When the user was created")


def from_document(model, document: Dict[str, Any]):
    """Build a model from a MongoDB document, mapping `_id` to `id`."""
    data = dict(document)
    data["id"] = data.pop("_id")
    return model(**data)
