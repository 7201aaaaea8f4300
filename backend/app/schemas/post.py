"""
Blog API Backend - Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the JSON contract of the API.
How:   FastAPI validates request bodies against these models and serializes
       responses through them. Field names are snake_case in Python and
       camelCase on the wire (createdAt, updatedAt, statusCode).

Request bodies declare every field optional on purpose: a missing field must
produce the API's own 400 {message, statusCode} from the service layer, not
FastAPI's schema-level 422.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Domain Record
# ══════════════════════════════════════════════════════════════════════════


class Post(CamelModel):
    """
    What:  A blog post as held by the store and returned by the API.

    Invariants:
        - id is unique across the live collection and never changes
        - created_at is set once at creation
        - updated_at is refreshed on every update, never earlier than created_at
    """
    id: str = Field(description="Opaque unique identifier, generated server-side")
    title: str = Field(description="Post title")
    content: str = Field(description="Post body")
    author: str = Field(description="Author display name")
    created_at: datetime = Field(description="Creation time (UTC ISO 8601)")
    updated_at: datetime = Field(description="Last modification time (UTC ISO 8601)")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PostCreate(BaseModel):
    """Body of POST /posts. All three fields are required by the service."""
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None


class PostUpdate(BaseModel):
    """
    Body of PUT /posts/{id}.

    Patch semantics: only truthy fields overwrite the stored record. An empty
    string is treated exactly like an omitted field.
    """
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PostMutationResponse(BaseModel):
    """Returned by create (201) and update (200)."""
    message: str = Field(description="Human-readable success message")
    post: Post = Field(description="The created or updated post")


class MessageResponse(BaseModel):
    message: str = Field(description="Human-readable acknowledgment")


class TokenResponse(BaseModel):
    token: str = Field(description="Signed bearer token")


class TokenPayload(BaseModel):
    """Decoded claims of a verified token. Used for log attribution only."""
    username: str


class ErrorResponse(CamelModel):
    """
    What:  Uniform error body for every failure.

    Example:
        {"message": "Blog post not found", "statusCode": 404}
    """
    message: str = Field(description="Human-readable error description")
    status_code: int = Field(description="HTTP status code, repeated in the body")
