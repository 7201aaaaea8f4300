"""
Blog API Backend - Post Route Handlers
=======================================

What:  Handles the /posts collection and /posts/{post_id} items.
How:   Extracts path and body, delegates to PostService, returns JSON.

Route Inventory:
    GET    /posts             list all posts (insertion order)
    GET    /posts/{post_id}   single post
    POST   /posts             create        (bearer token)
    PUT    /posts/{post_id}   partial update (bearer token)
    DELETE /posts/{post_id}   delete        (bearer token)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from app.dependencies import get_post_service, require_user
from app.schemas.post import (
    ErrorResponse,
    MessageResponse,
    Post,
    PostCreate,
    PostMutationResponse,
    PostUpdate,
    TokenPayload,
)
from app.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["Posts"])

AUTH_RESPONSES = {
    401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
}
NOT_FOUND_RESPONSES = {
    404: {"description": "Post not found", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[Post],
    summary="List all posts",
)
async def list_posts(
    post_service: PostService = Depends(get_post_service),
) -> List[Post]:
    return post_service.list_posts()


@router.get(
    "/{post_id}",
    response_model=Post,
    responses={**NOT_FOUND_RESPONSES},
    summary="Get a single post by ID",
)
async def get_post(
    post_id: str,
    post_service: PostService = Depends(get_post_service),
) -> Post:
    return post_service.get_post(post_id)


@router.post(
    "",
    status_code=201,
    response_model=PostMutationResponse,
    responses={
        400: {"description": "Missing title, content or author", "model": ErrorResponse},
        **AUTH_RESPONSES,
    },
    summary="Create a post",
)
async def create_post(
    payload: Optional[PostCreate] = None,
    user: TokenPayload = Depends(require_user),
    post_service: PostService = Depends(get_post_service),
) -> PostMutationResponse:
    """
    Create a post with a server-generated id and both timestamps set to now.
    """
    return post_service.create_post(payload or PostCreate(), actor=user.username)


@router.put(
    "/{post_id}",
    response_model=PostMutationResponse,
    responses={**AUTH_RESPONSES, **NOT_FOUND_RESPONSES},
    summary="Update a post (only the fields provided)",
)
async def update_post(
    post_id: str,
    payload: Optional[PostUpdate] = None,
    user: TokenPayload = Depends(require_user),
    post_service: PostService = Depends(get_post_service),
) -> PostMutationResponse:
    """
    Partial update despite the PUT verb: omitted or empty fields are kept.
    """
    return post_service.update_post(post_id, payload or PostUpdate(), actor=user.username)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses={**AUTH_RESPONSES, **NOT_FOUND_RESPONSES},
    summary="Delete a post",
)
async def delete_post(
    post_id: str,
    user: TokenPayload = Depends(require_user),
    post_service: PostService = Depends(get_post_service),
) -> MessageResponse:
    return post_service.delete_post(post_id, actor=user.username)
