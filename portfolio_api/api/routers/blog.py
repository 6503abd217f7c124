from __future__ import annotations

from fastapi import APIRouter, Depends

from portfolio_api.api.deps import get_current_user, get_manage_blog_posts_use_case
from portfolio_api.api.routers.content import content_errors, draft_fields
from portfolio_api.api.schemas.base import SuccessResponse
from portfolio_api.api.schemas.content import (
    BlogPostCreateRequest,
    BlogPostResponse,
    BlogPostUpdateRequest,
)
from portfolio_api.application.use_cases.manage_content import ManageBlogPostsUseCase
from portfolio_api.domain.entities.content import BlogPostDraft, BlogPostPatch
from portfolio_api.domain.entities.user import User


router = APIRouter(prefix="/api", tags=["blog"])


@router.get("/blog", response_model=list[BlogPostResponse])
def list_published_posts(use_case: ManageBlogPostsUseCase = Depends(get_manage_blog_posts_use_case)):
    return [BlogPostResponse(**vars(post)) for post in use_case.list_published()]


@router.get("/blog/{slug}", response_model=BlogPostResponse)
def get_published_post(
    slug: str,
    use_case: ManageBlogPostsUseCase = Depends(get_manage_blog_posts_use_case),
):
    with content_errors():
        post = use_case.get_published_by_slug(slug)
    return BlogPostResponse(**vars(post))


@router.get("/admin/blog", response_model=list[BlogPostResponse])
def list_all_posts(
    _user: User = Depends(get_current_user),
    use_case: ManageBlogPostsUseCase = Depends(get_manage_blog_posts_use_case),
):
    return [BlogPostResponse(**vars(post)) for post in use_case.list()]


@router.post("/blog", response_model=BlogPostResponse, status_code=201)
def create_post(
    req: BlogPostCreateRequest,
    _user: User = Depends(get_current_user),
    use_case: ManageBlogPostsUseCase = Depends(get_manage_blog_posts_use_case),
):
    with content_errors():
        post = use_case.create(BlogPostDraft(**draft_fields(req)))
    return BlogPostResponse(**vars(post))


@router.patch("/blog/{post_id}", response_model=BlogPostResponse)
def update_post(
    post_id: str,
    req: BlogPostUpdateRequest,
    _user: User = Depends(get_current_user),
    use_case: ManageBlogPostsUseCase = Depends(get_manage_blog_posts_use_case),
):
    with content_errors():
        post = use_case.update(post_id, BlogPostPatch(**req.changes()))
    return BlogPostResponse(**vars(post))


@router.delete("/blog/{post_id}", response_model=SuccessResponse)
def delete_post(
    post_id: str,
    _user: User = Depends(get_current_user),
    use_case: ManageBlogPostsUseCase = Depends(get_manage_blog_posts_use_case),
):
    with content_errors():
        use_case.delete(post_id)
    return SuccessResponse()
