from __future__ import annotations

import re
from dataclasses import replace
from typing import Generic, TypeVar
from uuid import uuid4

from portfolio_api.application.ports.content_port import ContentPort
from portfolio_api.domain.entities.content import (
    BlogPost,
    BlogPostDraft,
    BlogPostPatch,
    Experience,
    ExperienceDraft,
    ExperiencePatch,
    Project,
    ProjectDraft,
    ProjectPatch,
    Service,
    ServiceDraft,
    ServicePatch,
    Skill,
    SkillDraft,
    SkillPatch,
)
from portfolio_api.domain.entities.patch import UNSET, changed_fields
from portfolio_api.domain.exceptions import (
    ContentInputError,
    ContentNotFoundError,
    SlugAlreadyExistsError,
)

from .auth_common import utcnow


TEntity = TypeVar("TEntity")
TDraft = TypeVar("TDraft")
TPatch = TypeVar("TPatch")

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def require_text(value: str, field_name: str) -> None:
    if not value or not value.strip():
        raise ContentInputError(f"{field_name} is required.")


def _require_text_fields(values: dict, names: tuple[str, ...]) -> None:
    for name in names:
        if name in values:
            require_text(values[name], name)


class _ContentCrudUseCase(Generic[TEntity, TDraft, TPatch]):
    """Shared list/create/update/delete flow over one ContentPort entity."""

    label = "Item"
    required_fields: tuple[str, ...] = ()

    def __init__(self, *, content_port: ContentPort):
        self._content_port = content_port

    def list(self) -> list[TEntity]:
        return self._list()

    def create(self, draft: TDraft) -> TEntity:
        self._validate(vars(draft))
        return self._create(str(uuid4()), draft)

    def update(self, item_id: str, patch: TPatch) -> TEntity:
        self._validate(changed_fields(patch))
        item = self._update(item_id, patch)
        if item is None:
            raise ContentNotFoundError(f"{self.label} not found.")
        return item

    def delete(self, item_id: str) -> None:
        if not self._delete(item_id):
            raise ContentNotFoundError(f"{self.label} not found.")

    def _validate(self, values: dict) -> None:
        _require_text_fields(values, self.required_fields)

    def _list(self) -> list[TEntity]:
        raise NotImplementedError

    def _create(self, item_id: str, draft: TDraft) -> TEntity:
        raise NotImplementedError

    def _update(self, item_id: str, patch: TPatch) -> TEntity | None:
        raise NotImplementedError

    def _delete(self, item_id: str) -> bool:
        raise NotImplementedError


class ManageSkillsUseCase(_ContentCrudUseCase[Skill, SkillDraft, SkillPatch]):
    label = "Skill"
    required_fields = ("name", "icon", "color")

    def _validate(self, values: dict) -> None:
        super()._validate(values)
        level = values.get("level")
        if level is not None and not 0 <= level <= 100:
            raise ContentInputError("level must be between 0 and 100.")

    def _list(self) -> list[Skill]:
        return self._content_port.list_skills()

    def _create(self, item_id: str, draft: SkillDraft) -> Skill:
        return self._content_port.create_skill(skill_id=item_id, draft=draft, now=utcnow())

    def _update(self, item_id: str, patch: SkillPatch) -> Skill | None:
        return self._content_port.update_skill(skill_id=item_id, patch=patch, now=utcnow())

    def _delete(self, item_id: str) -> bool:
        return self._content_port.delete_skill(skill_id=item_id)


class ManageServicesUseCase(_ContentCrudUseCase[Service, ServiceDraft, ServicePatch]):
    label = "Service"
    required_fields = ("title", "description", "icon")

    def _list(self) -> list[Service]:
        return self._content_port.list_services()

    def _create(self, item_id: str, draft: ServiceDraft) -> Service:
        return self._content_port.create_service(service_id=item_id, draft=draft, now=utcnow())

    def _update(self, item_id: str, patch: ServicePatch) -> Service | None:
        return self._content_port.update_service(service_id=item_id, patch=patch, now=utcnow())

    def _delete(self, item_id: str) -> bool:
        return self._content_port.delete_service(service_id=item_id)


class ManageProjectsUseCase(_ContentCrudUseCase[Project, ProjectDraft, ProjectPatch]):
    label = "Project"
    required_fields = ("title", "description")

    def get(self, item_id: str) -> Project:
        project = self._content_port.get_project(project_id=item_id)
        if project is None:
            raise ContentNotFoundError("Project not found.")
        return project

    def _list(self) -> list[Project]:
        return self._content_port.list_projects()

    def _create(self, item_id: str, draft: ProjectDraft) -> Project:
        return self._content_port.create_project(project_id=item_id, draft=draft, now=utcnow())

    def _update(self, item_id: str, patch: ProjectPatch) -> Project | None:
        return self._content_port.update_project(project_id=item_id, patch=patch, now=utcnow())

    def _delete(self, item_id: str) -> bool:
        return self._content_port.delete_project(project_id=item_id)


class ManageExperiencesUseCase(_ContentCrudUseCase[Experience, ExperienceDraft, ExperiencePatch]):
    label = "Experience"
    required_fields = ("period", "title", "company", "description")

    def _list(self) -> list[Experience]:
        return self._content_port.list_experiences()

    def _create(self, item_id: str, draft: ExperienceDraft) -> Experience:
        return self._content_port.create_experience(experience_id=item_id, draft=draft, now=utcnow())

    def _update(self, item_id: str, patch: ExperiencePatch) -> Experience | None:
        return self._content_port.update_experience(experience_id=item_id, patch=patch, now=utcnow())

    def _delete(self, item_id: str) -> bool:
        return self._content_port.delete_experience(experience_id=item_id)


class ManageBlogPostsUseCase(_ContentCrudUseCase[BlogPost, BlogPostDraft, BlogPostPatch]):
    """Blog CRUD; publishing a post without a date stamps it with now."""

    label = "Blog post"
    required_fields = ("title", "slug", "excerpt", "content")

    def list_published(self) -> list[BlogPost]:
        return self._content_port.list_blog_posts(published_only=True)

    def get_published_by_slug(self, slug: str) -> BlogPost:
        post = self._content_port.get_blog_post_by_slug(slug=slug)
        if post is None or not post.published:
            raise ContentNotFoundError("Blog post not found.")
        return post

    def create(self, draft: BlogPostDraft) -> BlogPost:
        if draft.published and draft.published_at is None:
            draft = replace(draft, published_at=utcnow())
        return super().create(draft)

    def update(self, item_id: str, patch: BlogPostPatch) -> BlogPost:
        if patch.published is True and patch.published_at is UNSET:
            current = self._content_port.get_blog_post(post_id=item_id)
            if current is not None and current.published_at is None:
                patch = replace(patch, published_at=utcnow())
        return super().update(item_id, patch)

    def _validate(self, values: dict) -> None:
        super()._validate(values)
        slug = values.get("slug")
        if slug is not None and not SLUG_RE.match(slug):
            raise ContentInputError("slug must contain lowercase letters, digits and single dashes.")

    def _ensure_slug_free(self, slug: str, *, post_id: str | None) -> None:
        owner = self._content_port.get_blog_post_by_slug(slug=slug)
        if owner is not None and owner.id != post_id:
            raise SlugAlreadyExistsError("Slug already in use.")

    def _list(self) -> list[BlogPost]:
        return self._content_port.list_blog_posts(published_only=False)

    def _create(self, item_id: str, draft: BlogPostDraft) -> BlogPost:
        self._ensure_slug_free(draft.slug, post_id=None)
        return self._content_port.create_blog_post(post_id=item_id, draft=draft, now=utcnow())

    def _update(self, item_id: str, patch: BlogPostPatch) -> BlogPost | None:
        if patch.slug is not UNSET:
            self._ensure_slug_free(patch.slug, post_id=item_id)
        return self._content_port.update_blog_post(post_id=item_id, patch=patch, now=utcnow())

    def _delete(self, item_id: str) -> bool:
        return self._content_port.delete_blog_post(post_id=item_id)
