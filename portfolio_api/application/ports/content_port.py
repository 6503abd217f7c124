from __future__ import annotations

from datetime import datetime
from typing import Protocol

from portfolio_api.domain.entities.content import (
    BlogPost,
    BlogPostDraft,
    BlogPostPatch,
    ContactMessage,
    ContactMessageDraft,
    Experience,
    ExperienceDraft,
    ExperiencePatch,
    NewsletterSubscriber,
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


class ContentPort(Protocol):
    def list_skills(self) -> list[Skill]:
        ...

    def create_skill(self, *, skill_id: str, draft: SkillDraft, now: datetime) -> Skill:
        ...

    def update_skill(self, *, skill_id: str, patch: SkillPatch, now: datetime) -> Skill | None:
        ...

    def delete_skill(self, *, skill_id: str) -> bool:
        ...

    def list_services(self) -> list[Service]:
        ...

    def create_service(self, *, service_id: str, draft: ServiceDraft, now: datetime) -> Service:
        ...

    def update_service(self, *, service_id: str, patch: ServicePatch, now: datetime) -> Service | None:
        ...

    def delete_service(self, *, service_id: str) -> bool:
        ...

    def list_projects(self) -> list[Project]:
        ...

    def get_project(self, *, project_id: str) -> Project | None:
        ...

    def create_project(self, *, project_id: str, draft: ProjectDraft, now: datetime) -> Project:
        ...

    def update_project(self, *, project_id: str, patch: ProjectPatch, now: datetime) -> Project | None:
        ...

    def delete_project(self, *, project_id: str) -> bool:
        ...

    def list_experiences(self) -> list[Experience]:
        ...

    def create_experience(self, *, experience_id: str, draft: ExperienceDraft, now: datetime) -> Experience:
        ...

    def update_experience(
        self,
        *,
        experience_id: str,
        patch: ExperiencePatch,
        now: datetime,
    ) -> Experience | None:
        ...

    def delete_experience(self, *, experience_id: str) -> bool:
        ...

    def list_blog_posts(self, *, published_only: bool) -> list[BlogPost]:
        ...

    def get_blog_post(self, *, post_id: str) -> BlogPost | None:
        ...

    def get_blog_post_by_slug(self, *, slug: str) -> BlogPost | None:
        ...

    def create_blog_post(self, *, post_id: str, draft: BlogPostDraft, now: datetime) -> BlogPost:
        ...

    def update_blog_post(self, *, post_id: str, patch: BlogPostPatch, now: datetime) -> BlogPost | None:
        ...

    def delete_blog_post(self, *, post_id: str) -> bool:
        ...

    def create_contact_message(
        self,
        *,
        message_id: str,
        draft: ContactMessageDraft,
        now: datetime,
    ) -> ContactMessage:
        ...

    def list_contact_messages(self) -> list[ContactMessage]:
        ...

    def list_active_subscribers(self) -> list[NewsletterSubscriber]:
        ...

    def get_subscriber_by_email(self, *, email: str) -> NewsletterSubscriber | None:
        ...

    def create_subscriber(
        self,
        *,
        subscriber_id: str,
        email: str,
        name: str | None,
        now: datetime,
    ) -> NewsletterSubscriber:
        ...

    def reactivate_subscriber(
        self,
        *,
        subscriber_id: str,
        name: str | None,
        now: datetime,
    ) -> NewsletterSubscriber:
        ...

    def unsubscribe(self, *, email: str, now: datetime) -> bool:
        ...
