from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from threading import RLock
from typing import TypeVar

from portfolio_api.application.ports.content_port import ContentPort
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
from portfolio_api.domain.entities.patch import changed_fields


T = TypeVar("T")


def _newest_first(items: list[T], attr: str = "created_at") -> list[T]:
    return sorted(items, key=lambda item: getattr(item, attr), reverse=True)


class InMemoryContentRepository(ContentPort):
    def __init__(self):
        self._lock = RLock()
        self._skills: dict[str, Skill] = {}
        self._services: dict[str, Service] = {}
        self._projects: dict[str, Project] = {}
        self._experiences: dict[str, Experience] = {}
        self._blog_posts: dict[str, BlogPost] = {}
        self._contact_messages: dict[str, ContactMessage] = {}
        self._subscribers: dict[str, NewsletterSubscriber] = {}

    def _patch(self, bucket: dict[str, T], item_id: str, patch, now: datetime) -> T | None:
        with self._lock:
            item = bucket.get(item_id)
            if item is None:
                return None
            updated = replace(item, **changed_fields(patch), updated_at=now)
            bucket[item_id] = updated
            return updated

    def _delete(self, bucket: dict, item_id: str) -> bool:
        with self._lock:
            return bucket.pop(item_id, None) is not None

    def list_skills(self) -> list[Skill]:
        with self._lock:
            items = list(self._skills.values())
        return sorted(items, key=lambda s: (s.order, s.created_at))

    def create_skill(self, *, skill_id: str, draft: SkillDraft, now: datetime) -> Skill:
        skill = Skill(id=skill_id, **vars(draft), created_at=now, updated_at=now)
        with self._lock:
            self._skills[skill.id] = skill
        return skill

    def update_skill(self, *, skill_id: str, patch: SkillPatch, now: datetime) -> Skill | None:
        return self._patch(self._skills, skill_id, patch, now)

    def delete_skill(self, *, skill_id: str) -> bool:
        return self._delete(self._skills, skill_id)

    def list_services(self) -> list[Service]:
        with self._lock:
            items = list(self._services.values())
        return sorted(items, key=lambda s: (s.order, s.created_at))

    def create_service(self, *, service_id: str, draft: ServiceDraft, now: datetime) -> Service:
        service = Service(id=service_id, **vars(draft), created_at=now, updated_at=now)
        with self._lock:
            self._services[service.id] = service
        return service

    def update_service(self, *, service_id: str, patch: ServicePatch, now: datetime) -> Service | None:
        return self._patch(self._services, service_id, patch, now)

    def delete_service(self, *, service_id: str) -> bool:
        return self._delete(self._services, service_id)

    def list_projects(self) -> list[Project]:
        with self._lock:
            items = _newest_first(list(self._projects.values()))
        return sorted(items, key=lambda p: p.order)

    def get_project(self, *, project_id: str) -> Project | None:
        with self._lock:
            return self._projects.get(project_id)

    def create_project(self, *, project_id: str, draft: ProjectDraft, now: datetime) -> Project:
        project = Project(id=project_id, **vars(draft), created_at=now, updated_at=now)
        with self._lock:
            self._projects[project.id] = project
        return project

    def update_project(self, *, project_id: str, patch: ProjectPatch, now: datetime) -> Project | None:
        return self._patch(self._projects, project_id, patch, now)

    def delete_project(self, *, project_id: str) -> bool:
        return self._delete(self._projects, project_id)

    def list_experiences(self) -> list[Experience]:
        with self._lock:
            items = _newest_first(list(self._experiences.values()))
        return sorted(items, key=lambda e: e.order)

    def create_experience(self, *, experience_id: str, draft: ExperienceDraft, now: datetime) -> Experience:
        experience = Experience(id=experience_id, **vars(draft), created_at=now, updated_at=now)
        with self._lock:
            self._experiences[experience.id] = experience
        return experience

    def update_experience(
        self,
        *,
        experience_id: str,
        patch: ExperiencePatch,
        now: datetime,
    ) -> Experience | None:
        return self._patch(self._experiences, experience_id, patch, now)

    def delete_experience(self, *, experience_id: str) -> bool:
        return self._delete(self._experiences, experience_id)

    def list_blog_posts(self, *, published_only: bool) -> list[BlogPost]:
        with self._lock:
            items = list(self._blog_posts.values())
        if published_only:
            items = [post for post in items if post.published]
        return _newest_first(items)

    def get_blog_post(self, *, post_id: str) -> BlogPost | None:
        with self._lock:
            return self._blog_posts.get(post_id)

    def get_blog_post_by_slug(self, *, slug: str) -> BlogPost | None:
        with self._lock:
            for post in self._blog_posts.values():
                if post.slug == slug:
                    return post
        return None

    def create_blog_post(self, *, post_id: str, draft: BlogPostDraft, now: datetime) -> BlogPost:
        post = BlogPost(id=post_id, **vars(draft), created_at=now, updated_at=now)
        with self._lock:
            self._blog_posts[post.id] = post
        return post

    def update_blog_post(self, *, post_id: str, patch: BlogPostPatch, now: datetime) -> BlogPost | None:
        return self._patch(self._blog_posts, post_id, patch, now)

    def delete_blog_post(self, *, post_id: str) -> bool:
        return self._delete(self._blog_posts, post_id)

    def create_contact_message(
        self,
        *,
        message_id: str,
        draft: ContactMessageDraft,
        now: datetime,
    ) -> ContactMessage:
        message = ContactMessage(id=message_id, **vars(draft), created_at=now)
        with self._lock:
            self._contact_messages[message.id] = message
        return message

    def list_contact_messages(self) -> list[ContactMessage]:
        with self._lock:
            return _newest_first(list(self._contact_messages.values()))

    def list_active_subscribers(self) -> list[NewsletterSubscriber]:
        with self._lock:
            items = [sub for sub in self._subscribers.values() if sub.is_active]
        return _newest_first(items, "subscribed_at")

    def get_subscriber_by_email(self, *, email: str) -> NewsletterSubscriber | None:
        with self._lock:
            for subscriber in self._subscribers.values():
                if subscriber.email == email:
                    return subscriber
        return None

    def create_subscriber(
        self,
        *,
        subscriber_id: str,
        email: str,
        name: str | None,
        now: datetime,
    ) -> NewsletterSubscriber:
        subscriber = NewsletterSubscriber(
            id=subscriber_id,
            email=email,
            name=name,
            is_active=True,
            subscribed_at=now,
            unsubscribed_at=None,
        )
        with self._lock:
            self._subscribers[subscriber.id] = subscriber
        return subscriber

    def reactivate_subscriber(
        self,
        *,
        subscriber_id: str,
        name: str | None,
        now: datetime,
    ) -> NewsletterSubscriber:
        with self._lock:
            subscriber = replace(
                self._subscribers[subscriber_id],
                name=name,
                is_active=True,
                subscribed_at=now,
                unsubscribed_at=None,
            )
            self._subscribers[subscriber_id] = subscriber
        return subscriber

    def unsubscribe(self, *, email: str, now: datetime) -> bool:
        with self._lock:
            for subscriber in self._subscribers.values():
                if subscriber.email == email and subscriber.is_active:
                    self._subscribers[subscriber.id] = replace(
                        subscriber,
                        is_active=False,
                        unsubscribed_at=now,
                    )
                    return True
        return False
