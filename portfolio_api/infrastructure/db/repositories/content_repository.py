from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping, TypeVar
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.engine import Engine

from portfolio_api.application.ports.content_port import ContentPort
from portfolio_api.domain.entities.content import (
    BlogPostDraft,
    BlogPostPatch,
    ContactMessageDraft,
    ExperienceDraft,
    ExperiencePatch,
    ProjectDraft,
    ProjectPatch,
    ServiceDraft,
    ServicePatch,
    SkillDraft,
    SkillPatch,
)
from portfolio_api.domain.entities.patch import changed_fields
from portfolio_api.infrastructure.db.mappers.content_mapper import (
    map_row_to_blog_post,
    map_row_to_contact_message,
    map_row_to_experience,
    map_row_to_newsletter_subscriber,
    map_row_to_project,
    map_row_to_service,
    map_row_to_skill,
)


T = TypeVar("T")

SKILL_COLUMNS = "id, name, level, icon, color, is_additional, sort_order, created_at, updated_at"
SERVICE_COLUMNS = "id, title, description, icon, price, features, sort_order, created_at, updated_at"
PROJECT_COLUMNS = (
    "id, title, description, content, image, technologies, gradient_from, gradient_to, "
    "demo_url, github_url, featured, sort_order, created_at, updated_at"
)
EXPERIENCE_COLUMNS = (
    "id, period, title, company, description, gpa, coursework, color, sort_order, created_at, updated_at"
)
BLOG_POST_COLUMNS = (
    "id, title, slug, excerpt, content, image, tags, published, published_at, sort_order, created_at, updated_at"
)
CONTACT_MESSAGE_COLUMNS = "id, name, email, phone, subject, message, created_at"
SUBSCRIBER_COLUMNS = "id, email, name, is_active, subscribed_at, unsubscribed_at"


def _to_columns(values: Mapping[str, Any]) -> dict[str, Any]:
    """Translate entity field values into column values."""
    columns: dict[str, Any] = {}
    for key, value in values.items():
        if key == "order":
            key = "sort_order"
        if isinstance(value, tuple):
            value = list(value)
        columns[key] = value
    return columns


def _parse_id(item_id: str) -> UUID | None:
    # Ids arrive from URL paths; anything that is not a UUID cannot match a row.
    try:
        return UUID(item_id)
    except ValueError:
        return None


class SqlContentRepository(ContentPort):
    def __init__(self, engine: Engine):
        self._engine = engine

    def _fetch_all(self, sql: str, mapper: Callable[[Mapping[str, Any]], T], params: dict | None = None) -> list[T]:
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql), params or {}).mappings().all()
        return [mapper(row) for row in rows]

    def _fetch_one(self, sql: str, mapper: Callable[[Mapping[str, Any]], T], params: dict) -> T | None:
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), params).mappings().first()
        if row is None:
            return None
        return mapper(row)

    def _insert(
        self,
        table: str,
        returning: str,
        values: Mapping[str, Any],
        mapper: Callable[[Mapping[str, Any]], T],
    ) -> T:
        columns = _to_columns(values)
        names = ", ".join(columns)
        placeholders = ", ".join(f":{name}" for name in columns)
        sql = f"""
            INSERT INTO public.{table} ({names})
            VALUES ({placeholders})
            RETURNING {returning}
        """
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), columns).mappings().one()
        return mapper(row)

    def _update(
        self,
        table: str,
        returning: str,
        item_id: str,
        patch: Any,
        now: datetime,
        mapper: Callable[[Mapping[str, Any]], T],
    ) -> T | None:
        if _parse_id(item_id) is None:
            return None
        columns = _to_columns(changed_fields(patch))
        columns["updated_at"] = now
        assignments = ", ".join(f"{name} = :{name}" for name in columns)
        sql = f"""
            UPDATE public.{table}
            SET {assignments}
            WHERE id = :item_id
            RETURNING {returning}
        """
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), {**columns, "item_id": item_id}).mappings().first()
        if row is None:
            return None
        return mapper(row)

    def _delete(self, table: str, item_id: str) -> bool:
        if _parse_id(item_id) is None:
            return False
        sql = f"DELETE FROM public.{table} WHERE id = :item_id"
        with self._engine.begin() as conn:
            result = conn.execute(text(sql), {"item_id": item_id})
        return result.rowcount > 0

    def list_skills(self):
        sql = f"""
            SELECT {SKILL_COLUMNS}
            FROM public.skills
            ORDER BY sort_order ASC, created_at ASC
        """
        return self._fetch_all(sql, map_row_to_skill)

    def create_skill(self, *, skill_id: str, draft: SkillDraft, now: datetime):
        values = {"id": skill_id, **vars(draft), "created_at": now, "updated_at": now}
        return self._insert("skills", SKILL_COLUMNS, values, map_row_to_skill)

    def update_skill(self, *, skill_id: str, patch: SkillPatch, now: datetime):
        return self._update("skills", SKILL_COLUMNS, skill_id, patch, now, map_row_to_skill)

    def delete_skill(self, *, skill_id: str) -> bool:
        return self._delete("skills", skill_id)

    def list_services(self):
        sql = f"""
            SELECT {SERVICE_COLUMNS}
            FROM public.services
            ORDER BY sort_order ASC, created_at ASC
        """
        return self._fetch_all(sql, map_row_to_service)

    def create_service(self, *, service_id: str, draft: ServiceDraft, now: datetime):
        values = {"id": service_id, **vars(draft), "created_at": now, "updated_at": now}
        return self._insert("services", SERVICE_COLUMNS, values, map_row_to_service)

    def update_service(self, *, service_id: str, patch: ServicePatch, now: datetime):
        return self._update("services", SERVICE_COLUMNS, service_id, patch, now, map_row_to_service)

    def delete_service(self, *, service_id: str) -> bool:
        return self._delete("services", service_id)

    def list_projects(self):
        sql = f"""
            SELECT {PROJECT_COLUMNS}
            FROM public.projects
            ORDER BY sort_order ASC, created_at DESC
        """
        return self._fetch_all(sql, map_row_to_project)

    def get_project(self, *, project_id: str):
        if _parse_id(project_id) is None:
            return None
        sql = f"""
            SELECT {PROJECT_COLUMNS}
            FROM public.projects
            WHERE id = :project_id
            LIMIT 1
        """
        return self._fetch_one(sql, map_row_to_project, {"project_id": project_id})

    def create_project(self, *, project_id: str, draft: ProjectDraft, now: datetime):
        values = {"id": project_id, **vars(draft), "created_at": now, "updated_at": now}
        return self._insert("projects", PROJECT_COLUMNS, values, map_row_to_project)

    def update_project(self, *, project_id: str, patch: ProjectPatch, now: datetime):
        return self._update("projects", PROJECT_COLUMNS, project_id, patch, now, map_row_to_project)

    def delete_project(self, *, project_id: str) -> bool:
        return self._delete("projects", project_id)

    def list_experiences(self):
        sql = f"""
            SELECT {EXPERIENCE_COLUMNS}
            FROM public.experiences
            ORDER BY sort_order ASC, created_at DESC
        """
        return self._fetch_all(sql, map_row_to_experience)

    def create_experience(self, *, experience_id: str, draft: ExperienceDraft, now: datetime):
        values = {"id": experience_id, **vars(draft), "created_at": now, "updated_at": now}
        return self._insert("experiences", EXPERIENCE_COLUMNS, values, map_row_to_experience)

    def update_experience(self, *, experience_id: str, patch: ExperiencePatch, now: datetime):
        return self._update(
            "experiences",
            EXPERIENCE_COLUMNS,
            experience_id,
            patch,
            now,
            map_row_to_experience,
        )

    def delete_experience(self, *, experience_id: str) -> bool:
        return self._delete("experiences", experience_id)

    def list_blog_posts(self, *, published_only: bool):
        sql = f"""
            SELECT {BLOG_POST_COLUMNS}
            FROM public.blog_posts
            WHERE (:published_only = false OR published = true)
            ORDER BY created_at DESC
        """
        return self._fetch_all(sql, map_row_to_blog_post, {"published_only": published_only})

    def get_blog_post(self, *, post_id: str):
        if _parse_id(post_id) is None:
            return None
        sql = f"""
            SELECT {BLOG_POST_COLUMNS}
            FROM public.blog_posts
            WHERE id = :post_id
            LIMIT 1
        """
        return self._fetch_one(sql, map_row_to_blog_post, {"post_id": post_id})

    def get_blog_post_by_slug(self, *, slug: str):
        sql = f"""
            SELECT {BLOG_POST_COLUMNS}
            FROM public.blog_posts
            WHERE slug = :slug
            LIMIT 1
        """
        return self._fetch_one(sql, map_row_to_blog_post, {"slug": slug})

    def create_blog_post(self, *, post_id: str, draft: BlogPostDraft, now: datetime):
        values = {"id": post_id, **vars(draft), "created_at": now, "updated_at": now}
        return self._insert("blog_posts", BLOG_POST_COLUMNS, values, map_row_to_blog_post)

    def update_blog_post(self, *, post_id: str, patch: BlogPostPatch, now: datetime):
        return self._update("blog_posts", BLOG_POST_COLUMNS, post_id, patch, now, map_row_to_blog_post)

    def delete_blog_post(self, *, post_id: str) -> bool:
        return self._delete("blog_posts", post_id)

    def create_contact_message(self, *, message_id: str, draft: ContactMessageDraft, now: datetime):
        values = {"id": message_id, **vars(draft), "created_at": now}
        return self._insert("contact_messages", CONTACT_MESSAGE_COLUMNS, values, map_row_to_contact_message)

    def list_contact_messages(self):
        sql = f"""
            SELECT {CONTACT_MESSAGE_COLUMNS}
            FROM public.contact_messages
            ORDER BY created_at DESC
        """
        return self._fetch_all(sql, map_row_to_contact_message)

    def list_active_subscribers(self):
        sql = f"""
            SELECT {SUBSCRIBER_COLUMNS}
            FROM public.newsletter_subscribers
            WHERE is_active = true
            ORDER BY subscribed_at DESC
        """
        return self._fetch_all(sql, map_row_to_newsletter_subscriber)

    def get_subscriber_by_email(self, *, email: str):
        sql = f"""
            SELECT {SUBSCRIBER_COLUMNS}
            FROM public.newsletter_subscribers
            WHERE email = :email
            LIMIT 1
        """
        return self._fetch_one(sql, map_row_to_newsletter_subscriber, {"email": email})

    def create_subscriber(self, *, subscriber_id: str, email: str, name: str | None, now: datetime):
        values = {
            "id": subscriber_id,
            "email": email,
            "name": name,
            "is_active": True,
            "subscribed_at": now,
            "unsubscribed_at": None,
        }
        return self._insert(
            "newsletter_subscribers",
            SUBSCRIBER_COLUMNS,
            values,
            map_row_to_newsletter_subscriber,
        )

    def reactivate_subscriber(self, *, subscriber_id: str, name: str | None, now: datetime):
        sql = f"""
            UPDATE public.newsletter_subscribers
            SET name = :name,
                is_active = true,
                subscribed_at = :now,
                unsubscribed_at = NULL
            WHERE id = :subscriber_id
            RETURNING {SUBSCRIBER_COLUMNS}
        """
        with self._engine.begin() as conn:
            row = conn.execute(
                text(sql),
                {"subscriber_id": subscriber_id, "name": name, "now": now},
            ).mappings().one()
        return map_row_to_newsletter_subscriber(row)

    def unsubscribe(self, *, email: str, now: datetime) -> bool:
        sql = """
            UPDATE public.newsletter_subscribers
            SET is_active = false,
                unsubscribed_at = :now
            WHERE email = :email
              AND is_active = true
        """
        with self._engine.begin() as conn:
            result = conn.execute(text(sql), {"email": email, "now": now})
        return result.rowcount > 0
