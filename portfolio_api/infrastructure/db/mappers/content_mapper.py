from __future__ import annotations

from typing import Any, Mapping

from portfolio_api.domain.entities.content import (
    BlogPost,
    ContactMessage,
    Experience,
    NewsletterSubscriber,
    Project,
    Service,
    Skill,
)


def _as_str(value: Any) -> str:
    return str(value)


def _as_tuple(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(str(item) for item in value)


def map_row_to_skill(row: Mapping[str, Any]) -> Skill:
    return Skill(
        id=_as_str(row["id"]),
        name=row["name"],
        level=int(row["level"]),
        icon=row["icon"],
        color=row["color"],
        is_additional=bool(row["is_additional"]),
        order=int(row["sort_order"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def map_row_to_service(row: Mapping[str, Any]) -> Service:
    return Service(
        id=_as_str(row["id"]),
        title=row["title"],
        description=row["description"],
        icon=row["icon"],
        price=row.get("price"),
        features=_as_tuple(row.get("features")),
        order=int(row["sort_order"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def map_row_to_project(row: Mapping[str, Any]) -> Project:
    return Project(
        id=_as_str(row["id"]),
        title=row["title"],
        description=row["description"],
        content=row.get("content"),
        image=row.get("image"),
        technologies=_as_tuple(row.get("technologies")),
        gradient_from=row.get("gradient_from"),
        gradient_to=row.get("gradient_to"),
        demo_url=row.get("demo_url"),
        github_url=row.get("github_url"),
        featured=bool(row["featured"]),
        order=int(row["sort_order"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def map_row_to_experience(row: Mapping[str, Any]) -> Experience:
    return Experience(
        id=_as_str(row["id"]),
        period=row["period"],
        title=row["title"],
        company=row["company"],
        description=row["description"],
        gpa=row.get("gpa"),
        coursework=row.get("coursework"),
        color=row.get("color"),
        order=int(row["sort_order"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def map_row_to_blog_post(row: Mapping[str, Any]) -> BlogPost:
    return BlogPost(
        id=_as_str(row["id"]),
        title=row["title"],
        slug=row["slug"],
        excerpt=row["excerpt"],
        content=row["content"],
        image=row.get("image"),
        tags=_as_tuple(row.get("tags")),
        published=bool(row["published"]),
        published_at=row.get("published_at"),
        order=int(row["sort_order"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def map_row_to_contact_message(row: Mapping[str, Any]) -> ContactMessage:
    return ContactMessage(
        id=_as_str(row["id"]),
        name=row["name"],
        email=row["email"],
        phone=row.get("phone"),
        subject=row["subject"],
        message=row["message"],
        created_at=row["created_at"],
    )


def map_row_to_newsletter_subscriber(row: Mapping[str, Any]) -> NewsletterSubscriber:
    return NewsletterSubscriber(
        id=_as_str(row["id"]),
        email=row["email"],
        name=row.get("name"),
        is_active=bool(row["is_active"]),
        subscribed_at=row["subscribed_at"],
        unsubscribed_at=row.get("unsubscribed_at"),
    )
