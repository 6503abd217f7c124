from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from pydantic import Field, model_validator

from .base import CamelModel


class PatchRequest(CamelModel):
    """Update body; only the fields the client sent are applied."""

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_explicit_nulls(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null.")
        return self

    def changes(self) -> dict:
        values = self.model_dump(exclude_unset=True)
        return {key: tuple(value) if isinstance(value, list) else value for key, value in values.items()}


class SkillCreateRequest(CamelModel):
    name: str = Field(..., max_length=120)
    level: int
    icon: str = Field(..., max_length=64)
    color: str = Field(..., max_length=32)
    is_additional: bool = False
    order: int = 0


class SkillUpdateRequest(PatchRequest):
    non_nullable = ("name", "level", "icon", "color", "is_additional", "order")

    name: str | None = Field(default=None, max_length=120)
    level: int | None = None
    icon: str | None = Field(default=None, max_length=64)
    color: str | None = Field(default=None, max_length=32)
    is_additional: bool | None = None
    order: int | None = None


class SkillResponse(CamelModel):
    id: str
    name: str
    level: int
    icon: str
    color: str
    is_additional: bool
    order: int
    created_at: datetime
    updated_at: datetime


class ServiceCreateRequest(CamelModel):
    title: str = Field(..., max_length=200)
    description: str
    icon: str = Field(..., max_length=64)
    price: str | None = Field(default=None, max_length=120)
    features: list[str] = Field(default_factory=list)
    order: int = 0


class ServiceUpdateRequest(PatchRequest):
    non_nullable = ("title", "description", "icon", "features", "order")

    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    icon: str | None = Field(default=None, max_length=64)
    price: str | None = Field(default=None, max_length=120)
    features: list[str] | None = None
    order: int | None = None


class ServiceResponse(CamelModel):
    id: str
    title: str
    description: str
    icon: str
    price: str | None
    features: list[str]
    order: int
    created_at: datetime
    updated_at: datetime


class ProjectCreateRequest(CamelModel):
    title: str = Field(..., max_length=200)
    description: str
    content: str | None = None
    image: str | None = None
    technologies: list[str] = Field(default_factory=list)
    gradient_from: str | None = Field(default=None, max_length=32)
    gradient_to: str | None = Field(default=None, max_length=32)
    demo_url: str | None = None
    github_url: str | None = None
    featured: bool = False
    order: int = 0


class ProjectUpdateRequest(PatchRequest):
    non_nullable = ("title", "description", "technologies", "featured", "order")

    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    content: str | None = None
    image: str | None = None
    technologies: list[str] | None = None
    gradient_from: str | None = Field(default=None, max_length=32)
    gradient_to: str | None = Field(default=None, max_length=32)
    demo_url: str | None = None
    github_url: str | None = None
    featured: bool | None = None
    order: int | None = None


class ProjectResponse(CamelModel):
    id: str
    title: str
    description: str
    content: str | None
    image: str | None
    technologies: list[str]
    gradient_from: str | None
    gradient_to: str | None
    demo_url: str | None
    github_url: str | None
    featured: bool
    order: int
    created_at: datetime
    updated_at: datetime


class ExperienceCreateRequest(CamelModel):
    period: str = Field(..., max_length=120)
    title: str = Field(..., max_length=200)
    company: str = Field(..., max_length=200)
    description: str
    gpa: str | None = Field(default=None, max_length=32)
    coursework: str | None = None
    color: str | None = Field(default=None, max_length=32)
    order: int = 0


class ExperienceUpdateRequest(PatchRequest):
    non_nullable = ("period", "title", "company", "description", "order")

    period: str | None = Field(default=None, max_length=120)
    title: str | None = Field(default=None, max_length=200)
    company: str | None = Field(default=None, max_length=200)
    description: str | None = None
    gpa: str | None = Field(default=None, max_length=32)
    coursework: str | None = None
    color: str | None = Field(default=None, max_length=32)
    order: int | None = None


class ExperienceResponse(CamelModel):
    id: str
    period: str
    title: str
    company: str
    description: str
    gpa: str | None
    coursework: str | None
    color: str | None
    order: int
    created_at: datetime
    updated_at: datetime


class BlogPostCreateRequest(CamelModel):
    title: str = Field(..., max_length=200)
    slug: str = Field(..., max_length=200)
    excerpt: str
    content: str
    image: str | None = None
    tags: list[str] = Field(default_factory=list)
    published: bool = False
    published_at: datetime | None = None
    order: int = 0


class BlogPostUpdateRequest(PatchRequest):
    non_nullable = ("title", "slug", "excerpt", "content", "tags", "published", "order")

    title: str | None = Field(default=None, max_length=200)
    slug: str | None = Field(default=None, max_length=200)
    excerpt: str | None = None
    content: str | None = None
    image: str | None = None
    tags: list[str] | None = None
    published: bool | None = None
    published_at: datetime | None = None
    order: int | None = None


class BlogPostResponse(CamelModel):
    id: str
    title: str
    slug: str
    excerpt: str
    content: str
    image: str | None
    tags: list[str]
    published: bool
    published_at: datetime | None
    order: int
    created_at: datetime
    updated_at: datetime


class ContactMessageRequest(CamelModel):
    name: str = Field(..., max_length=120)
    email: str = Field(..., max_length=255)
    phone: str | None = Field(default=None, max_length=40)
    subject: str = Field(..., max_length=200)
    message: str = Field(..., max_length=5000)


class ContactMessageCreatedResponse(CamelModel):
    success: bool = True
    id: str


class ContactMessageResponse(CamelModel):
    id: str
    name: str
    email: str
    phone: str | None
    subject: str
    message: str
    created_at: datetime


class SubscribeRequest(CamelModel):
    email: str = Field(..., max_length=255)
    name: str | None = Field(default=None, max_length=120)


class UnsubscribeRequest(CamelModel):
    email: str = Field(..., max_length=255)


class SubscriberResponse(CamelModel):
    id: str
    email: str
    name: str | None
    is_active: bool
    subscribed_at: datetime
    unsubscribed_at: datetime | None
