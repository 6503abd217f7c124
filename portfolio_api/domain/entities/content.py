from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .patch import UNSET, _Unset


@dataclass(frozen=True)
class Skill:
    id: str
    name: str
    level: int
    icon: str
    color: str
    is_additional: bool
    order: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class SkillDraft:
    name: str
    level: int
    icon: str
    color: str
    is_additional: bool = False
    order: int = 0


@dataclass(frozen=True)
class SkillPatch:
    name: str | _Unset = UNSET
    level: int | _Unset = UNSET
    icon: str | _Unset = UNSET
    color: str | _Unset = UNSET
    is_additional: bool | _Unset = UNSET
    order: int | _Unset = UNSET


@dataclass(frozen=True)
class Service:
    id: str
    title: str
    description: str
    icon: str
    price: str | None
    features: tuple[str, ...]
    order: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ServiceDraft:
    title: str
    description: str
    icon: str
    price: str | None = None
    features: tuple[str, ...] = field(default_factory=tuple)
    order: int = 0


@dataclass(frozen=True)
class ServicePatch:
    title: str | _Unset = UNSET
    description: str | _Unset = UNSET
    icon: str | _Unset = UNSET
    price: str | None | _Unset = UNSET
    features: tuple[str, ...] | _Unset = UNSET
    order: int | _Unset = UNSET


@dataclass(frozen=True)
class Project:
    id: str
    title: str
    description: str
    content: str | None
    image: str | None
    technologies: tuple[str, ...]
    gradient_from: str | None
    gradient_to: str | None
    demo_url: str | None
    github_url: str | None
    featured: bool
    order: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ProjectDraft:
    title: str
    description: str
    content: str | None = None
    image: str | None = None
    technologies: tuple[str, ...] = field(default_factory=tuple)
    gradient_from: str | None = None
    gradient_to: str | None = None
    demo_url: str | None = None
    github_url: str | None = None
    featured: bool = False
    order: int = 0


@dataclass(frozen=True)
class ProjectPatch:
    title: str | _Unset = UNSET
    description: str | _Unset = UNSET
    content: str | None | _Unset = UNSET
    image: str | None | _Unset = UNSET
    technologies: tuple[str, ...] | _Unset = UNSET
    gradient_from: str | None | _Unset = UNSET
    gradient_to: str | None | _Unset = UNSET
    demo_url: str | None | _Unset = UNSET
    github_url: str | None | _Unset = UNSET
    featured: bool | _Unset = UNSET
    order: int | _Unset = UNSET


@dataclass(frozen=True)
class Experience:
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


@dataclass(frozen=True)
class ExperienceDraft:
    period: str
    title: str
    company: str
    description: str
    gpa: str | None = None
    coursework: str | None = None
    color: str | None = None
    order: int = 0


@dataclass(frozen=True)
class ExperiencePatch:
    period: str | _Unset = UNSET
    title: str | _Unset = UNSET
    company: str | _Unset = UNSET
    description: str | _Unset = UNSET
    gpa: str | None | _Unset = UNSET
    coursework: str | None | _Unset = UNSET
    color: str | None | _Unset = UNSET
    order: int | _Unset = UNSET


@dataclass(frozen=True)
class BlogPost:
    id: str
    title: str
    slug: str
    excerpt: str
    content: str
    image: str | None
    tags: tuple[str, ...]
    published: bool
    published_at: datetime | None
    order: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class BlogPostDraft:
    title: str
    slug: str
    excerpt: str
    content: str
    image: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    published: bool = False
    published_at: datetime | None = None
    order: int = 0


@dataclass(frozen=True)
class BlogPostPatch:
    title: str | _Unset = UNSET
    slug: str | _Unset = UNSET
    excerpt: str | _Unset = UNSET
    content: str | _Unset = UNSET
    image: str | None | _Unset = UNSET
    tags: tuple[str, ...] | _Unset = UNSET
    published: bool | _Unset = UNSET
    published_at: datetime | None | _Unset = UNSET
    order: int | _Unset = UNSET


@dataclass(frozen=True)
class ContactMessage:
    id: str
    name: str
    email: str
    phone: str | None
    subject: str
    message: str
    created_at: datetime


@dataclass(frozen=True)
class ContactMessageDraft:
    name: str
    email: str
    subject: str
    message: str
    phone: str | None = None


@dataclass(frozen=True)
class NewsletterSubscriber:
    id: str
    email: str
    name: str | None
    is_active: bool
    subscribed_at: datetime
    unsubscribed_at: datetime | None
