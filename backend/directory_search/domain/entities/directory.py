"""Domain entities: directory records returned by collection searches."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class Organization:
    """A published company in the directory."""

    id: str
    name: str
    description: str | None = None
    industry: str | None = None
    address_region: str | None = None
    employee_count: int | None = None
    established_at: date | None = None
    url: str | None = None
    awards: list[str] | None = None
    certifications: list[str] | None = None
    updated_at: datetime | None = None


@dataclass
class Service:
    """A service offered by an organization."""

    id: str
    name: str
    organization_id: str
    description: str | None = None
    category: str | None = None
    price_min: int | None = None
    price_max: int | None = None
    updated_at: datetime | None = None
    organization: Organization | None = None


@dataclass
class CaseStudy:
    """A customer case study published by an organization."""

    id: str
    title: str
    organization_id: str
    summary: str | None = None
    industry: str | None = None
    updated_at: datetime | None = None
    organization: Organization | None = None
