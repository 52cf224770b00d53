"""SQLAlchemy models for the Staff Hub tables.

The hosted database owns this schema; these models mirror it so the SQL row
store can address the same tables directly and so a local database can be
created for development and tests. Types are kept portable (string UUIDs,
generic JSON) so the same metadata works on Postgres and SQLite.
"""

import uuid
from datetime import date, datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database.base import Base


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Store-assigned identity and creation timestamp shared by every table."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )


class User(TimestampMixin, Base):
    """Profile row for a team member, keyed logically by email."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    full_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    role: Mapped[str] = mapped_column(String, nullable=False, default="user")  # admin | user
    commission_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    rep_code: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    updated_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )


class Lead(TimestampMixin, Base):
    """Sales lead assigned to a rep by email."""

    __tablename__ = "leads"

    company_name: Mapped[str] = mapped_column(String, nullable=False)
    contact_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    industry: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    region: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default="assigned"
    )  # assigned | contacted | replied | booked | no_answer | not_interested | closed
    assigned_to: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    estimated_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_contacted: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    tags: Mapped[Optional[list[Any]]] = mapped_column(JSON, nullable=True)
    updated_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )


class LeadRequest(TimestampMixin, Base):
    """A rep's request for a batch of leads."""

    __tablename__ = "lead_requests"

    industry: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    region: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default="pending"
    )  # pending | approved | fulfilled | rejected
    requested_by: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    admin_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    updated_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )


class Sale(TimestampMixin, Base):
    """Closed sale and the commission owed to the rep."""

    __tablename__ = "sales"

    client_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    rep_email: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    sale_amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    commission_amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    commission_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    payment_status: Mapped[str] = mapped_column(
        String, nullable=False, default="pending"
    )  # pending | paid | overdue
    sale_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)


class Resource(TimestampMixin, Base):
    """Internal script, template or training material."""

    __tablename__ = "resources"

    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    file_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    video_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    tags: Mapped[Optional[list[Any]]] = mapped_column(JSON, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Announcement(TimestampMixin, Base):
    """Team-wide announcement shown on the dashboard."""

    __tablename__ = "announcements"

    title: Mapped[str] = mapped_column(String, nullable=False)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String, nullable=False, default="info")  # info | success | warning | urgent
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class SupportTicket(TimestampMixin, Base):
    """Support ticket raised by a rep."""

    __tablename__ = "support_tickets"

    subject: Mapped[str] = mapped_column(String, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[str] = mapped_column(String, nullable=False, default="medium")  # low | medium | high | urgent
    status: Mapped[str] = mapped_column(
        String, nullable=False, default="open"
    )  # open | in_progress | resolved | closed
    submitted_by: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    admin_response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    resolved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class AppConfiguration(TimestampMixin, Base):
    """Branding and navigation configuration (one meaningful row)."""

    __tablename__ = "app_configurations"

    app_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    app_tagline: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    logo_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    favicon_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    primary_color: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    secondary_color: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    company_phone: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    company_email: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    custom_css: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    navigation_items: Mapped[Optional[list[Any]]] = mapped_column(JSON, nullable=True)
    external_tools: Mapped[Optional[list[Any]]] = mapped_column(JSON, nullable=True)
    updated_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )
