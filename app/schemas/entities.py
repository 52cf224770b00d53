"""Typed schemas for Staff Hub entities.

Rows travel through the repositories as plain dicts; these models describe
their shape for request validation and API responses. Record models allow
extra columns so schema additions on the hosted database pass through.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field

RowId = Union[str, int]


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class LeadStatus(str, Enum):
    ASSIGNED = "assigned"
    CONTACTED = "contacted"
    REPLIED = "replied"
    BOOKED = "booked"
    NO_ANSWER = "no_answer"
    NOT_INTERESTED = "not_interested"
    CLOSED = "closed"


class LeadRequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class AnnouncementType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    URGENT = "urgent"


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Industry(str, Enum):
    RETAIL = "retail"
    HOSPITALITY = "hospitality"
    HEALTHCARE = "healthcare"
    FINANCE = "finance"
    CONSTRUCTION = "construction"
    PROFESSIONAL_SERVICES = "professional_services"
    MANUFACTURING = "manufacturing"
    OTHER = "other"


class Region(str, Enum):
    SCOTLAND = "scotland"
    NORTH_ENGLAND = "north_england"
    MIDLANDS = "midlands"
    SOUTH_ENGLAND = "south_england"
    WALES = "wales"
    NORTHERN_IRELAND = "northern_ireland"


class ResourceCategory(str, Enum):
    COLD_CALL_SCRIPTS = "cold_call_scripts"
    EMAIL_TEMPLATES = "email_templates"
    SMS_TEMPLATES = "sms_templates"
    OBJECTION_HANDLING = "objection_handling"
    AGREEMENTS = "agreements"
    TRAINING = "training"
    OTHER = "other"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class Record(BaseModel):
    """Common shape of a stored row."""

    model_config = ConfigDict(extra="allow", use_enum_values=True)

    id: RowId = Field(..., description="Store-assigned primary key")
    created_date: Optional[datetime] = Field(None, description="Store-assigned creation time")


class UserProfile(Record):
    email: str
    full_name: Optional[str] = None
    role: str = UserRole.USER.value
    commission_rate: Optional[float] = None
    rep_code: Optional[str] = None
    phone: Optional[str] = None


class Lead(Record):
    company_name: Optional[str] = None
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    industry: Optional[str] = None
    region: Optional[str] = None
    status: str = LeadStatus.ASSIGNED.value
    assigned_to: Optional[str] = None
    estimated_value: Optional[float] = None
    notes: Optional[str] = None
    last_contacted: Optional[date] = None
    tags: Optional[List[str]] = None


class LeadRequest(Record):
    industry: Optional[str] = None
    region: Optional[str] = None
    quantity: Optional[int] = None
    notes: Optional[str] = None
    status: str = LeadRequestStatus.PENDING.value
    requested_by: Optional[str] = None
    admin_notes: Optional[str] = None


class Sale(Record):
    client_name: Optional[str] = None
    rep_email: Optional[str] = None
    sale_amount: Optional[float] = None
    commission_amount: Optional[float] = None
    commission_paid: bool = False
    payment_status: str = PaymentStatus.PENDING.value
    sale_date: Optional[date] = None


class Resource(Record):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    content: Optional[str] = None
    file_url: Optional[str] = None
    video_url: Optional[str] = None
    tags: Optional[List[str]] = None
    is_active: bool = True


class Announcement(Record):
    title: Optional[str] = None
    message: Optional[str] = None
    type: str = AnnouncementType.INFO.value
    is_active: bool = True
    expires_at: Optional[datetime] = None


class SupportTicket(Record):
    subject: Optional[str] = None
    message: Optional[str] = None
    priority: str = TicketPriority.MEDIUM.value
    status: str = TicketStatus.OPEN.value
    submitted_by: Optional[str] = None
    admin_response: Optional[str] = None
    resolved_at: Optional[datetime] = None


class NavigationItem(BaseModel):
    """One entry of the sidebar navigation."""

    model_config = ConfigDict(extra="allow")

    title: str
    page: str
    icon: Optional[str] = None
    is_active: Optional[bool] = None
    order: Optional[int] = None


class ExternalTool(BaseModel):
    """Link to an external tool shown in the sidebar."""

    model_config = ConfigDict(extra="allow")

    title: str
    url: str
    description: Optional[str] = None
    icon: Optional[str] = None
    is_active: Optional[bool] = None


class AppConfiguration(Record):
    app_name: Optional[str] = None
    app_tagline: Optional[str] = None
    logo_url: Optional[str] = None
    favicon_url: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    company_phone: Optional[str] = None
    company_email: Optional[str] = None
    custom_css: Optional[str] = None
    navigation_items: Optional[List[NavigationItem]] = None
    external_tools: Optional[List[ExternalTool]] = None


# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class Payload(BaseModel):
    model_config = ConfigDict(use_enum_values=True)


class LeadCreate(Payload):
    company_name: str = Field(..., min_length=1)
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    industry: Optional[Industry] = None
    region: Optional[Region] = None
    assigned_to: Optional[str] = None
    estimated_value: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
    tags: Optional[List[str]] = None


class LeadUpdate(Payload):
    status: Optional[LeadStatus] = None
    notes: Optional[str] = None


class LeadRequestCreate(Payload):
    industry: Industry
    region: Region
    quantity: int = Field(default=10, ge=1, le=100)
    notes: Optional[str] = None


class ResourceCreate(Payload):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: ResourceCategory
    content: Optional[str] = None
    file_url: Optional[str] = None
    video_url: Optional[str] = None
    tags: Union[str, List[str], None] = Field(None, description="List of tags or a comma separated string")


class AnnouncementCreate(Payload):
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    type: AnnouncementType = AnnouncementType.INFO
    is_active: bool = True
    expires_at: Optional[datetime] = None


class AnnouncementUpdate(Payload):
    title: Optional[str] = None
    message: Optional[str] = None
    type: Optional[AnnouncementType] = None
    is_active: Optional[bool] = None
    expires_at: Optional[datetime] = None


class SupportTicketCreate(Payload):
    subject: str
    message: str
    priority: TicketPriority = TicketPriority.MEDIUM


class TicketStatusUpdate(Payload):
    status: TicketStatus


class TicketResponse(Payload):
    response: str


class UserUpdate(Payload):
    full_name: Optional[str] = None
    role: Optional[UserRole] = None
    commission_rate: Optional[float] = Field(None, ge=0, le=1)
    rep_code: Optional[str] = None
    phone: Optional[str] = None


class UserInvite(Payload):
    email: EmailStr


class AppConfigurationUpdate(Payload):
    app_name: Optional[str] = None
    app_tagline: Optional[str] = None
    logo_url: Optional[str] = None
    favicon_url: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    company_phone: Optional[str] = None
    company_email: Optional[str] = None
    custom_css: Optional[str] = None
    navigation_items: Optional[List[NavigationItem]] = None
    external_tools: Optional[List[ExternalTool]] = None
