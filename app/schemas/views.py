"""Response schemas for the composed views (dashboard, admin, shell...)."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    leads_contacted: int = 0
    bookings_made: int = 0
    commission_earned: float = 0.0
    commission_pending: float = 0.0
    performance_score: int = 0


class ActivityItem(BaseModel):
    """One line of the recent-activity feed."""

    type: str = Field(..., description="'lead' or 'sale'")
    title: str
    subtitle: Optional[str] = None
    date: Optional[str] = None
    status: Optional[str] = None
    amount: Optional[float] = None


class DashboardView(BaseModel):
    user: Dict[str, Any]
    stats: DashboardStats
    recent_activity: List[ActivityItem] = Field(default_factory=list)
    announcements: List[Dict[str, Any]] = Field(default_factory=list)


class LeadsView(BaseModel):
    leads: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    requests: List[Dict[str, Any]] = Field(default_factory=list)


class ResourcesView(BaseModel):
    resources: List[Dict[str, Any]] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)


class CommissionStats(BaseModel):
    total_earned: float = 0.0
    pending_payout: float = 0.0
    paid_out: float = 0.0
    total_sales: int = 0


class CommissionsView(BaseModel):
    stats: CommissionStats
    sales: List[Dict[str, Any]] = Field(default_factory=list)


class AdminOverview(BaseModel):
    total_users: int = 0
    total_leads: int = 0
    pending_requests: int = 0
    open_tickets: int = 0
    total_sales: int = 0
    unpaid_commissions: float = 0.0


class RepPerformance(BaseModel):
    email: str
    full_name: Optional[str] = None
    total_commission: float = 0.0
    total_sales: int = 0
    total_leads: int = 0


class AdminStats(BaseModel):
    total_revenue: float = 0.0
    recent_sales: int = 0
    recent_leads: int = 0
    conversion_rate: float = 0.0
    top_performers: List[RepPerformance] = Field(default_factory=list)
    total_commission_owed: float = 0.0


class AdminCommissionsView(BaseModel):
    sales: List[Dict[str, Any]] = Field(default_factory=list)
    unpaid_total: float = 0.0


class ShellNavigationItem(BaseModel):
    title: str
    page: str
    url: str
    icon: Optional[str] = None


class ShellView(BaseModel):
    """Branding and navigation for the application shell."""

    app_name: str
    app_tagline: str
    logo_url: Optional[str] = None
    favicon_url: Optional[str] = None
    primary_color: str
    secondary_color: str
    company_phone: str
    company_email: Optional[str] = None
    custom_css: Optional[str] = None
    navigation_items: List[ShellNavigationItem] = Field(default_factory=list)
    external_tools: List[Dict[str, Any]] = Field(default_factory=list)


class PageResolution(BaseModel):
    path: str
    page: str
    url: str


class CsvExport(BaseModel):
    filename: str
    content: str
