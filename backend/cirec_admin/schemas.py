"""Pydantic schemas for API.

Payloads and responses use camelCase keys on the wire; field names stay
snake_case in Python.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Auth schemas
class LoginRequest(ApiModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ChangePasswordRequest(ApiModel):
    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=1)


# Subscribers
class SubscriberBase(ApiModel):
    title: Optional[str] = None
    first_name: str = Field(min_length=1)
    last_name: str = ""
    company: Optional[str] = None
    department: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    country_id: Optional[int] = None
    phone: Optional[str] = None
    sector_interest: Optional[str] = None
    email: Optional[str] = None
    username: str = Field(min_length=1, max_length=100)
    type: Optional[str] = Field(default="N", pattern=r"^[NCSncs]?$")
    status: bool = False
    payment_amount: float = 0
    paid: bool = False


class SubscriberCreate(SubscriberBase):
    password: str = Field(min_length=1)


class SubscriberUpdate(SubscriberBase):
    password: Optional[str] = None


class SubscriberOut(ApiModel):
    id: int
    title: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    department: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    country_id: Optional[int] = None
    phone: Optional[str] = None
    sector_interest: Optional[str] = None
    email: Optional[str] = None
    username: str
    type: Optional[str] = None
    status: bool
    payment_amount: float
    date: Optional[datetime] = None
    full_name: str
    paid: bool
    is_new: bool


class StatusUpdate(ApiModel):
    status: bool


class PaymentUpdate(ApiModel):
    paid: bool
    payment_amount: Optional[float] = None


# Entitlements
class AccessWindow(ApiModel):
    has_access: bool
    end_date: Optional[datetime] = None


class AdditionalCopiesAccess(ApiModel):
    has_access: bool
    copies: int = 0
    emails: list[str] = Field(default_factory=list)


class OtherReportsAccess(ApiModel):
    central_european_olefins: bool
    polish_chemical_production: bool


class AccessDetails(ApiModel):
    monthly_news: AccessWindow
    additional_copies: AdditionalCopiesAccess
    search_engine_access: AccessWindow
    statistical_database_access: AccessWindow
    other_reports: OtherReportsAccess


class AccessSummary(ApiModel):
    user_id: int
    username: str
    user_type: str
    access: AccessDetails


class AccessUpdateRequest(ApiModel):
    mnews_access: bool = False
    mnews_duration: int = Field(default=1, ge=1, le=50)
    additional_copies_access: bool = False
    additional_copies_count: Optional[int] = Field(default=None, ge=1)
    additional_copies_emails: list[str] = Field(default_factory=list)
    sea_access: bool = False
    sea_duration: Optional[int] = None
    sda_access: bool = False
    sda_duration: int = Field(default=1, ge=1, le=50)
    other_reports_access: bool = False
    central_european_report: bool = False
    polish_chemical_report: bool = False
    remove_mnews: bool = False
    remove_additional_copies: bool = False
    remove_sea: bool = False
    remove_sda: bool = False
    remove_other_reports: bool = False

    @field_validator("additional_copies_emails")
    @classmethod
    def _drop_blank_emails(cls, value: list[str]) -> list[str]:
        return [email.strip() for email in value if email and email.strip()]


# Periodicals
class PeriodicalOut(ApiModel):
    id: int
    title: str
    issue_no: int
    pdf_link: str
    for_sample: bool
    month: int
    year: int
    created_at: Optional[datetime] = None


class WebIssueOut(ApiModel):
    id: Optional[int] = None
    title: str = ""
    issue_no: Optional[int] = None
    content: str = ""
    month: int
    year: int


class WebIssueCreate(ApiModel):
    month: int = Field(ge=1, le=12)
    year: int
    content: str = ""


class WebIssueUpdate(ApiModel):
    content: str = ""


class IssueInitialData(ApiModel):
    years: list[int]
    months: list[str]
    current_year: int
    current_month: int


class ArticleCreate(ApiModel):
    content: str = Field(min_length=1)
    date: str = Field(pattern=r"^\d{1,2}/\d{1,2}/\d{4}$")


class ArticleUpdate(ApiModel):
    title: str = Field(min_length=1)
    content: str = ""


class ArticleOut(ApiModel):
    id: int
    title: str
    content: str
    issue_no: int
    month: int
    year: int
    created_at: Optional[datetime] = None
    scrolling: bool


class ArticleListPage(ApiModel):
    articles: list[ArticleOut]
    total: int
    page: int
    limit: int
    total_pages: int


class BulkDeleteRequest(ApiModel):
    ids: list[int] = Field(min_length=1)


class FlagUpdate(ApiModel):
    value: bool


# Events and links
class EventIn(ApiModel):
    title: str = Field(min_length=1)
    link: Optional[str] = None
    venue: Optional[str] = None
    display: bool = True


class EventOut(EventIn):
    id: int


class LinkIn(ApiModel):
    title: str = Field(min_length=1)
    url: str = Field(min_length=1)
    display: bool = True


class LinkOut(LinkIn):
    id: int


# Page content
class PageOut(ApiModel):
    id: int
    name: str


class PageBlockOut(ApiModel):
    id: int
    page_id: int
    content: Optional[str] = None


class PageBlockUpdate(ApiModel):
    id: int
    content: str = ""


class PageBlocksUpdate(ApiModel):
    blocks: list[PageBlockUpdate] = Field(min_length=1)


# Reference data
class ProductOut(ApiModel):
    id: int
    name: str
    group: Optional[str] = None
    display: bool


class ProductCreate(ApiModel):
    name: str = Field(min_length=1)


class CompanyOut(ApiModel):
    id: int
    name: str
    location: Optional[str] = None
    country_id: Optional[int] = None
    display: bool


class CompanyCreate(ApiModel):
    name: str = Field(min_length=1)
    location: Optional[str] = None
    country_id: int = 0


class CountryOut(ApiModel):
    id: int
    name: str


class ContactOut(ApiModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    submitted_at: Optional[datetime] = None


class ContactPage(ApiModel):
    contacts: list[ContactOut]
    total: int
    page: int
    limit: int
    total_pages: int


class RegistrationOptionOut(ApiModel):
    id: int
    name: str


class RegistrationPriceOut(ApiModel):
    id: int
    name: str
    price: float
    option_id: int


class PriceUpdate(ApiModel):
    price: float = Field(ge=0)


class SearchKeywordIn(ApiModel):
    user_keyword: str = Field(min_length=1)
    suggested_keyword: str = Field(min_length=1)
    enabled: bool = True


class SearchKeywordUpdate(ApiModel):
    suggested_keyword: str = Field(min_length=1)
    enabled: bool = True


class SearchKeywordOut(ApiModel):
    id: int
    user_keyword: str
    suggested_keyword: str
    enabled: bool


# Import
class ImportResult(ApiModel):
    success: bool = True
    rows_imported: int
    message: str
