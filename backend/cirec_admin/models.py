"""SQLAlchemy models mapped onto the legacy CIREC schema.

Table and column names are the ones of the existing database; attribute names
are Pythonic. Character flag columns keep their stored encodings ('1'/'0' on
subscribers, 'Y'/'N' on statistical access add-ons); see ``services.flags``.
"""
from sqlalchemy import Boolean, Column, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.sql import func

from .database import Base


class Admin(Base):
    """Back-office account."""
    __tablename__ = "cr_admin"

    login = Column("admin_id", String(100), primary_key=True)
    password_hash = Column("admin_pass", String(255), nullable=False)


class Country(Base):
    __tablename__ = "cr_countries"

    id = Column("cu_id", Integer, primary_key=True, autoincrement=False)
    name = Column("cu_name", String(255), nullable=False)


# Subscribers and entitlement grants


class Subscriber(Base):
    """Registered site user."""
    __tablename__ = "cr_user"

    id = Column("us_id", Integer, primary_key=True, autoincrement=False)
    title = Column("us_title", String(20))
    first_name = Column("us_fname", String(100))
    last_name = Column("us_lname", String(100))
    company = Column("us_comp", String(255))
    department = Column("us_dept", String(255))
    address1 = Column("us_add1", String(255))
    address2 = Column("us_add2", String(255))
    country_id = Column("us_cu_id", Integer)
    phone = Column("us_phone", String(50))
    sector_interest = Column("us_sec_interest", String(255))
    email = Column("us_email", String(255))
    username = Column("us_username", String(100), nullable=False)
    password_hash = Column("us_pass", String(255), nullable=False)
    type = Column("us_type", String(1))
    status = Column("us_status", String(1), nullable=False, default="0")
    payment = Column("us_pay", Float)
    joined_at = Column("us_date", DateTime, server_default=func.now())
    paid = Column("us_paid", String(1), nullable=False, default="0")

    __table_args__ = (
        Index("ux_cr_user_username", "us_username", unique=True),
    )


class MonthlyNewsGrant(Base):
    __tablename__ = "cr_user_mnews"

    id = Column("um_id", Integer, primary_key=True, autoincrement=True)
    username = Column("um_us_username", String(100), nullable=False, index=True)
    start_date = Column("um_start_date", DateTime, nullable=False)
    end_date = Column("um_end_date", DateTime, nullable=False)


class ExtraCopiesGrant(Base):
    """Additional recipient of the monthly news; no expiry."""
    __tablename__ = "cr_user_mne"

    id = Column("umne_id", Integer, primary_key=True, autoincrement=True)
    username = Column("umne_us_username", String(100), nullable=False, index=True)
    email = Column("umne_email", String(255), nullable=False)
    copies = Column("umne_copies", Integer, nullable=False, default=1)


class SearchAccessGrant(Base):
    __tablename__ = "cr_user_sea"

    id = Column("usea_id", Integer, primary_key=True, autoincrement=True)
    username = Column("usea_us_username", String(100), nullable=False, index=True)
    start_date = Column("usea_start_date", DateTime, nullable=False)
    end_date = Column("usea_end_date", DateTime, nullable=False)


class StatsAccessGrant(Base):
    __tablename__ = "cr_user_sda"

    id = Column("usda_id", Integer, primary_key=True, autoincrement=True)
    username = Column("usda_us_username", String(100), nullable=False, index=True)
    start_date = Column("usda_start_date", DateTime, nullable=False)
    end_date = Column("usda_end_date", DateTime, nullable=False)
    central_european = Column("usda_central_european", String(1), nullable=False, default="N")
    polish_chemical = Column("usda_polish_chemical", String(1), nullable=False, default="N")


class SeatGrant(Base):
    __tablename__ = "cr_user_seat"

    id = Column("seat_id", Integer, primary_key=True, autoincrement=True)
    username = Column("seat_us_username", String(100), nullable=False, index=True)
    email = Column("seat_email", String(255))


GRANT_MODELS = (ExtraCopiesGrant, MonthlyNewsGrant, StatsAccessGrant, SearchAccessGrant, SeatGrant)


# Periodicals


class MonthlyNews(Base):
    """Monthly news PDF issue."""
    __tablename__ = "cr_news"

    id = Column("nw_id", Integer, primary_key=True, autoincrement=False)
    title = Column("nw_title", String(100), nullable=False)
    issue_no = Column("nw_issue_no", Integer, nullable=False)
    pdf_link = Column("nw_pdf_link", String(255), nullable=False)
    for_sample = Column("nw_for_sample", Boolean, nullable=False, default=False)
    month = Column("nw_month", Integer, nullable=False)
    year = Column("nw_year", Integer, nullable=False)
    created_at = Column("nw_datetime", DateTime, server_default=func.now())


class CisNews(Base):
    """CIS (Russian methanol) news PDF issue."""
    __tablename__ = "cr_news2"

    id = Column("nw_id", Integer, primary_key=True, autoincrement=False)
    title = Column("nw_title", String(100), nullable=False)
    issue_no = Column("nw_issue_no", Integer, nullable=False)
    pdf_link = Column("nw_pdf_link", String(255), nullable=False)
    for_sample = Column("nw_for_sample", Boolean, nullable=False, default=False)
    month = Column("nw_month", Integer, nullable=False)
    year = Column("nw_year", Integer, nullable=False)
    created_at = Column("nw_datetime", DateTime, server_default=func.now())


class WebIssue(Base):
    __tablename__ = "cr_issue"

    id = Column("iss_id", Integer, primary_key=True, autoincrement=False)
    title = Column("iss_title", String(255), nullable=False)
    issue_no = Column("iss_issue_no", Integer, nullable=False)
    content = Column("iss_content", Text, nullable=False, default="")
    month = Column("iss_month", Integer, nullable=False)
    year = Column("iss_year", Integer, nullable=False)
    created_at = Column("iss_datetime", DateTime, server_default=func.now())


class Article(Base):
    __tablename__ = "cr_articles"

    id = Column("ar_id", Integer, primary_key=True, autoincrement=False)
    title = Column("ar_title", String(500), nullable=False)
    content = Column("ar_content", Text, nullable=False, default="")
    issue_no = Column("ar_issueno", Integer, nullable=False)
    month = Column("ar_month", Integer, nullable=False)
    year = Column("ar_year", Integer, nullable=False)
    created_at = Column("ar_datetime", DateTime, server_default=func.now())
    scrolling = Column("ar_scrolling", Boolean, nullable=False, default=False)


# Site content


class Event(Base):
    __tablename__ = "cr_events"

    id = Column("ev_id", Integer, primary_key=True, autoincrement=False)
    title = Column("ev_title", String(255), nullable=False)
    link = Column("ev_link", String(500))
    venue = Column("ev_venue", String(255))
    display = Column("ev_display", Boolean, nullable=False, default=True)


class Link(Base):
    __tablename__ = "cr_links"

    id = Column("lk_id", Integer, primary_key=True, autoincrement=False)
    title = Column("lk_title", String(255), nullable=False)
    url = Column("lk_link", String(500), nullable=False)
    display = Column("lk_display", Boolean, nullable=False, default=True)


class Page(Base):
    __tablename__ = "cr_pages"

    id = Column("pg_id", Integer, primary_key=True, autoincrement=False)
    name = Column("pg_name", String(255), nullable=False)


class PageBlock(Base):
    __tablename__ = "cr_pagecontent"

    id = Column("pgc_id", Integer, primary_key=True, autoincrement=False)
    page_id = Column("pg_id", Integer, nullable=False, index=True)
    content = Column("pgc_content", Text)


class ContactSubmission(Base):
    __tablename__ = "cr_contactus"

    id = Column("cr_contact_id", Integer, primary_key=True, autoincrement=True)
    name = Column("cr_contact_name", String(255))
    email = Column("cr_contact_email", String(255))
    company = Column("cr_contact_company", String(255))
    phone = Column("cr_contact_phone", String(50))
    message = Column("cr_contact_message", Text)
    submitted_at = Column("cr_contact_date", DateTime, server_default=func.now())


class RegistrationOption(Base):
    __tablename__ = "cr_reg_option"

    id = Column("reg_op_id", Integer, primary_key=True, autoincrement=False)
    name = Column("reg_op_name", String(255), nullable=False)


class RegistrationPrice(Base):
    __tablename__ = "cr_reg_price"

    id = Column("reg_pid", Integer, primary_key=True, autoincrement=False)
    name = Column("reg_pname", String(255), nullable=False)
    price = Column("reg_pprice", Float, nullable=False, default=0)
    option_id = Column("reg_op_id", Integer, nullable=False, index=True)


class SearchKeyword(Base):
    __tablename__ = "cr_searchkeyword"

    id = Column("sk_id", Integer, primary_key=True, autoincrement=False)
    user_keyword = Column("sk_userkey", String(255), nullable=False)
    suggested_keyword = Column("sk_suggestedkey", String(255), nullable=False)
    display = Column("sk_display", Boolean, nullable=False, default=True)


# Report reference data and imported facts


class ReportProduct(Base):
    __tablename__ = "cr_rep_products"

    id = Column("pr_id", Integer, primary_key=True, autoincrement=False)
    name = Column("pr_name", String(255), nullable=False)
    group = Column("pr_group", String(100), nullable=False, default="z")
    display = Column("pr_display", Boolean, nullable=False, default=False)


class ReportCompany(Base):
    __tablename__ = "cr_rep_companies"

    id = Column("comp_id", Integer, primary_key=True, autoincrement=False)
    name = Column("comp_name", String(255), nullable=False)
    location = Column("comp_location", String(255))
    country_id = Column("comp_country_id", Integer, nullable=False, default=0)
    display = Column("comp_display", Boolean, nullable=False, default=False)


class ProductionPeriod(Base):
    __tablename__ = "cr_rep_period"

    id = Column("period_id", Integer, primary_key=True, autoincrement=False)
    year = Column("period_year", Integer, nullable=False)
    quarter = Column("period_quarter", String(2), nullable=False)
    product_id = Column("pro_id", Integer, nullable=False)
    company_id = Column("comp_id", Integer, nullable=False)
    amount = Column("period_amount", Float, nullable=False, default=0)


class Capacity(Base):
    __tablename__ = "cr_rep_capacity"

    id = Column("cap_id", Integer, primary_key=True, autoincrement=False)
    year = Column("cap_year", Integer, nullable=False)
    quarter = Column("cap_quarter", String(2), nullable=False)
    product_id = Column("cap_pr_id", Integer, nullable=False)
    company_id = Column("cap_comp_id", Integer, nullable=False)
    amount = Column("cap_amount", Float, nullable=False, default=0)


class CompanyDescription(Base):
    __tablename__ = "cr_rep_comp_desc"

    id = Column("compturn_id", Integer, primary_key=True, autoincrement=False)
    company_id = Column("comp_id", Integer, nullable=False)
    product_id = Column("pr_id", Integer, nullable=False)
    start_date = Column("start_date", String(100))
    technology = Column("comp_tech", String(255))
    feedstock = Column("comp_feed_stock", String(255))


class ExtendedCapacity(Base):
    __tablename__ = "cr_rep2_capacity"

    id = Column("cap_id", Integer, primary_key=True, autoincrement=False)
    year = Column("cap_year", Integer, nullable=False)
    quarter = Column("cap_quarter", String(2), nullable=False)
    product_id = Column("cap_pr_id", Integer, nullable=False)
    company_id = Column("cap_comp_id", Integer, nullable=False)
    amount = Column("cap_amount", Float, nullable=False, default=0)


class ExtendedCompanyDescription(Base):
    __tablename__ = "cr_rep2_comp_desc"

    id = Column("compturn_id", Integer, primary_key=True, autoincrement=False)
    company_id = Column("comp_id", Integer, nullable=False)
    product_id = Column("pr_id", Integer, nullable=False)
    start_date = Column("start_date", String(100))
    technology = Column("comp_tech", String(255))
    feedstock = Column("comp_feed_stock", String(255))


class ExtendedPeriod(Base):
    __tablename__ = "cr_rep2_period"

    id = Column("period_id", Integer, primary_key=True, autoincrement=False)
    year = Column("period_year", Integer, nullable=False)
    quarter = Column("period_quarter", String(2), nullable=False)
    product_id = Column("pro_id", Integer, nullable=False)
    company_id = Column("comp_id", Integer, nullable=False)
    amount = Column("period_amount", Float, nullable=False, default=0)


class GrossFinance(Base):
    __tablename__ = "cr_rep_gross_finance"

    id = Column("gf_id", Integer, primary_key=True, autoincrement=False)
    year = Column("gf_year", Integer, nullable=False)
    quarter = Column("gf_quarter", String(2), nullable=False)
    company_id = Column("gf_comp_id", Integer, nullable=False)
    amount = Column("gf_amount", Float, nullable=False, default=0)


class NetFinance(Base):
    __tablename__ = "cr_rep_net_finance"

    id = Column("nf_id", Integer, primary_key=True, autoincrement=False)
    year = Column("nf_year", Integer, nullable=False)
    quarter = Column("nf_quarter", String(2), nullable=False)
    company_id = Column("nf_comp_id", Integer, nullable=False)
    amount = Column("nf_amount", Float, nullable=False, default=0)


class TurnoverFinance(Base):
    __tablename__ = "cr_rep_turnover_finance"

    id = Column("tf_id", Integer, primary_key=True, autoincrement=False)
    year = Column("tf_year", Integer, nullable=False)
    quarter = Column("tf_quarter", String(2), nullable=False)
    company_id = Column("tf_comp_id", Integer, nullable=False)
    amount = Column("tf_amount", Float, nullable=False, default=0)


class PolishChemical(Base):
    __tablename__ = "cr_rep_polishchemical"

    id = Column("pc_id", Integer, primary_key=True, autoincrement=False)
    year = Column("pc_year", Integer, nullable=False)
    quarter = Column("pc_quarter", String(2), nullable=False)
    product_id = Column("pro_id", Integer, nullable=False)
    amount = Column("pc_amount", Float, nullable=False, default=0)
