"""FastAPI application."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .config import DEV_JWT_SECRET, get_settings
from .envelope import install_exception_handlers
from .routers import (
    articles,
    auth,
    companies,
    contacts,
    cost,
    events,
    excel_import,
    issues,
    links,
    pages,
    periodicals,
    products,
    search_keywords,
    users,
)

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Production safety checks (fail closed on insecure config).
if settings.ENV.lower() == "production" and settings.JWT_SECRET_KEY == DEV_JWT_SECRET:
    raise RuntimeError("JWT_SECRET_KEY must be set in production.")
if settings.ENV.lower() == "production" and any(origin == "*" for origin in settings.cors_origins):
    raise RuntimeError("ALLOWED_ORIGINS must be explicit in production (no wildcard).")

# Create app
app = FastAPI(
    title="CIREC Admin API",
    version="1.0.0",
    description="Back-office API for CIREC publications, subscribers and report data",
)

install_exception_handlers(app)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

# Include routers
API_PREFIX = "/api/admin"
app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(users.router, prefix=API_PREFIX)
app.include_router(periodicals.monthly_news_router, prefix=API_PREFIX)
app.include_router(periodicals.cis_news_router, prefix=API_PREFIX)
app.include_router(issues.router, prefix=API_PREFIX)
app.include_router(articles.router, prefix=API_PREFIX)
app.include_router(events.router, prefix=API_PREFIX)
app.include_router(links.router, prefix=API_PREFIX)
app.include_router(pages.router, prefix=API_PREFIX)
app.include_router(products.router, prefix=API_PREFIX)
app.include_router(companies.router, prefix=API_PREFIX)
app.include_router(contacts.router, prefix=API_PREFIX)
app.include_router(cost.router, prefix=API_PREFIX)
app.include_router(search_keywords.router, prefix=API_PREFIX)
app.include_router(excel_import.router, prefix=API_PREFIX)


@app.get("/api/system/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": "1.0.0"}
