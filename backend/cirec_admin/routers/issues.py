"""Web issue endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..config import Settings, get_settings
from ..database import get_db
from ..envelope import ok
from ..schemas import WebIssueCreate, WebIssueOut, WebIssueUpdate
from ..use_cases.publishing import (
    create_web_issue_use_case,
    get_web_issue_use_case,
    issue_initial_data,
    update_web_issue_use_case,
)

router = APIRouter(prefix="/issues", tags=["issues"], dependencies=[Depends(get_current_admin)])


@router.get("/initial-data")
def get_initial_data(settings: Settings = Depends(get_settings)):
    """Year and month choices for the issue editor."""
    return ok(issue_initial_data(settings))


@router.get("/{year}/{month}")
def get_issue(year: int, month: int, db: Session = Depends(get_db)):
    return ok(get_web_issue_use_case(db=db, year=year, month=month))


@router.post("", status_code=201)
def create_issue(
    payload: WebIssueCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    issue = create_web_issue_use_case(
        db=db,
        settings=settings,
        month=payload.month,
        year=payload.year,
        content=payload.content,
    )
    return ok(WebIssueOut.model_validate(issue), message="Issue created successfully")


@router.put("/{year}/{month}")
def update_issue(year: int, month: int, payload: WebIssueUpdate, db: Session = Depends(get_db)):
    issue = update_web_issue_use_case(db=db, year=year, month=month, content=payload.content)
    return ok(WebIssueOut.model_validate(issue), message="Issue updated successfully")
