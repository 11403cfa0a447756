"""PDF periodical endpoints (monthly news and CIS news)."""
from __future__ import annotations

from collections.abc import Callable
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..config import Settings, get_settings
from ..database import get_db
from ..envelope import ok
from ..schemas import FlagUpdate, PeriodicalOut
from ..use_cases.publishing import (
    PdfSeries,
    cis_news_series,
    create_periodical_use_case,
    delete_periodical_use_case,
    get_periodical_use_case,
    list_periodicals_use_case,
    monthly_news_series,
    set_periodical_sample_use_case,
    update_periodical_use_case,
)


def build_periodical_router(*, prefix: str, tag: str, series_factory: Callable[[Settings], PdfSeries]) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag], dependencies=[Depends(get_current_admin)])

    def get_series(settings: Settings = Depends(get_settings)) -> PdfSeries:
        return series_factory(settings)

    @router.get("")
    def list_issues(series: PdfSeries = Depends(get_series), db: Session = Depends(get_db)):
        items = list_periodicals_use_case(db=db, series=series)
        return ok([PeriodicalOut.model_validate(item) for item in items])

    @router.get("/{item_id}")
    def get_issue(item_id: int, series: PdfSeries = Depends(get_series), db: Session = Depends(get_db)):
        item = get_periodical_use_case(db=db, series=series, item_id=item_id)
        return ok(PeriodicalOut.model_validate(item))

    @router.post("", status_code=201)
    def create_issue(
        month: int = Form(...),
        year: int = Form(...),
        for_sample: bool = Form(False, alias="forSample"),
        pdf_file: UploadFile = File(..., alias="pdfFile"),
        series: PdfSeries = Depends(get_series),
        db: Session = Depends(get_db),
    ):
        """Upload a new issue; a second issue for the same month is rejected."""
        item = create_periodical_use_case(
            db=db,
            series=series,
            month=month,
            year=year,
            for_sample=for_sample,
            upload=pdf_file.file,
            upload_filename=pdf_file.filename,
        )
        return ok(PeriodicalOut.model_validate(item), message="Issue uploaded successfully")

    @router.put("/{item_id}")
    def update_issue(
        item_id: int,
        month: int = Form(...),
        year: int = Form(...),
        for_sample: bool = Form(False, alias="forSample"),
        pdf_file: Optional[UploadFile] = File(None, alias="pdfFile"),
        series: PdfSeries = Depends(get_series),
        db: Session = Depends(get_db),
    ):
        item = update_periodical_use_case(
            db=db,
            series=series,
            item_id=item_id,
            month=month,
            year=year,
            for_sample=for_sample,
            upload=pdf_file.file if pdf_file is not None else None,
            upload_filename=pdf_file.filename if pdf_file is not None else None,
        )
        return ok(PeriodicalOut.model_validate(item), message="Issue updated successfully")

    @router.patch("/{item_id}/sample")
    def update_sample(
        item_id: int,
        payload: FlagUpdate,
        series: PdfSeries = Depends(get_series),
        db: Session = Depends(get_db),
    ):
        item = set_periodical_sample_use_case(db=db, series=series, item_id=item_id, for_sample=payload.value)
        return ok(PeriodicalOut.model_validate(item), message="Sample status updated successfully")

    @router.delete("/{item_id}")
    def delete_issue(item_id: int, series: PdfSeries = Depends(get_series), db: Session = Depends(get_db)):
        delete_periodical_use_case(db=db, series=series, item_id=item_id)
        return ok(message="Issue deleted successfully")

    return router


monthly_news_router = build_periodical_router(
    prefix="/monthly-news",
    tag="monthly-news",
    series_factory=monthly_news_series,
)
cis_news_router = build_periodical_router(
    prefix="/cis-news",
    tag="cis-news",
    series_factory=cis_news_series,
)
