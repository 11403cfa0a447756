"""Report spreadsheet import endpoint."""
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..config import Settings, get_settings
from ..database import get_db
from ..use_cases.spreadsheet_import import import_workbook_use_case

router = APIRouter(prefix="/excel-import", tags=["excel-import"], dependencies=[Depends(get_current_admin)])
logger = logging.getLogger(__name__)

_ALLOWED_EXTENSIONS = ("xlsx", "xlsm")


def _read_upload(file: UploadFile, max_size: int) -> bytes:
    if not file.filename or "." not in file.filename:
        raise HTTPException(status_code=400, detail="File extension is required")
    ext = file.filename.rsplit(".", 1)[-1].lower()
    if ext not in _ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"File type not allowed. Allowed: {', '.join(_ALLOWED_EXTENSIONS)}",
        )
    content = file.file.read(max_size + 1)
    if len(content) > max_size:
        raise HTTPException(status_code=400, detail=f"File too large. Max size: {max_size} bytes")
    return content


@router.post("")
def import_spreadsheet(
    file: UploadFile = File(...),
    import_type: str = Form(..., alias="importType"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Replace one report table with the contents of an uploaded workbook."""
    content = _read_upload(file, settings.MAX_IMPORT_UPLOAD_SIZE)
    result = import_workbook_use_case(db=db, import_type=import_type, content=content)
    logger.info("Imported %s rows for import type %s", result.rows_imported, import_type)
    return result
