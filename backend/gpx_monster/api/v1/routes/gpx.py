"""
GPX Processing Routes

Endpoint for merging or normalizing uploaded GPX files.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, UploadFile, File, Form, HTTPException

from gpx_monster.config import settings
from gpx_monster.features.gpx import (
    BatchResponse,
    GPXBatchProcessor,
    NoPointsError,
    ProcessingMode,
    UploadSource,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _validate_uploads(files: List[UploadFile]) -> None:
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded")

    if len(files) > settings.max_files:
        raise HTTPException(
            status_code=400,
            detail=f"Too many files (max {settings.max_files})"
        )

    for file in files:
        if not file.filename or not file.filename.lower().endswith('.gpx'):
            raise HTTPException(
                status_code=400,
                detail=f"Only .gpx files are allowed: {file.filename}"
            )
        if file.size is not None and file.size > settings.max_upload_bytes:
            raise HTTPException(
                status_code=400,
                detail=f"File too large: {file.filename}"
            )


@router.post("/process", response_model=BatchResponse)
async def process_gpx(
    files: List[UploadFile] = File(...),
    mode: ProcessingMode = Form(ProcessingMode.MERGE),
    specific_files: Optional[str] = Form(None),
):
    """
    Merge or normalize uploaded GPX files.

    Files are processed in upload order. Per-file failures are reported
    in `results`; merge mode fails with 422 only when no file yields a
    single trackpoint.
    """
    _validate_uploads(files)

    patterns = [p.strip() for p in specific_files.split(',') if p.strip()] if specific_files else []
    processor = GPXBatchProcessor()

    try:
        result = await processor.process_files(
            [UploadSource(f) for f in files],
            mode,
            specific_files=patterns,
        )
    except NoPointsError as e:
        raise HTTPException(status_code=422, detail=str(e))

    logger.info(
        f"Processed {len(result.results)} files ({mode.value}): "
        f"{len(result.failed)} failed, {len(result.outputs)} outputs"
    )
    return BatchResponse.from_result(mode.value, result)
