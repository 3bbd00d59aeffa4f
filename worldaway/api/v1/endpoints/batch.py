from fastapi import APIRouter, HTTPException, UploadFile, File, Depends
from fastapi.responses import Response
from worldaway.schemas import (
    IngestedRow, SkippedRow, BatchRecordsRequest, BatchPredictionResult,
    BatchSummary, BatchProcessingResponse
)
from worldaway.services import BatchService, CSVIngestor, export_results_csv, generate_sample_csv
from worldaway.services.database_service import DatabaseService
from worldaway.database import get_db, BatchJob
from worldaway.exceptions import IngestionError
from worldaway.api.dependencies import get_batch_service
from worldaway.settings import settings
from worldaway.settings.logging import get_logger, bind_context, clear_context
from sqlalchemy.orm import Session
from datetime import datetime, timezone
from typing import List, Optional, Sequence

router = APIRouter()
logger = get_logger(__name__)


def _check_batch_size(count: int):
    if count == 0:
        raise HTTPException(status_code=400, detail="List of records cannot be empty.")
    if count > settings.max_batch_size:
        raise HTTPException(
            status_code=400,
            detail=f"Maximum of {settings.max_batch_size} records per batch. To process more, divide into smaller batches."
        )


def _run_batch(
    batch_service: BatchService,
    db: Session,
    rows: Sequence[IngestedRow],
    source: str,
    filename: Optional[str] = None,
    skipped_rows: Optional[List[SkippedRow]] = None
) -> BatchProcessingResponse:
    """Score the rows and record the job, marking it failed if scoring raises"""
    db_service = DatabaseService(db)
    batch_job = db_service.save_batch_job(
        source=source,
        filename=filename,
        total_records=len(rows),
        rows_skipped=len(skipped_rows or [])
    )
    bind_context(batch_job_id=batch_job.id)

    try:
        result = batch_service.process(rows, skipped_rows=skipped_rows)
    except Exception as e:
        db_service.update_batch_job(
            batch_job_id=batch_job.id,
            status="failed",
            processed_records=0,
            error_message=str(e)
        )
        raise
    finally:
        clear_context()

    db_service.update_batch_job(
        batch_job_id=batch_job.id,
        status="completed",
        processed_records=len(result.results),
        results=[r.model_dump(mode="json") for r in result.results],
        summary_statistics={
            **result.summary.model_dump(),
            "skipped_rows": [s.model_dump() for s in result.skipped_rows]
        },
        processing_time=result.processing_time_seconds
    )

    result.batch_job_id = batch_job.id
    result.filename = filename
    return result


@router.post("/process", response_model=BatchProcessingResponse)
async def process_batch_records(
    request: BatchRecordsRequest,
    batch_service: BatchService = Depends(get_batch_service),
    db: Session = Depends(get_db)
):
    """
    Classify a list of records in one call.

    Records keep their order; each result carries its 1-based position as
    `row_index`.
    """
    try:
        _check_batch_size(len(request.records))
        rows = [
            IngestedRow(row_index=position, **record.model_dump())
            for position, record in enumerate(request.records, start=1)
        ]
        return _run_batch(batch_service, db, rows, source="manual")

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("batch_failed")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/process-csv", response_model=BatchProcessingResponse)
async def process_csv_file(
    file: UploadFile = File(..., description="CSV file with exoplanet features"),
    batch_service: BatchService = Depends(get_batch_service),
    db: Session = Depends(get_db)
):
    """
    Classify every row of an uploaded CSV file.

    **CSV Requirements:**
    - First line is a header containing `orbital_period`, `transit_duration`,
      `planetary_radius`, `stellar_temp`, `snr` and `depth`. Matching ignores
      case, underscores and spaces; column order is free and extra columns
      are ignored.
    - Rows with a missing or non-numeric value are skipped and reported in
      `skipped_rows`.

    A missing column or a file without any valid row is rejected with 400.
    """
    try:
        extension = (file.filename or "").rsplit(".", 1)[-1].lower()
        if extension not in settings.allowed_file_types:
            raise HTTPException(status_code=400, detail="File must be a CSV file")

        # One byte past the limit is enough to tell an oversized upload apart
        content = await file.read(settings.max_upload_size + 1)
        if len(content) > settings.max_upload_size:
            raise HTTPException(
                status_code=400,
                detail=f"File exceeds the maximum upload size of {settings.max_upload_size} bytes"
            )

        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError:
            raise HTTPException(status_code=400, detail="CSV file must be UTF-8 encoded")

        try:
            parsed = CSVIngestor.parse(text)
        except IngestionError as e:
            logger.warning("csv_rejected", filename=file.filename, reason=str(e))
            raise HTTPException(status_code=400, detail=str(e))

        _check_batch_size(len(parsed.rows))

        return _run_batch(
            batch_service, db, parsed.rows,
            source="csv",
            filename=file.filename,
            skipped_rows=parsed.skipped_rows
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("csv_batch_failed", filename=file.filename)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/sample-csv")
async def download_sample_csv():
    """Template CSV with the expected header and eight example rows."""
    return Response(
        content=generate_sample_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=exoplanet_sample.csv"}
    )


def _load_batch_job(db: Session, batch_job_id: str) -> BatchJob:
    batch_job = DatabaseService(db).get_batch_job(batch_job_id)
    if not batch_job:
        raise HTTPException(status_code=404, detail=f"Batch job {batch_job_id} not found")
    if batch_job.status != "completed":
        raise HTTPException(status_code=409, detail=f"Batch job {batch_job_id} is {batch_job.status}")
    return batch_job


@router.get("/{batch_job_id}", response_model=BatchProcessingResponse)
async def get_batch_job(batch_job_id: str, db: Session = Depends(get_db)):
    batch_job = _load_batch_job(db, batch_job_id)

    summary_statistics = dict(batch_job.summary_statistics or {})
    skipped_rows = [SkippedRow(**s) for s in summary_statistics.pop("skipped_rows", [])]

    return BatchProcessingResponse(
        results=[BatchPredictionResult.model_validate(r) for r in batch_job.results or []],
        summary=BatchSummary(**summary_statistics),
        skipped_rows=skipped_rows,
        processing_time_seconds=batch_job.processing_time or 0.0,
        batch_job_id=batch_job.id,
        filename=batch_job.filename
    )


@router.get("/{batch_job_id}/export")
async def export_batch_job(batch_job_id: str, db: Session = Depends(get_db)):
    """Download the results of a stored batch as CSV."""
    batch_job = _load_batch_job(db, batch_job_id)
    results = [BatchPredictionResult.model_validate(r) for r in batch_job.results or []]

    filename = f"exoplanet_predictions_{datetime.now(timezone.utc).date().isoformat()}.csv"
    return Response(
        content=export_results_csv(results),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )
