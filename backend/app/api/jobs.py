from datetime import datetime
import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.job import Job
from ..models.user import User
from ..schemas.job import JobCreate, JobUpdate
from ..utils.dependencies import get_job_actor
from ..utils.error_handlers import get_error_message, handle_database_error
from ..utils.validation import validate_object_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])


def _job_to_public(job: Job) -> dict:
    return {
        "_id": job.id,
        "id": job.id,
        "title": job.title,
        "type": job.type,
        "description": job.description,
        "location": job.location,
        "salary": job.salary,
        "company": dict(job.company or {}),
        "user_id": job.user_id,
        "created_at": job.created_at.isoformat() if isinstance(job.created_at, datetime) else job.created_at,
        "updated_at": job.updated_at.isoformat() if isinstance(job.updated_at, datetime) else job.updated_at,
    }


def _get_job_or_404(db: Session, job_id: str, *, operation: str, fallback_key: str) -> Job:
    job_id = validate_object_id(job_id, get_error_message("job_not_found"))
    try:
        job = db.query(Job).filter(Job.id == job_id).first()
    except Exception as e:
        raise handle_database_error(e, operation, fallback_key)
    if not job:
        raise HTTPException(status_code=404, detail=get_error_message("job_not_found"))
    return job


def _ensure_can_modify(job: Job, actor: User | None) -> None:
    # Unowned jobs (created through the open API) stay editable by any caller.
    if actor is None or job.user_id is None:
        return
    if job.user_id != actor.id:
        raise HTTPException(status_code=403, detail=get_error_message("job_forbidden"))


@router.get("")
def list_jobs(db: Session = Depends(get_db)):
    try:
        jobs = db.query(Job).order_by(Job.created_at.asc(), Job.id.asc()).all()
    except Exception as e:
        raise handle_database_error(e, "listing jobs", "jobs_fetch_failed")
    return [_job_to_public(j) for j in jobs]


@router.get("/{job_id}")
def get_job(job_id: str, db: Session = Depends(get_db)):
    job = _get_job_or_404(db, job_id, operation="fetching job", fallback_key="job_fetch_failed")
    return _job_to_public(job)


@router.post("", status_code=201)
def create_job(
    payload: JobCreate,
    db: Session = Depends(get_db),
    actor: User | None = Depends(get_job_actor),
):
    title = (payload.title or "").strip()
    if not title or payload.company is None or not (payload.company.name or "").strip():
        raise HTTPException(status_code=400, detail=get_error_message("job_required_fields"))

    job = Job(
        title=title,
        type=payload.type,
        description=payload.description,
        location=payload.location,
        salary=payload.salary,
        company=payload.company.to_document(),
        user_id=actor.id if actor is not None else None,
    )
    try:
        db.add(job)
        db.commit()
        db.refresh(job)
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "creating job", "job_create_failed")

    logger.info("Created job %s (owner=%s)", job.id, job.user_id)
    return _job_to_public(job)


@router.put("/{job_id}")
def update_job(
    job_id: str,
    payload: JobUpdate,
    db: Session = Depends(get_db),
    actor: User | None = Depends(get_job_actor),
):
    job = _get_job_or_404(db, job_id, operation="fetching job for update", fallback_key="job_update_failed")

    changes = payload.model_dump(exclude_unset=True)
    if "title" in changes and not (changes["title"] or "").strip():
        raise HTTPException(status_code=400, detail=get_error_message("invalid_job_data"))
    if "company" in changes and (payload.company is None or not (payload.company.name or "").strip()):
        raise HTTPException(status_code=400, detail=get_error_message("invalid_job_data"))

    _ensure_can_modify(job, actor)

    for field in ("type", "description", "location", "salary"):
        if field in changes:
            setattr(job, field, changes[field])
    if "title" in changes:
        job.title = changes["title"].strip()
    if "company" in changes:
        job.company = payload.company.to_document()

    try:
        db.commit()
        db.refresh(job)
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "updating job", "job_update_failed")

    return _job_to_public(job)


@router.delete("/{job_id}", status_code=204)
def delete_job(
    job_id: str,
    db: Session = Depends(get_db),
    actor: User | None = Depends(get_job_actor),
):
    job = _get_job_or_404(db, job_id, operation="fetching job for delete", fallback_key="job_delete_failed")
    _ensure_can_modify(job, actor)

    try:
        db.delete(job)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "deleting job", "job_delete_failed")

    logger.info("Deleted job %s", job_id)
    return Response(status_code=204)
