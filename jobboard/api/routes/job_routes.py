"""
Job Routes

GET /job/getall - List all active jobs (public)
POST /job/post - Create job posting (employer only)
GET /job/getmyjobs - Jobs posted by the caller (employer only)
PUT /job/update/{id} - Update job (employer only)
DELETE /job/delete/{id} - Delete job (employer only)
GET /job/getJobById/{id} - Get job details (logged in)
"""

import logging

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, Depends

from jobboard.core.auth import get_current_user
from jobboard.core.errors import NotFoundError
from jobboard.core.permissions import require_permission
from jobboard.schemas.schemas import (
    JobCreate, JobListResponse, JobResponse, JobUpdate, MessageResponse, MyJobsResponse
)
from jobboard.services.mongo_service import JobService, get_job_service, serialize_doc, serialize_docs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/job", tags=["Jobs"])


@router.get("/getall", response_model=JobListResponse)
def get_all_jobs(jobs: JobService = Depends(get_job_service)):
    """List every job that has not expired. No login needed."""
    return {"success": True, "jobs": serialize_docs(jobs.list_active())}


@router.post("/post", response_model=JobResponse, status_code=201)
def post_job(
    job: JobCreate,
    user: dict = Depends(require_permission("job:post")),
    jobs: JobService = Depends(get_job_service),
):
    """Create a new job posting with either a fixed or a ranged salary."""
    created = jobs.create(job.model_dump(by_alias=True, exclude_none=True), posted_by=user["_id"])
    logger.info("Employer %s posted job %s", user["_id"], created["_id"])
    return {"success": True, "message": "Job Posted Successfully!", "job": serialize_doc(created)}


@router.get("/getmyjobs", response_model=MyJobsResponse)
def get_my_jobs(
    user: dict = Depends(require_permission("job:getmyjobs")),
    jobs: JobService = Depends(get_job_service),
):
    """Jobs posted by the authenticated employer, expired ones included."""
    return {"success": True, "my_jobs": serialize_docs(jobs.list_by_poster(user["_id"]))}


@router.put("/update/{id}", response_model=JobResponse)
def update_job(
    id: str,
    update: JobUpdate,
    user: dict = Depends(require_permission("job:update")),
    jobs: JobService = Depends(get_job_service),
):
    """Update a job posting. Only fields present in the body change."""
    changes = update.model_dump(by_alias=True, exclude_none=True)
    updated = jobs.update(ObjectId(id), posted_by=user["_id"], changes=changes)
    if not updated:
        raise NotFoundError("OOPS! Job not found.")

    logger.info("Employer %s updated job %s (%s)", user["_id"], id, ", ".join(changes) or "no changes")
    return {"success": True, "message": "Job Updated!", "job": serialize_doc(updated)}


@router.delete("/delete/{id}", response_model=MessageResponse)
def delete_job(
    id: str,
    user: dict = Depends(require_permission("job:delete")),
    jobs: JobService = Depends(get_job_service),
):
    """Delete a job posting. Applications to it are kept."""
    if not jobs.delete(ObjectId(id), posted_by=user["_id"]):
        raise NotFoundError("OOPS! Job not found.")

    logger.info("Employer %s deleted job %s", user["_id"], id)
    return MessageResponse(message="Job Deleted!")


@router.get("/getJobById/{id}", response_model=JobResponse, response_model_exclude_none=True)
def get_single_job(
    id: str,
    user: dict = Depends(get_current_user),
    jobs: JobService = Depends(get_job_service),
):
    """Get details of a specific job."""
    try:
        job = jobs.get_by_id(ObjectId(id))
    except InvalidId:
        raise NotFoundError("Invalid ID / CastError")

    if not job:
        raise NotFoundError("Job not found.")

    return {"success": True, "job": serialize_doc(job)}
