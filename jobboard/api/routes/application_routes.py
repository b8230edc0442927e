"""
Application Routes

POST /application/post - Apply to a job with a resume image (job seeker only)
GET /application/employer/getall - Applications to the caller's jobs (employer only)
GET /application/jobseeker/getall - Caller's own applications (job seeker only)
DELETE /application/delete/{id} - Withdraw an application (job seeker only)
"""

import logging
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import EmailStr

from jobboard.core.auth import get_app_settings
from jobboard.core.config import Settings
from jobboard.core.errors import NotFoundError
from jobboard.core.permissions import require_permission
from jobboard.schemas.schemas import ApplicationListResponse, ApplicationResponse, MessageResponse
from jobboard.services.mongo_service import (
    ApplicationService, JobService, get_application_service, get_job_service, serialize_doc, serialize_docs
)
from jobboard.services.storage import ResumeStorage, get_resume_storage
from jobboard.utils.file_upload import read_resume

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/application", tags=["Applications"])


@router.post("/post", response_model=ApplicationResponse, status_code=201)
def post_application(
    name: str = Form(..., min_length=1, max_length=30),
    email: EmailStr = Form(...),
    cover_letter: str = Form(..., alias="coverLetter", min_length=1),
    phone: str = Form(..., min_length=1),
    address: str = Form(..., min_length=1),
    job_id: str = Form(..., alias="jobId", min_length=1),
    resume: Optional[UploadFile] = File(None, description="Resume image (PNG, JPEG or WebP)"),
    user: dict = Depends(require_permission("application:post")),
    jobs: JobService = Depends(get_job_service),
    applications: ApplicationService = Depends(get_application_service),
    storage: ResumeStorage = Depends(get_resume_storage),
    settings: Settings = Depends(get_app_settings),
):
    """
    Submit an application for a job.

    Process:
    1. Check the resume file (type and size)
    2. Check the job exists
    3. Store the resume
    4. Store the application, addressed to the employer who posted the job
    """
    content, ext = read_resume(resume, settings.max_resume_size_mb)

    try:
        job = jobs.get_by_id(ObjectId(job_id))
    except InvalidId:
        job = None
    if not job:
        raise NotFoundError("Job not found!")

    stored = storage.save(filename=resume.filename, content=content, extension=ext)

    try:
        application = applications.create(
            fields={
                "name": name,
                "email": email,
                "coverLetter": cover_letter,
                "phone": phone,
                "address": address,
            },
            resume=stored.as_dict(),
            job_id=job["_id"],
            applicant_id=user["_id"],
            employer_id=job["postedBy"],
        )
    except Exception:
        logger.error("Application insert failed, removing stored resume %s", stored.public_id)
        storage.delete(public_id=stored.public_id)
        raise

    logger.info("Job seeker %s applied to job %s", user["_id"], job["_id"])
    return {"success": True, "message": "Application Submitted!", "application": serialize_doc(application)}


@router.get("/employer/getall", response_model=ApplicationListResponse)
def employer_get_all_applications(
    user: dict = Depends(require_permission("application:employer:getall")),
    applications: ApplicationService = Depends(get_application_service),
):
    """Applications addressed to jobs the authenticated employer posted."""
    return {"success": True, "applications": serialize_docs(applications.list_for_employer(user["_id"]))}


@router.get("/jobseeker/getall", response_model=ApplicationListResponse)
def jobseeker_get_all_applications(
    user: dict = Depends(require_permission("application:jobseeker:getall")),
    applications: ApplicationService = Depends(get_application_service),
):
    """Applications submitted by the authenticated job seeker."""
    return {"success": True, "applications": serialize_docs(applications.list_for_applicant(user["_id"]))}


@router.delete("/delete/{id}", response_model=MessageResponse)
def jobseeker_delete_application(
    id: str,
    user: dict = Depends(require_permission("application:delete")),
    applications: ApplicationService = Depends(get_application_service),
    storage: ResumeStorage = Depends(get_resume_storage),
):
    """Delete one of the caller's applications and its stored resume."""
    application = applications.get_owned(ObjectId(id), applicant_id=user["_id"])
    if not application:
        raise NotFoundError("Oops, application not found!")

    applications.delete(application["_id"])
    storage.delete(public_id=application["resume"]["public_id"])

    logger.info("Job seeker %s deleted application %s", user["_id"], id)
    return MessageResponse(message="Application Deleted!")
