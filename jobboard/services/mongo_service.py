"""
MongoDB Service - CRUD operations for the job-board collections.

Collections in this database:
1. users         - job seekers and employers (password stored as bcrypt hash)
2. jobs          - job postings, referencing the posting employer
3. applications  - applications, referencing job, applicant and employer

Each service is built from the MongoConnection the app owns, so routes get
them through dependencies instead of module-level globals.
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from bson import ObjectId
from fastapi import Depends
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from jobboard.db.mongodb import MongoConnection, get_mongo

logger = logging.getLogger(__name__)

# Never sent back to clients
USER_PUBLIC_PROJECTION = {"password": 0}


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def _serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: _serialize_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_serialize_value(v) for v in value]
    return value


def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    return _serialize_value(doc)


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================
# USERS COLLECTION
# ============================================================

class UserService:
    """
    Handles user storage.
    Lookups return the document without the password hash unless asked.
    """

    def __init__(self, mongo: MongoConnection):
        self.collection: Collection = mongo.collection("users")

    def create(self, name: str, email: str, phone: str, password_hash: str, role: str) -> dict:
        """
        Insert a user. The unique index on email raises DuplicateKeyError
        if another request registered the same address first.

        Returns:
            The stored document without the password hash
        """
        doc = {
            "name": name,
            "email": email,
            "phone": phone,
            "password": password_hash,
            "role": role,
            "createdAt": utcnow(),
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        doc.pop("password")
        return doc

    def email_exists(self, email: str) -> bool:
        return self.collection.find_one({"email": email}, {"_id": 1}) is not None

    def get_by_id(self, user_id: ObjectId) -> Optional[dict]:
        return self.collection.find_one({"_id": user_id}, USER_PUBLIC_PROJECTION)

    def get_for_login(self, email: str, role: str) -> Optional[dict]:
        """Fetch user by email and role, including the password hash."""
        return self.collection.find_one({"email": email, "role": role})


# ============================================================
# JOBS COLLECTION
# ============================================================

class JobService:
    """
    Handles job postings.
    A job carries either fixedSalary or salaryFrom/salaryTo, never both.
    """

    SALARY_RANGE_FIELDS = ("salaryFrom", "salaryTo")

    def __init__(self, mongo: MongoConnection):
        self.collection: Collection = mongo.collection("jobs")

    def list_active(self) -> List[dict]:
        cursor = self.collection.find({"expired": False}).sort("jobPostedOn", DESCENDING)
        return list(cursor)

    def list_by_poster(self, user_id: ObjectId) -> List[dict]:
        cursor = self.collection.find({"postedBy": user_id}).sort("jobPostedOn", DESCENDING)
        return list(cursor)

    def get_by_id(self, job_id: ObjectId) -> Optional[dict]:
        return self.collection.find_one({"_id": job_id})

    def create(self, fields: dict, posted_by: ObjectId) -> dict:
        """
        Insert a job posting.

        Args:
            fields: validated job fields with camelCase keys
            posted_by: employer user id
        """
        doc = {
            **fields,
            "expired": False,
            "jobPostedOn": utcnow(),
            "postedBy": posted_by,
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    def update(self, job_id: ObjectId, posted_by: ObjectId, changes: dict) -> Optional[dict]:
        """
        Apply a partial update to a job owned by `posted_by`.

        Setting fixedSalary drops the range and setting the range drops
        fixedSalary, so the stored job keeps exactly one salary shape.

        Returns:
            The updated document, or None if no such job belongs to the caller
        """
        unset = {}
        if "fixedSalary" in changes:
            unset = {field: "" for field in self.SALARY_RANGE_FIELDS}
        elif any(field in changes for field in self.SALARY_RANGE_FIELDS):
            unset = {"fixedSalary": ""}

        update = {"$set": changes}
        if unset:
            update["$unset"] = unset

        query = {"_id": job_id, "postedBy": posted_by}
        if not changes:
            return self.collection.find_one(query)
        return self.collection.find_one_and_update(
            query, update, return_document=ReturnDocument.AFTER
        )

    def delete(self, job_id: ObjectId, posted_by: ObjectId) -> bool:
        result = self.collection.delete_one({"_id": job_id, "postedBy": posted_by})
        return result.deleted_count > 0


# ============================================================
# APPLICATIONS COLLECTION
# ============================================================

class ApplicationService:
    """
    Handles job applications.
    applicantID/employerID are written once at creation and never updated.
    """

    def __init__(self, mongo: MongoConnection):
        self.collection: Collection = mongo.collection("applications")

    def create(
        self,
        fields: dict,
        resume: dict,
        job_id: ObjectId,
        applicant_id: ObjectId,
        employer_id: ObjectId,
    ) -> dict:
        """
        Insert an application.

        Args:
            fields: name, email, coverLetter, phone, address
            resume: {"public_id", "url"} returned by the resume storage
            job_id: job applied for
            applicant_id: job seeker submitting the application
            employer_id: employer who posted the job
        """
        doc = {
            **fields,
            "resume": resume,
            "jobId": job_id,
            "applicantID": {"user": applicant_id, "role": "Job Seeker"},
            "employerID": {"user": employer_id, "role": "Employer"},
            "createdAt": utcnow(),
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    def list_for_employer(self, employer_id: ObjectId) -> List[dict]:
        cursor = self.collection.find({"employerID.user": employer_id}).sort("createdAt", DESCENDING)
        return list(cursor)

    def list_for_applicant(self, applicant_id: ObjectId) -> List[dict]:
        cursor = self.collection.find({"applicantID.user": applicant_id}).sort("createdAt", DESCENDING)
        return list(cursor)

    def get_owned(self, application_id: ObjectId, applicant_id: ObjectId) -> Optional[dict]:
        return self.collection.find_one({"_id": application_id, "applicantID.user": applicant_id})

    def delete(self, application_id: ObjectId) -> bool:
        result = self.collection.delete_one({"_id": application_id})
        return result.deleted_count > 0


# ============================================================
# DEPENDENCIES: one service per request, from the app's connection
# ============================================================

def get_user_service(mongo: MongoConnection = Depends(get_mongo)) -> UserService:
    return UserService(mongo)


def get_job_service(mongo: MongoConnection = Depends(get_mongo)) -> JobService:
    return JobService(mongo)


def get_application_service(mongo: MongoConnection = Depends(get_mongo)) -> ApplicationService:
    return ApplicationService(mongo)
