from __future__ import annotations

import io
from datetime import timedelta

import pytest
from fastapi import UploadFile
from pydantic import ValidationError
from starlette.datastructures import Headers

from jobboard.core.auth import create_access_token, decode_token, hash_password, verify_password
from jobboard.core.errors import BadRequestError
from jobboard.core.permissions import ROUTE_PERMISSIONS, is_allowed, require_permission
from jobboard.schemas.schemas import JobCreate, JobUpdate
from jobboard.services.mongo_service import serialize_doc
from jobboard.services.storage import LocalResumeStorage
from jobboard.utils.file_upload import read_resume, resume_extension


def test_password_hash_roundtrip():
    hashed = hash_password("secret1")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


def test_token_decode(settings):
    token = create_access_token({"sub": "abc"}, settings)
    assert decode_token(token, settings)["sub"] == "abc"
    assert decode_token(token + "x", settings) is None

    expired = create_access_token({"sub": "abc"}, settings, expires_delta=timedelta(minutes=-1))
    assert decode_token(expired, settings) is None


def test_permission_table():
    assert is_allowed("job:post", "Employer")
    assert not is_allowed("job:post", "Job Seeker")
    assert is_allowed("application:post", "Job Seeker")
    assert not is_allowed("application:post", "Employer")
    assert not is_allowed("no:such:route", "Employer")


def test_every_gated_route_has_exactly_one_role():
    for name, roles in ROUTE_PERMISSIONS.items():
        assert len(roles) == 1, name


def test_require_permission_rejects_unknown_route_name():
    with pytest.raises(KeyError):
        require_permission("job:typo")


def test_require_permission_dependency():
    dep = require_permission("job:delete")
    employer = {"_id": "1", "role": "Employer"}
    assert dep(user=employer) is employer

    with pytest.raises(BadRequestError) as exc:
        dep(user={"_id": "2", "role": "Job Seeker"})
    assert exc.value.status_code == 400


BASE_JOB = {
    "title": "t", "description": "d", "category": "c",
    "country": "DE", "city": "Berlin", "location": "somewhere",
}


@pytest.mark.parametrize("salary", [
    {"fixedSalary": 1000},
    {"salaryFrom": 1000, "salaryTo": 2000},
    {"salaryFrom": 1000, "salaryTo": 1000},
])
def test_job_create_accepts_one_salary_shape(salary):
    JobCreate(**BASE_JOB, **salary)


@pytest.mark.parametrize("salary", [
    {},
    {"salaryFrom": 1000},
    {"fixedSalary": 1000, "salaryTo": 2000},
    {"salaryFrom": 3000, "salaryTo": 2000},
    {"fixedSalary": -1},
])
def test_job_create_rejects_bad_salary(salary):
    with pytest.raises(ValidationError):
        JobCreate(**BASE_JOB, **salary)


def test_job_update_dump_uses_json_names():
    update = JobUpdate(salaryFrom=1, salaryTo=2)
    assert update.model_dump(by_alias=True, exclude_none=True) == {"salaryFrom": 1, "salaryTo": 2}


def test_resume_extension():
    assert resume_extension("image/png") == ".png"
    assert resume_extension("image/JPEG") == ".jpg"
    assert resume_extension("image/webp") == ".webp"
    for bad in ("application/pdf", "", None):
        with pytest.raises(BadRequestError):
            resume_extension(bad)


def test_local_storage_save_and_delete(tmp_path):
    storage = LocalResumeStorage(str(tmp_path), url_prefix="/files/")
    stored = storage.save(filename="cv.png", content=b"abc", extension=".png")

    assert stored.public_id.endswith(".png")
    assert stored.url == f"/files/{stored.public_id}"
    assert (tmp_path / stored.public_id).read_bytes() == b"abc"

    assert storage.delete(public_id=stored.public_id) is True
    assert storage.delete(public_id=stored.public_id) is False


def test_local_storage_refuses_paths_outside_root(tmp_path):
    storage = LocalResumeStorage(str(tmp_path / "root"))
    with pytest.raises(ValueError):
        storage.delete(public_id="../escape.png")


def test_serialize_doc_converts_nested_object_ids():
    from bson import ObjectId

    oid = ObjectId()
    doc = {"_id": oid, "applicantID": {"user": oid}, "tags": [oid]}
    assert serialize_doc(doc) == {"_id": str(oid), "applicantID": {"user": str(oid)}, "tags": [str(oid)]}
    assert serialize_doc(None) is None


class _CountingBytesIO(io.BytesIO):
    def __init__(self, data: bytes):
        super().__init__(data)
        self.bytes_read = 0

    def read(self, size=-1):
        chunk = super().read(size)
        self.bytes_read += len(chunk)
        return chunk


def _upload(data: bytes, content_type: str = "image/png") -> UploadFile:
    return UploadFile(
        file=_CountingBytesIO(data),
        filename="cv.png",
        headers=Headers({"content-type": content_type}),
    )


def test_read_resume_stops_reading_past_the_limit():
    upload = _upload(b"\x00" * (3 * 1024 * 1024))
    with pytest.raises(BadRequestError) as exc:
        read_resume(upload, max_size_mb=1)

    assert exc.value.message == "File too large. Maximum size: 1MB"
    assert upload.file.bytes_read == 1024 * 1024 + 1


def test_read_resume_accepts_file_at_the_limit():
    content, ext = read_resume(_upload(b"\x00" * (1024 * 1024)), max_size_mb=1)
    assert len(content) == 1024 * 1024
    assert ext == ".png"


def test_local_storage_creates_root_on_first_save(tmp_path):
    root = tmp_path / "later"
    storage = LocalResumeStorage(str(root))
    assert not root.exists()

    storage.save(filename="cv.png", content=b"abc", extension=".png")
    assert root.is_dir()
