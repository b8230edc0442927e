from __future__ import annotations

from fastapi.testclient import TestClient

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def register(client: TestClient, role: str = "Job Seeker", email: str = "seeker@mail.com", **overrides):
    payload = {
        "name": "Seeker",
        "email": email,
        "phone": "5551234",
        "password": "secret1",
        "role": role,
    }
    payload.update(overrides)
    return client.post("/api/users/register", json=payload)


def job_payload(**overrides) -> dict:
    payload = {
        "title": "Backend Engineer",
        "description": "Build and run the job board API.",
        "category": "Engineering",
        "country": "Germany",
        "city": "Berlin",
        "location": "Alexanderplatz 1, 10178 Berlin",
        "fixedSalary": 60000,
    }
    payload.update(overrides)
    return payload


def application_form(job_id: str, **overrides) -> dict:
    form = {
        "name": "Seeker",
        "email": "seeker@mail.com",
        "coverLetter": "I would like to apply.",
        "phone": "5551234",
        "address": "Main Street 1",
        "jobId": job_id,
    }
    form.update(overrides)
    return form


def apply(client: TestClient, job_id: str, content: bytes = PNG_BYTES, content_type: str = "image/png", **overrides):
    return client.post(
        "/api/application/post",
        data=application_form(job_id, **overrides),
        files={"resume": ("resume.png", content, content_type)},
    )
