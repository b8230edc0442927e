"""
Job Board API
Registration, job postings and job applications over REST.

Architecture:
- FastAPI: routing, validation, OpenAPI docs
- MongoDB (pymongo): users, jobs, applications
- Local resume storage served as static files
"""

__version__ = "1.0.0"
