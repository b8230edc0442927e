"""
Resume Storage - where uploaded resume files live.

Routes only talk to the ResumeStorage protocol. LocalResumeStorage writes
files under a directory that main.py serves as static files; another backend
(object storage, a CDN) only has to implement save() and delete().
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from fastapi import Request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredResume:
    public_id: str
    url: str

    def as_dict(self) -> dict:
        return {"public_id": self.public_id, "url": self.url}


class ResumeStorage(Protocol):
    def save(self, *, filename: str, content: bytes, extension: str) -> StoredResume: ...
    def delete(self, *, public_id: str) -> bool: ...


class LocalResumeStorage:
    def __init__(self, root_dir: str, url_prefix: str = "/uploads") -> None:
        self.root = Path(root_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, public_id: str) -> Path:
        # public ids are generated here, but never let one escape the root
        p = (self.root / public_id).resolve()
        if self.root.resolve() not in p.parents:
            raise ValueError(f"invalid public id: {public_id}")
        return p

    def save(self, *, filename: str, content: bytes, extension: str) -> StoredResume:
        self.ensure_root()
        public_id = f"{uuid.uuid4().hex}{extension}"
        p = self._path(public_id)

        tmp = p.with_suffix(p.suffix + ".tmp")
        tmp.write_bytes(content)
        tmp.replace(p)

        logger.info("Stored resume %s as %s (%d bytes)", filename, public_id, len(content))
        return StoredResume(public_id=public_id, url=f"{self.url_prefix}/{public_id}")

    def delete(self, *, public_id: str) -> bool:
        p = self._path(public_id)
        if not p.exists():
            return False
        p.unlink()
        logger.info("Deleted resume %s", public_id)
        return True


def get_resume_storage(request: Request) -> ResumeStorage:
    """FastAPI dependency - the storage backend created by create_app()."""
    return request.app.state.resume_storage
