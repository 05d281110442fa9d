from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel

# Fixed extension -> mime table; nothing else is accepted
FONT_MIME_TYPES: Dict[str, str] = {
    ".woff2": "font/woff2",
    ".woff": "font/woff",
}


class FileStatus(str, Enum):
    UPLOADED = "UPLOADED"
    PROCESSING = "PROCESSING"
    READY = "READY"
    FAILED = "FAILED"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "FileStatus":
        # Unknown or missing statuses count as still processing
        try:
            return cls(str(raw).upper())
        except ValueError:
            return cls.PROCESSING

    @property
    def is_pending(self) -> bool:
        return self in (FileStatus.UPLOADED, FileStatus.PROCESSING)


@dataclass(frozen=True)
class FontUploadRequest:
    file_name: str
    mime_type: str
    size_bytes: int


@dataclass(frozen=True)
class UploadTarget:
    url: str
    resource_url: str
    parameters: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def from_graphql(cls, node: Dict[str, Any]) -> "UploadTarget":
        params = tuple((p["name"], p["value"]) for p in node.get("parameters") or [])
        return cls(url=node["url"], resource_url=node["resourceUrl"], parameters=params)


@dataclass(frozen=True)
class ManagedFile:
    id: str
    status: FileStatus
    url: Optional[str] = None

    @classmethod
    def from_graphql(cls, node: Dict[str, Any]) -> "ManagedFile":
        return cls(id=node["id"], status=FileStatus.parse(node.get("fileStatus")), url=node.get("url"))


@dataclass(frozen=True)
class CheckoutProfile:
    id: str
    name: str = ""


@dataclass(frozen=True)
class BindingResult:
    success: bool
    typography: Optional[Dict[str, Any]] = field(default=None, compare=False)


class ActionResponse(BaseModel):
    success: bool
    message: str
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
