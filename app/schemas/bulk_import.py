"""Schemas for the bulk show import workflow."""

from enum import Enum
from typing import Optional

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.show import Platform, ResolvedShow


class ImportStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


class ParsedShow(CamelModel):
    """One URL moving through classification, resolution and submission."""
    url: str
    platform: Platform
    status: ImportStatus = ImportStatus.PENDING
    data: Optional[ResolvedShow] = None
    error: Optional[str] = None

    @property
    def is_finished(self) -> bool:
        return self.status in (ImportStatus.SUCCESS, ImportStatus.ERROR)


class BulkParseRequest(CamelModel):
    """Newline separated URLs."""
    text: str = ""


class BulkImportRequest(CamelModel):
    """URLs to import as shows of one artist."""
    artist_id: str = Field(..., min_length=1)
    text: str = ""


class BulkImportSummary(CamelModel):
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    progress: float = 0.0

    @property
    def message(self) -> str:
        return f"{self.succeeded} succeeded, {self.failed} failed"


class BulkImportResponse(CamelModel):
    entries: list[ParsedShow]
    summary: BulkImportSummary
    message: str


class BulkProgressEvent(CamelModel):
    """Emitted after each entry completes."""
    index: int
    progress: float
    entry: ParsedShow
