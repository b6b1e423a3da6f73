# src/api/models.py
"""API-level models: ImportReport."""

from __future__ import annotations

from pydantic import BaseModel, Field

from answerfinder.ingestion.models import ParseIssue


class ImportReport(BaseModel):
    """Outcome of importing one Q&A file into an AppContext."""

    file_name: str
    format: str
    imported: int = 0
    issues: list[ParseIssue] = Field(default_factory=list)
