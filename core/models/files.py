"""
File models for the contracts share.

Exports:
    ContractFile: Listing entry for one file
    UploadedFile: In-memory file taken from a multipart request
"""

from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class ContractFile(BaseModel):
    """A file in the root of the contracts share."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    size: int = Field(default=0, ge=0)
    uploaded_on: Optional[datetime] = Field(default=None, alias="uploadedOn")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class UploadedFile(BaseModel):
    """
    One file part of a multipart/form-data request.

    Parts are buffered fully in memory before upload.
    """

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"
    field_name: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.content)
