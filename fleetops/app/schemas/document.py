"""
Document schemas.
"""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List
from fleetops.app.models.enums import DocumentEntityType


class DocumentResponse(BaseModel):
    """Schema for document metadata."""
    id: str
    entity_id: str
    entity_type: DocumentEntityType
    document_type: str
    file_name: str
    file_size: Optional[int]
    content_type: Optional[str]
    uploaded_by: Optional[str]
    uploaded_at: datetime
    expiry_date: Optional[datetime]
    
    class Config:
        from_attributes = True


class DocumentUploadResponse(BaseModel):
    """Documents created by one upload."""
    documents: List[DocumentResponse]


class DocumentDeleteResponse(BaseModel):
    """Confirmation of a delete."""
    message: str
    document_id: str
    file_removed: bool
