"""
Document database model.

Documents attach to other records polymorphically through
(entity_type, entity_id); the file itself lives in the upload directory.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleetops.app.db.session import Base, new_id
from fleetops.app.models.enums import DocumentEntityType, db_enum


class Document(Base):
    """Uploaded file metadata."""
    __tablename__ = "documents"
    
    id = Column(String(36), primary_key=True, default=new_id)
    
    # Polymorphic owner
    entity_id = Column(String(36), nullable=False, index=True)
    entity_type = Column(db_enum(DocumentEntityType, "document_entity_type"), nullable=False, index=True)
    document_type = Column(String(100), nullable=False)  # e.g., "receipt", "photo", "invoice"
    
    # File
    file_name = Column(String(255), nullable=False)  # original client filename
    file_path = Column(String(500), nullable=False)
    file_size = Column(Integer, nullable=True)
    content_type = Column(String(255), nullable=True)
    
    uploaded_by = Column(String(255), ForeignKey('users.id'), nullable=True)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expiry_date = Column(DateTime(timezone=True), nullable=True)
    
    def __repr__(self):
        return f"<Document(id={self.id}, entity='{self.entity_type.value}:{self.entity_id}', file='{self.file_name}')>"
