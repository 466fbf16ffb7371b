"""
Document API Endpoints.

Files attached to trips, fuel records, checklists, maintenance records,
drivers and vehicles. Metadata lives in the database, the bytes in the
upload directory.
"""

import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fleetops.app.db.session import get_db
from fleetops.app.core.dependencies import get_current_user
from fleetops.app.core.exceptions import ResourceNotFoundError, InsufficientPermissionsError
from fleetops.app.core.guards import is_staff
from fleetops.app.models.checklist import DriverChecklist
from fleetops.app.models.document import Document
from fleetops.app.models.driver import Driver
from fleetops.app.models.enums import DocumentEntityType
from fleetops.app.models.fuel import FuelRecord
from fleetops.app.models.maintenance import MaintenanceRecord
from fleetops.app.models.trip import Trip
from fleetops.app.models.user import User
from fleetops.app.models.vehicle import Vehicle
from fleetops.app.schemas.document import DocumentResponse, DocumentUploadResponse, DocumentDeleteResponse
from fleetops.app.services.audit import log_event, AuditAction
from fleetops.app.services.document_storage import DocumentStorage, get_document_storage

logger = logging.getLogger("fleetops.documents")

router = APIRouter(prefix="/documents", tags=["Documents"])

ENTITY_MODELS = {
    DocumentEntityType.TRIP: Trip,
    DocumentEntityType.FUEL_RECORD: FuelRecord,
    DocumentEntityType.CHECKLIST: DriverChecklist,
    DocumentEntityType.MAINTENANCE: MaintenanceRecord,
    DocumentEntityType.DRIVER: Driver,
    DocumentEntityType.VEHICLE: Vehicle,
}


async def _get_document(db: AsyncSession, document_id: str) -> Document:
    result = await db.execute(select(Document).where(Document.id == document_id))
    document = result.scalar_one_or_none()
    if not document:
        raise ResourceNotFoundError("Document", document_id)
    return document


def _stored_file(document: Document, storage: DocumentStorage) -> str:
    if not storage.exists(document.file_path):
        raise ResourceNotFoundError("File", document.id, message="File not found on disk")
    return document.file_path


@router.post("/upload", response_model=DocumentUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_documents(
    files: List[UploadFile] = File(..., description="Up to 5 images, PDFs or Word documents"),
    entity_id: str = Form(...),
    entity_type: DocumentEntityType = Form(...),
    document_type: str = Form(..., min_length=1, max_length=100),
    expiry_date: Optional[datetime] = Form(None, description="For licences, permits and insurance papers"),
    current_user: User = Depends(get_current_user),
    storage: DocumentStorage = Depends(get_document_storage),
    db: AsyncSession = Depends(get_db)
):
    """
    Upload documents for a record.

    Flow:
    1. Check the target record exists (404)
    2. Validate count and types (400) and store the files (413 when too large)
    3. Create one document row per file
    """
    entity = await db.get(ENTITY_MODELS[entity_type], entity_id)
    if not entity:
        raise ResourceNotFoundError(entity_type.value, entity_id)

    stored = await storage.save_all(files)

    documents = [
        Document(
            entity_id=entity_id,
            entity_type=entity_type,
            document_type=document_type,
            file_name=item.original_name,
            file_path=str(item.path),
            file_size=item.size,
            content_type=item.content_type,
            uploaded_by=current_user.id,
            expiry_date=expiry_date,
        )
        for item in stored
    ]
    db.add_all(documents)
    try:
        await db.commit()
    except Exception:
        for item in stored:
            storage.delete(str(item.path))
        raise

    for document in documents:
        await db.refresh(document)

    await log_event(
        db=db,
        action=AuditAction.DOCUMENT_UPLOADED,
        actor=current_user,
        target_id=entity_id,
        metadata={
            "entity_type": entity_type.value,
            "document_ids": [document.id for document in documents]
        }
    )

    return DocumentUploadResponse(
        documents=[DocumentResponse.model_validate(document) for document in documents]
    )


@router.get("/{document_id}/view")
async def view_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    storage: DocumentStorage = Depends(get_document_storage),
    db: AsyncSession = Depends(get_db)
):
    """Serve a document inline."""
    document = await _get_document(db, document_id)
    path = _stored_file(document, storage)

    return FileResponse(
        path,
        media_type=storage.content_type_for(document.file_name),
        filename=document.file_name,
        content_disposition_type="inline",
    )


@router.get("/{document_id}/download")
async def download_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    storage: DocumentStorage = Depends(get_document_storage),
    db: AsyncSession = Depends(get_db)
):
    """Serve a document as an attachment."""
    document = await _get_document(db, document_id)
    path = _stored_file(document, storage)

    return FileResponse(
        path,
        media_type="application/octet-stream",
        filename=document.file_name,
    )


@router.get("/{entity_type}/{entity_id}", response_model=List[DocumentResponse])
async def list_documents(
    entity_type: DocumentEntityType,
    entity_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List the documents attached to a record, newest first."""
    result = await db.execute(
        select(Document)
        .where(Document.entity_type == entity_type, Document.entity_id == entity_id)
        .order_by(Document.uploaded_at.desc())
    )
    return [DocumentResponse.model_validate(document) for document in result.scalars().all()]


@router.delete("/{document_id}", response_model=DocumentDeleteResponse)
async def delete_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    storage: DocumentStorage = Depends(get_document_storage),
    db: AsyncSession = Depends(get_db)
):
    """
    Delete a document and its file.

    Allowed for the uploader, admins and managers.
    """
    document = await _get_document(db, document_id)

    if not is_staff(current_user) and document.uploaded_by != current_user.id:
        raise InsufficientPermissionsError("Only the uploader, an admin or a manager can delete this document")

    await db.delete(document)
    await db.commit()

    # only unlink once the row is gone
    file_removed = storage.delete(document.file_path)
    logger.info("Deleted document %s (file removed: %s)", document_id, file_removed)

    await log_event(
        db=db,
        action=AuditAction.DOCUMENT_DELETED,
        actor=current_user,
        target_id=document_id,
        metadata={"file_name": document.file_name, "file_removed": file_removed}
    )

    return DocumentDeleteResponse(
        message="Document deleted successfully",
        document_id=document_id,
        file_removed=file_removed
    )
