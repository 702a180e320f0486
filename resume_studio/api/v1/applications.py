from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from resume_studio.core import applications_store
from resume_studio.schemas.applications import (
    ApplicationCreate,
    ApplicationOut,
    ApplicationStatusUpdate,
    MessageResponse,
)

router = APIRouter()


@router.get("/applications", response_model=list[ApplicationOut])
def get_applications():
    return applications_store.list_applications()


@router.post("/applications", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
def create_application(payload: ApplicationCreate):
    return applications_store.create_application(**payload.model_dump())


@router.patch("/applications/{application_id}", response_model=ApplicationOut)
def update_application_status(application_id: str, payload: ApplicationStatusUpdate):
    updated = applications_store.update_application_status(application_id, payload.status)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
    return updated


@router.delete("/applications/{application_id}", response_model=MessageResponse)
def delete_application(application_id: str):
    if not applications_store.delete_application(application_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
    return MessageResponse(message="Application deleted")
