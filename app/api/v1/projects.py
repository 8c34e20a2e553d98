# app/api/v1/projects.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_principal, get_db, get_optional_principal
from app.core.exceptions import NotFoundError
from app.core.rbac import Principal, visibility_scope
from app.crud.project import project_crud
from app.schemas.project import ProjectCreate, ProjectOut, ProjectUpdate

router = APIRouter()

@router.post("/", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    body: ProjectCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return ProjectOut.from_record(project_crud.create_for(db, principal, body))

@router.get("/", response_model=List[ProjectOut])
def list_my_projects(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return [ProjectOut.from_record(p) for p in project_crud.list_by_owner(db, principal.id)]

@router.get("/{project_id}", response_model=ProjectOut)
def get_project(
    project_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
    viewer: Optional[Principal] = Depends(get_optional_principal),
):
    p = project_crud.get_or_404(db, project_id)
    if not p.is_verified and not visibility_scope(viewer, p.user_id).includes_unverified:
        raise NotFoundError("Project", project_id)
    return ProjectOut.from_record(p)

@router.patch("/{project_id}", response_model=ProjectOut)
def update_project(
    body: ProjectUpdate,
    project_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return ProjectOut.from_record(project_crud.update_content(db, principal, project_id, body))
