from fastapi import APIRouter, Body, Depends, Query, Request, status
from typing import Any, Dict, Optional
from controllers.project_controller import ProjectController
from dto import ProjectListResponse
from middleware.auth import get_current_user

router = APIRouter(prefix="/api/projects", tags=["projects"])
project_controller = ProjectController()


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
):
    """List projects, newest first"""
    return await project_controller.list_projects(page=page, limit=limit, search=search)


@router.get("/slug/{slug}", response_model=Dict[str, Any])
async def get_project_by_slug(slug: str):
    return await project_controller.get_by_slug(slug)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Dict[str, Any])
async def create_project(
    payload: Any = Body(...),
    current_user: Dict[str, Any] = Depends(get_current_user)
):
    """
    Create a project owned by the authenticated user
    Requires Authorization header with Bearer token
    """
    return await project_controller.create_project(payload, current_user)


@router.put("/{project_id}", response_model=Dict[str, Any])
async def update_project(project_id: str, request: Request, payload: Any = Body(...)):
    """
    Replace a project's editable fields
    Requires x-user-id header matching the project author
    """
    return await project_controller.update_project(project_id, payload, request)


@router.delete("/{project_id}", response_model=Dict[str, Any])
async def delete_project(project_id: str, request: Request):
    """
    Delete a project
    Requires x-user-id header matching the project author
    """
    return await project_controller.delete_project(project_id, request)
