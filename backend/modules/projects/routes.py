"""
Project API endpoints.

Every operation is scoped to the calling provider: projects owned by
someone else behave exactly like projects that don't exist.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_project_service
from api.middleware.auth import get_current_identity
from shared.models import Identity, MessageResponse

from .models import (
    CreateProjectRequest,
    ProjectListResponse,
    ProjectMutationResponse,
    ProjectResponse,
    UpdateProjectRequest,
)
from .service import ProjectService

router = APIRouter()


@router.post("", response_model=ProjectMutationResponse, status_code=201)
async def create_project(
    request: CreateProjectRequest,
    identity: Identity = Depends(get_current_identity),
    service: ProjectService = Depends(get_project_service),
) -> ProjectMutationResponse:
    """
    Create a project for the caller.

    The project starts in 'pending' status with the client attached.
    """
    project = await service.create_project(identity.id, request)
    return ProjectMutationResponse(
        message="Project created successfully",
        project=project,
    )


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    identity: Identity = Depends(get_current_identity),
    service: ProjectService = Depends(get_project_service),
) -> ProjectListResponse:
    """List the caller's projects, most recent first."""
    return ProjectListResponse(projects=await service.list_projects(identity.id))


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    return ProjectResponse(project=await service.get_project(identity.id, project_id))


@router.put("/{project_id}", response_model=ProjectMutationResponse)
async def update_project(
    project_id: str,
    request: UpdateProjectRequest,
    identity: Identity = Depends(get_current_identity),
    service: ProjectService = Depends(get_project_service),
) -> ProjectMutationResponse:
    project = await service.update_project(identity.id, project_id, request)
    return ProjectMutationResponse(
        message="Project updated successfully",
        project=project,
    )


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ProjectService = Depends(get_project_service),
) -> MessageResponse:
    await service.delete_project(identity.id, project_id)
    return MessageResponse(message="Project deleted successfully")
