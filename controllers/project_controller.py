from fastapi import Request
from typing import Dict, Any, Optional
from datetime import datetime
import logging
from bson import ObjectId
from beanie import PydanticObjectId
from database.models import Project
from middleware.auth import require_owner
from middleware.errors import (
    InvalidParameter,
    ValidationFailure,
    Forbidden,
    NotFound,
    PersistenceFailure,
)
from services import query_builder
from services.validators import ProjectValidator
from config import variable

logger = logging.getLogger("craftcode.projects")

SEARCH_FIELDS = ("title", "description", "category")


class ProjectController:
    """Controller for project CRUD"""

    def __init__(self):
        self.validator = ProjectValidator()

    async def list_projects(
        self,
        page: Optional[str] = None,
        limit: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        page_number, page_size = query_builder.parse_pagination(
            page, limit, default_limit=variable.DEFAULT_PAGE_LIMIT
        )
        query = query_builder.build_filter(search, SEARCH_FIELDS)

        try:
            total_projects = await Project.find(query).count()
            projects = await (
                Project.find(query)
                .sort("-createdAt")
                .skip(query_builder.skip_for(page_number, page_size))
                .limit(page_size)
                .to_list()
            )
        except Exception:
            logger.exception(f"Fetch projects error (query={query})")
            raise PersistenceFailure("Failed to fetch projects")

        return {
            "projects": [project.to_response() for project in projects],
            "totalPages": query_builder.total_pages(total_projects, page_size),
            "currentPage": page_number,
        }

    async def get_by_slug(self, slug: str) -> Dict[str, Any]:
        if not slug:
            raise InvalidParameter("Slug is required")
        try:
            project = await Project.find_one({"slug": slug})
        except Exception:
            logger.exception(f"Fetch project error for slug={slug}")
            raise PersistenceFailure("Failed to fetch project")
        if not project:
            raise NotFound("Project not found")
        return project.to_response()

    async def create_project(self, payload: Any, current_user: Dict[str, Any]) -> Dict[str, Any]:
        data = self.validator.validate(payload, require_author=True)

        if data.author != current_user.get("user_id"):
            raise Forbidden("You can only create projects for yourself")

        try:
            if await Project.find_one({"slug": data.slug}):
                raise ValidationFailure("A project with this slug already exists")

            now = datetime.now()
            project = Project(**data.model_dump(), created_at=now, updated_at=now)
            await project.insert()
        except ValidationFailure:
            raise
        except Exception:
            logger.exception(f"Create project error for slug={data.slug}")
            raise PersistenceFailure("Failed to create project")

        if project.id is None:
            raise PersistenceFailure("Failed to create project")

        logger.info(f"Project {project.id} ({project.slug}) created by {project.author}")
        return project.to_response()

    async def _load(self, project_id: str) -> Project:
        if not ObjectId.is_valid(project_id):
            raise InvalidParameter("Invalid project ID")
        try:
            project = await Project.get(PydanticObjectId(project_id))
        except Exception:
            logger.exception(f"Load project error for id={project_id}")
            raise PersistenceFailure("Failed to load project")
        if not project:
            raise NotFound("Project not found")
        return project

    async def update_project(self, project_id: str, payload: Any, request: Request) -> Dict[str, Any]:
        if not ObjectId.is_valid(project_id):
            raise InvalidParameter("Invalid project ID")
        data = self.validator.validate(payload, require_author=False)

        project = await self._load(project_id)
        require_owner(request, project.author, "update this project")

        try:
            duplicate = await Project.find_one(
                {"slug": data.slug, "_id": {"$ne": project.id}}
            )
            if duplicate:
                raise ValidationFailure("A project with this slug already exists")

            # author and createdAt belong to the stored document
            for key in type(data).model_fields:
                if key != "author":
                    setattr(project, key, getattr(data, key))
            project.updated_at = datetime.now()
            await project.save()
        except ValidationFailure:
            raise
        except Exception:
            logger.exception(f"Update project error for id={project_id}")
            raise PersistenceFailure("Failed to update project")

        logger.info(f"Project {project_id} updated by {project.author}")
        return project.to_response()

    async def delete_project(self, project_id: str, request: Request) -> Dict[str, Any]:
        project = await self._load(project_id)
        require_owner(request, project.author, "delete this project")

        try:
            await project.delete()
        except Exception:
            logger.exception(f"Delete project error for id={project_id}")
            raise PersistenceFailure("Failed to delete project")

        logger.info(f"Project {project_id} deleted by {project.author}")
        return {"success": True, "message": "Project deleted successfully"}
