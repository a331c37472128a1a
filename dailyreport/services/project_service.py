"""프로젝트 서비스 (Project CRUD within the caller's scope)."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.mission import Project
from dailyreport.repositories.mission_repository import project_repository
from dailyreport.schemas.mission import ProjectCreate, ProjectResponse, ProjectUpdate
from dailyreport.services.organization_service import parse_uuid
from dailyreport.utils.aggregation import filter_projects
from dailyreport.utils.exceptions import NotFoundError
from dailyreport.utils.scope import OPERATOR, Principal, Scope, narrow_scope, resolve_scope


class ProjectService:
    def _to_response(self, project: Project) -> ProjectResponse:
        return ProjectResponse(
            id=str(project.id),
            company_id=str(project.company_id),
            project_name=project.project_name,
            department=project.department,
            manager=project.manager,
            target_end_date=project.target_end_date,
            revised_end_date=project.revised_end_date,
            status=project.status,
            progress_rate=project.progress_rate,
            main_issues=project.main_issues,
            detailed_progress=project.detailed_progress,
            created_at=project.created_at,
        )

    async def list_projects(
        self,
        db: AsyncSession,
        principal: Principal,
        department: str | None = None,
        status: str | None = None,
        name_query: str | None = None,
        company_id: UUID | None = None,
    ) -> list[ProjectResponse]:
        """범위 안의 프로젝트 목록, 부서/상태/이름 필터 적용."""
        scope: Scope | None = narrow_scope(resolve_scope(principal), company_id)
        if scope is None:
            return []
        projects: list[Project] = await project_repository.list_scoped(db, scope)
        return [self._to_response(p) for p in filter_projects(projects, department, status, name_query)]

    async def _get_project(self, db: AsyncSession, principal: Principal, project_id: UUID) -> Project:
        project: Project | None = await project_repository.get_by_id(db, project_id)
        if project is None or not resolve_scope(principal).allows(project.company_id, project.department):
            raise NotFoundError("프로젝트를 찾을 수 없습니다.")
        return project

    async def create_project(
        self,
        db: AsyncSession,
        principal: Principal,
        data: ProjectCreate,
    ) -> ProjectResponse:
        company_id: UUID = principal.company_id
        if principal.role == OPERATOR and data.company_id:
            company_id = parse_uuid(data.company_id, "회사 ID")
        values: dict[str, Any] = data.model_dump(exclude={"company_id"})
        values["company_id"] = company_id
        project: Project = await project_repository.create(db, values)
        return self._to_response(project)

    async def update_project(
        self,
        db: AsyncSession,
        principal: Principal,
        project_id: UUID,
        data: ProjectUpdate,
    ) -> ProjectResponse:
        project: Project = await self._get_project(db, principal, project_id)
        # revised_end_date는 null로 지울 수 있음 (revised_end_date may be cleared)
        update_data: dict[str, Any] = {
            k: v for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k == "revised_end_date"
        }
        updated: Project | None = await project_repository.update(db, project.id, update_data)
        return self._to_response(updated)

    async def delete_project(self, db: AsyncSession, principal: Principal, project_id: UUID) -> None:
        project: Project = await self._get_project(db, principal, project_id)
        await project_repository.delete(db, project.id)


# 싱글턴 인스턴스 (Singleton instance)
project_service: ProjectService = ProjectService()
