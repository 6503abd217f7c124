from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException

from portfolio_api.api.deps import (
    get_current_user,
    get_manage_experiences_use_case,
    get_manage_projects_use_case,
    get_manage_services_use_case,
    get_manage_skills_use_case,
)
from portfolio_api.api.schemas.base import SuccessResponse
from portfolio_api.api.schemas.content import (
    ExperienceCreateRequest,
    ExperienceResponse,
    ExperienceUpdateRequest,
    ProjectCreateRequest,
    ProjectResponse,
    ProjectUpdateRequest,
    ServiceCreateRequest,
    ServiceResponse,
    ServiceUpdateRequest,
    SkillCreateRequest,
    SkillResponse,
    SkillUpdateRequest,
)
from portfolio_api.application.use_cases.manage_content import (
    ManageExperiencesUseCase,
    ManageProjectsUseCase,
    ManageServicesUseCase,
    ManageSkillsUseCase,
)
from portfolio_api.domain.entities.content import (
    ExperienceDraft,
    ExperiencePatch,
    ProjectDraft,
    ProjectPatch,
    ServiceDraft,
    ServicePatch,
    SkillDraft,
    SkillPatch,
)
from portfolio_api.domain.entities.user import User
from portfolio_api.domain.exceptions import (
    ContentInputError,
    ContentNotFoundError,
    SlugAlreadyExistsError,
)


router = APIRouter(prefix="/api", tags=["content"])


@contextmanager
def content_errors() -> Iterator[None]:
    """Map content use case failures onto HTTP errors."""
    try:
        yield
    except ContentNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (ContentInputError, SlugAlreadyExistsError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def draft_fields(req) -> dict:
    values = req.model_dump()
    return {key: tuple(value) if isinstance(value, list) else value for key, value in values.items()}


@router.get("/skills", response_model=list[SkillResponse])
def list_skills(use_case: ManageSkillsUseCase = Depends(get_manage_skills_use_case)):
    return [SkillResponse(**vars(skill)) for skill in use_case.list()]


@router.post("/skills", response_model=SkillResponse, status_code=201)
def create_skill(
    req: SkillCreateRequest,
    _user: User = Depends(get_current_user),
    use_case: ManageSkillsUseCase = Depends(get_manage_skills_use_case),
):
    with content_errors():
        skill = use_case.create(SkillDraft(**draft_fields(req)))
    return SkillResponse(**vars(skill))


@router.patch("/skills/{skill_id}", response_model=SkillResponse)
def update_skill(
    skill_id: str,
    req: SkillUpdateRequest,
    _user: User = Depends(get_current_user),
    use_case: ManageSkillsUseCase = Depends(get_manage_skills_use_case),
):
    with content_errors():
        skill = use_case.update(skill_id, SkillPatch(**req.changes()))
    return SkillResponse(**vars(skill))


@router.delete("/skills/{skill_id}", response_model=SuccessResponse)
def delete_skill(
    skill_id: str,
    _user: User = Depends(get_current_user),
    use_case: ManageSkillsUseCase = Depends(get_manage_skills_use_case),
):
    with content_errors():
        use_case.delete(skill_id)
    return SuccessResponse()


@router.get("/services", response_model=list[ServiceResponse])
def list_services(use_case: ManageServicesUseCase = Depends(get_manage_services_use_case)):
    return [ServiceResponse(**vars(service)) for service in use_case.list()]


@router.post("/services", response_model=ServiceResponse, status_code=201)
def create_service(
    req: ServiceCreateRequest,
    _user: User = Depends(get_current_user),
    use_case: ManageServicesUseCase = Depends(get_manage_services_use_case),
):
    with content_errors():
        service = use_case.create(ServiceDraft(**draft_fields(req)))
    return ServiceResponse(**vars(service))


@router.patch("/services/{service_id}", response_model=ServiceResponse)
def update_service(
    service_id: str,
    req: ServiceUpdateRequest,
    _user: User = Depends(get_current_user),
    use_case: ManageServicesUseCase = Depends(get_manage_services_use_case),
):
    with content_errors():
        service = use_case.update(service_id, ServicePatch(**req.changes()))
    return ServiceResponse(**vars(service))


@router.delete("/services/{service_id}", response_model=SuccessResponse)
def delete_service(
    service_id: str,
    _user: User = Depends(get_current_user),
    use_case: ManageServicesUseCase = Depends(get_manage_services_use_case),
):
    with content_errors():
        use_case.delete(service_id)
    return SuccessResponse()


@router.get("/projects", response_model=list[ProjectResponse])
def list_projects(use_case: ManageProjectsUseCase = Depends(get_manage_projects_use_case)):
    return [ProjectResponse(**vars(project)) for project in use_case.list()]


@router.get("/projects/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: str,
    use_case: ManageProjectsUseCase = Depends(get_manage_projects_use_case),
):
    with content_errors():
        project = use_case.get(project_id)
    return ProjectResponse(**vars(project))


@router.post("/projects", response_model=ProjectResponse, status_code=201)
def create_project(
    req: ProjectCreateRequest,
    _user: User = Depends(get_current_user),
    use_case: ManageProjectsUseCase = Depends(get_manage_projects_use_case),
):
    with content_errors():
        project = use_case.create(ProjectDraft(**draft_fields(req)))
    return ProjectResponse(**vars(project))


@router.patch("/projects/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    req: ProjectUpdateRequest,
    _user: User = Depends(get_current_user),
    use_case: ManageProjectsUseCase = Depends(get_manage_projects_use_case),
):
    with content_errors():
        project = use_case.update(project_id, ProjectPatch(**req.changes()))
    return ProjectResponse(**vars(project))


@router.delete("/projects/{project_id}", response_model=SuccessResponse)
def delete_project(
    project_id: str,
    _user: User = Depends(get_current_user),
    use_case: ManageProjectsUseCase = Depends(get_manage_projects_use_case),
):
    with content_errors():
        use_case.delete(project_id)
    return SuccessResponse()


@router.get("/experiences", response_model=list[ExperienceResponse])
def list_experiences(use_case: ManageExperiencesUseCase = Depends(get_manage_experiences_use_case)):
    return [ExperienceResponse(**vars(experience)) for experience in use_case.list()]


@router.post("/experiences", response_model=ExperienceResponse, status_code=201)
def create_experience(
    req: ExperienceCreateRequest,
    _user: User = Depends(get_current_user),
    use_case: ManageExperiencesUseCase = Depends(get_manage_experiences_use_case),
):
    with content_errors():
        experience = use_case.create(ExperienceDraft(**draft_fields(req)))
    return ExperienceResponse(**vars(experience))


@router.patch("/experiences/{experience_id}", response_model=ExperienceResponse)
def update_experience(
    experience_id: str,
    req: ExperienceUpdateRequest,
    _user: User = Depends(get_current_user),
    use_case: ManageExperiencesUseCase = Depends(get_manage_experiences_use_case),
):
    with content_errors():
        experience = use_case.update(experience_id, ExperiencePatch(**req.changes()))
    return ExperienceResponse(**vars(experience))


@router.delete("/experiences/{experience_id}", response_model=SuccessResponse)
def delete_experience(
    experience_id: str,
    _user: User = Depends(get_current_user),
    use_case: ManageExperiencesUseCase = Depends(get_manage_experiences_use_case),
):
    with content_errors():
        use_case.delete(experience_id)
    return SuccessResponse()
