from typing import List

from fastapi import APIRouter, Depends

from api.deps import get_documents, get_token_usage, get_user_id
from schemas.common import CommonResponse
from schemas.project import Project
from schemas.tutorial import AssistanceReq, AssistanceRes, GenerateTutorialReq
from schemas.usage import ContentFill
from services.assistance import get_personalized_assistance
from services.tutorial_generator import generate_tutorial
from stores.documents import DocumentStore
from stores.projects import ProjectStore
from stores.token_usage import TokenUsageService

router = APIRouter(prefix="/projects")


def get_project_store(
        user_id: str = Depends(get_user_id),
        documents: DocumentStore = Depends(get_documents),
) -> ProjectStore:
    return ProjectStore(user_id, documents)


@router.get("", response_model=CommonResponse[List[Project]])
def list_projects(store: ProjectStore = Depends(get_project_store)):
    return CommonResponse[List[Project]](success=True, code="Success", message="Projects loaded", data=store.load())


@router.post("/generate", response_model=CommonResponse[Project])
def generate_project(
        req: GenerateTutorialReq,
        store: ProjectStore = Depends(get_project_store),
        usage: TokenUsageService = Depends(get_token_usage),
):
    res = generate_tutorial(req)
    usage.add(store.user_id, res.tokensUsed)
    project = store.create_from_tutorial(res)
    return CommonResponse[Project](success=True, code="Success", message="Tutorial generated", data=project)


@router.put("/{project_id}", response_model=CommonResponse[Project])
def update_project(project_id: str, project: Project, store: ProjectStore = Depends(get_project_store)):
    if project.id != project_id:
        project = project.model_copy(update={"id": project_id})
    saved = store.update(project)
    return CommonResponse[Project](success=True, code="Success", message="Project updated", data=saved)


@router.delete("/{project_id}", response_model=CommonResponse[bool])
def delete_project(project_id: str, store: ProjectStore = Depends(get_project_store)):
    return CommonResponse[bool](success=True, code="Success", message="Project deleted", data=store.delete(project_id))


@router.post("/{project_id}/steps/{step_id}/sub-tasks/{sub_task_id}/toggle", response_model=CommonResponse[Project])
def toggle_sub_task(project_id: str, step_id: str, sub_task_id: str, store: ProjectStore = Depends(get_project_store)):
    project = store.toggle_subtask(project_id, step_id, sub_task_id)
    return CommonResponse[Project](success=True, code="Success", message="Sub-task toggled", data=project)


@router.post("/{project_id}/steps/{step_id}/sub-tasks/{sub_task_id}/content",
             response_model=CommonResponse[ContentFill])
def sub_task_content(
        project_id: str,
        step_id: str,
        sub_task_id: str,
        store: ProjectStore = Depends(get_project_store),
        usage: TokenUsageService = Depends(get_token_usage),
):
    fill = store.fill_subtask_content(project_id, step_id, sub_task_id)
    usage.add(store.user_id, fill.tokensUsed)
    return CommonResponse[ContentFill](success=True, code="Success", message=f"Content {fill.state.value}", data=fill)


@router.post("/assistance", response_model=CommonResponse[AssistanceRes])
def personalized_assistance(
        req: AssistanceReq,
        user_id: str = Depends(get_user_id),
        usage: TokenUsageService = Depends(get_token_usage),
):
    res = get_personalized_assistance(req)
    usage.add(user_id, res.tokensUsed)
    return CommonResponse[AssistanceRes](success=True, code="Success", message="Assistance generated", data=res)
