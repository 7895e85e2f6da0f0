from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_documents, get_token_usage, get_user_id
from schemas.common import CommonResponse
from schemas.learning import GenerateLearningPathReq, LearningPath
from schemas.usage import ContentFill
from services.learning_planner import build_learning_path
from stores.documents import DocumentStore
from stores.learning_paths import LearningPathStore
from stores.token_usage import TokenUsageService

router = APIRouter(prefix="/learning-paths")


def get_learning_path_store(
        user_id: str = Depends(get_user_id),
        documents: DocumentStore = Depends(get_documents),
) -> LearningPathStore:
    return LearningPathStore(user_id, documents)


@router.get("", response_model=CommonResponse[List[LearningPath]])
def list_learning_paths(store: LearningPathStore = Depends(get_learning_path_store)):
    return CommonResponse[List[LearningPath]](
        success=True, code="Success", message="Learning paths loaded", data=store.load()
    )


@router.post("/generate", response_model=CommonResponse[LearningPath])
def generate_learning_path(
        req: GenerateLearningPathReq,
        store: LearningPathStore = Depends(get_learning_path_store),
        usage: TokenUsageService = Depends(get_token_usage),
):
    res = build_learning_path(req)
    usage.add(store.user_id, res.tokensUsed)
    path = store.create_from_learning_path(res)
    return CommonResponse[LearningPath](success=True, code="Success", message="Learning path generated", data=path)


@router.delete("/{path_id}", response_model=CommonResponse[bool])
def delete_learning_path(path_id: str, store: LearningPathStore = Depends(get_learning_path_store)):
    return CommonResponse[bool](
        success=True, code="Success", message="Learning path deleted", data=store.delete(path_id)
    )


@router.post("/{path_id}/modules/{module_id}/lessons/{lesson_id}/content",
             response_model=CommonResponse[ContentFill])
def lesson_content(
        path_id: str,
        module_id: str,
        lesson_id: str,
        operating_system: Optional[str] = Query(default=None, alias="os"),
        store: LearningPathStore = Depends(get_learning_path_store),
        usage: TokenUsageService = Depends(get_token_usage),
):
    fill = store.fill_lesson_content(path_id, module_id, lesson_id, operating_system=operating_system)
    usage.add(store.user_id, fill.tokensUsed)
    return CommonResponse[ContentFill](success=True, code="Success", message=f"Content {fill.state.value}", data=fill)
