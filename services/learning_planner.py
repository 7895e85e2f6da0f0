from schemas.learning import (
    GenerateLearningPathReq, GenerateLearningPathRes, LearningPathDraft,
    GenerateLessonContentReq, GenerateLessonContentRes,
)
from schemas.tutorial import ContentDraft
from services.flow_runner import render_prompt, run_flow
from utils.textutils import now_ms, slugify

SYSTEM = (
    "You are a senior curriculum designer. "
    "Respond only with a single JSON object that matches the requested schema."
)
WRITER_SYSTEM = (
    "You are an expert technical writer. "
    "Respond only with a single JSON object that matches the requested schema."
)


def _path_id(topic: str, difficulty: str) -> str:
    return f"{slugify(topic)}-{difficulty.lower()}-{now_ms()}"


def build_learning_path(req: GenerateLearningPathReq) -> GenerateLearningPathRes:
    user_msg = render_prompt(
        "learning_path_prompt.j2",
        LearningPathDraft,
        topic=req.topic,
        difficulty=req.difficulty.value,
        operating_system=req.operatingSystem,
    )
    draft, tokens = run_flow("generate_learning_path", LearningPathDraft, SYSTEM, user_msg)

    return GenerateLearningPathRes(
        **draft.model_dump(),
        id=_path_id(req.topic, req.difficulty.value),
        topic=req.topic,
        difficulty=req.difficulty,
        tokensUsed=tokens,
    )


def generate_lesson_content(req: GenerateLessonContentReq) -> GenerateLessonContentRes:
    user_msg = render_prompt(
        "lesson_content_prompt.j2",
        ContentDraft,
        path_title=req.pathTitle,
        module_title=req.moduleTitle,
        lesson_title=req.lessonTitle,
        full_outline=req.fullOutline,
        operating_system=req.operatingSystem,
    )
    draft, tokens = run_flow("generate_lesson_content", ContentDraft, WRITER_SYSTEM, user_msg)
    return GenerateLessonContentRes(content=draft.content, tokensUsed=tokens)
