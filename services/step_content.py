from schemas.tutorial import ContentDraft, GenerateStepContentReq, GenerateStepContentRes
from services.flow_runner import render_prompt, run_flow

SYSTEM = (
    "You are an expert technical writer for software development tutorials. "
    "Respond only with a single JSON object that matches the requested schema."
)


def generate_step_content(req: GenerateStepContentReq) -> GenerateStepContentRes:
    user_msg = render_prompt(
        "step_content_prompt.j2",
        ContentDraft,
        project_title=req.projectTitle,
        step_title=req.stepTitle,
        sub_task_title=req.subTaskTitle,
        sub_task_description=req.subTaskDescription,
        full_outline=req.fullOutline,
    )
    draft, tokens = run_flow("generate_step_content", ContentDraft, SYSTEM, user_msg)
    return GenerateStepContentRes(content=draft.content, tokensUsed=tokens)
