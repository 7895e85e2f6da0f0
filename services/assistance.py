from schemas.tutorial import AssistanceDraft, AssistanceReq, AssistanceRes
from services.flow_runner import render_prompt, run_flow

SYSTEM = (
    "You are a patient teaching assistant. Never hand out the complete solution. "
    "Respond only with a single JSON object that matches the requested schema."
)


def get_personalized_assistance(req: AssistanceReq) -> AssistanceRes:
    user_msg = render_prompt(
        "assistance_prompt.j2",
        AssistanceDraft,
        tutorial_step=req.tutorialStep,
        question=req.question,
        user_code=(req.userCode or "").strip() or None,
    )
    draft, tokens = run_flow("personalized_assistance", AssistanceDraft, SYSTEM, user_msg)
    return AssistanceRes(assistanceMessage=draft.assistanceMessage, tokensUsed=tokens)
