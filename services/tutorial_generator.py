from schemas.tutorial import GenerateTutorialReq, GenerateTutorialRes, TutorialDraft
from services.flow_runner import render_prompt, run_flow

SYSTEM = (
    "You are an expert tutorial generator for software developers. "
    "Respond only with a single JSON object that matches the requested schema."
)


def generate_tutorial(req: GenerateTutorialReq) -> GenerateTutorialRes:
    user_msg = render_prompt(
        "tutorial_prompt.j2",
        TutorialDraft,
        prompt=req.prompt,
        difficulty=req.difficulty.value,
        operating_system=req.operatingSystem,
    )
    draft, tokens = run_flow("generate_tutorial", TutorialDraft, SYSTEM, user_msg)
    return GenerateTutorialRes(**draft.model_dump(), tokensUsed=tokens)
