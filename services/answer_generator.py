import logging
from typing import Any, Dict, List

from core.config import settings
from core.errors import ValidationError
from schemas.interview import (
    NOT_APPLICABLE, AudioFeedbackDraft, CriterionRating, DeliveryAnalysis,
    GenerateInterviewFeedbackReq, GenerateInterviewFeedbackRes, TextFeedbackDraft,
)
from services.flow_runner import render_prompt, run_flow
from utils.datauri import parse_data_uri

logger = logging.getLogger(__name__)

SYSTEM = (
    "You are a senior interview coach. Respond only with a single JSON object "
    "that matches the requested schema; anything else invalidates the evaluation."
)

# input_audio accepts wav and mp3 only
AUDIO_FORMATS = {
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/vnd.wave": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
}


def not_applicable(criterion: str) -> CriterionRating:
    return CriterionRating(
        rating=NOT_APPLICABLE,
        reason=f"{criterion} can only be judged from a spoken answer.",
    )


def _audio_part(answer_audio: str) -> Dict[str, Any]:
    try:
        mime, payload = parse_data_uri(answer_audio)
    except ValueError as e:
        raise ValidationError(f"answerAudio is not a valid audio data URI: {e}") from e
    fmt = AUDIO_FORMATS.get(mime)
    if fmt is None:
        raise ValidationError(f"unsupported audio format {mime!r}; use wav or mp3")
    return {"type": "input_audio", "input_audio": {"data": payload, "format": fmt}}


def _from_audio(req: GenerateInterviewFeedbackReq) -> GenerateInterviewFeedbackRes:
    audio = _audio_part(req.answerAudio)
    prompt = render_prompt(
        "interview_feedback_prompt.j2",
        AudioFeedbackDraft,
        question=req.question,
        has_audio=True,
        answer_text=None,
    )
    content: List[Dict[str, Any]] = [{"type": "text", "text": prompt}, audio]
    draft, tokens = run_flow(
        "generate_interview_feedback",
        AudioFeedbackDraft,
        SYSTEM,
        content,
        model=settings.audio_model,
        json_mode=False,
    )
    return GenerateInterviewFeedbackRes(**draft.model_dump(), tokensUsed=tokens)


def _from_text(req: GenerateInterviewFeedbackReq) -> GenerateInterviewFeedbackRes:
    answer = req.answerText.strip()
    prompt = render_prompt(
        "interview_feedback_prompt.j2",
        TextFeedbackDraft,
        question=req.question,
        has_audio=False,
        answer_text=answer,
    )
    draft, tokens = run_flow("generate_interview_feedback", TextFeedbackDraft, SYSTEM, prompt)

    # delivery criteria are not fabricated for typed answers
    analysis = DeliveryAnalysis(
        clarity=draft.analysis.clarity,
        relevance=draft.analysis.relevance,
        fillerWords=not_applicable("Filler word usage"),
        pacing=not_applicable("Pacing"),
        confidence=not_applicable("Vocal confidence"),
    )
    return GenerateInterviewFeedbackRes(
        feedback=draft.feedback,
        score=draft.score,
        transcript=answer,
        analysis=analysis,
        tokensUsed=tokens,
    )


def generate_interview_feedback(req: GenerateInterviewFeedbackReq) -> GenerateInterviewFeedbackRes:
    has_text = bool(req.answerText and req.answerText.strip())
    has_audio = bool(req.answerAudio and req.answerAudio.strip())
    if not has_text and not has_audio:
        raise ValidationError("an answer is required: provide answerText or answerAudio")

    if has_audio:
        logger.info("Scoring spoken answer (%d base64 chars)", len(req.answerAudio))
        return _from_audio(req)
    return _from_text(req)
