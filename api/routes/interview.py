from typing import List

from fastapi import APIRouter, Depends

from api.deps import get_documents, get_token_usage, get_user_id
from schemas.common import CommonResponse
from schemas.interview import (
    GenerateInterviewFeedbackReq, InterviewAnswer, InterviewAnswerReq,
    InterviewQuestion, InterviewQuestionCreateReq,
)
from services.answer_generator import generate_interview_feedback
from stores.documents import DocumentStore
from stores.interview import InterviewAnswerStore, QuestionStore
from stores.token_usage import TokenUsageService

router = APIRouter(prefix="/interview")


@router.get("/questions", response_model=CommonResponse[List[InterviewQuestion]])
def list_questions(documents: DocumentStore = Depends(get_documents)):
    return CommonResponse[List[InterviewQuestion]](
        success=True, code="Success", message="Questions loaded", data=QuestionStore(documents).list()
    )


@router.get("/questions/{question_id}", response_model=CommonResponse[InterviewQuestion])
def get_question(question_id: str, documents: DocumentStore = Depends(get_documents)):
    return CommonResponse[InterviewQuestion](
        success=True, code="Success", message="Question loaded", data=QuestionStore(documents).get(question_id)
    )


@router.post("/questions", response_model=CommonResponse[InterviewQuestion])
def add_question(req: InterviewQuestionCreateReq, documents: DocumentStore = Depends(get_documents)):
    return CommonResponse[InterviewQuestion](
        success=True, code="Success", message="Question added", data=QuestionStore(documents).add(req)
    )


@router.post("/questions/{question_id}/answer", response_model=CommonResponse[InterviewAnswer])
def answer_question(
        question_id: str,
        req: InterviewAnswerReq,
        user_id: str = Depends(get_user_id),
        documents: DocumentStore = Depends(get_documents),
        usage: TokenUsageService = Depends(get_token_usage),
):
    question = QuestionStore(documents).get(question_id)
    feedback = generate_interview_feedback(GenerateInterviewFeedbackReq(
        question=question.question,
        answerText=req.answerText,
        answerAudio=req.answerAudio,
    ))
    usage.add(user_id, feedback.tokensUsed)

    answer = (req.answerText or "").strip() or feedback.transcript
    saved = InterviewAnswerStore(documents).save(user_id, question_id, question.question, answer, feedback)
    return CommonResponse[InterviewAnswer](success=True, code="Success", message="Feedback generated", data=saved)


@router.get("/answers", response_model=CommonResponse[List[InterviewAnswer]])
def list_answers(user_id: str = Depends(get_user_id), documents: DocumentStore = Depends(get_documents)):
    return CommonResponse[List[InterviewAnswer]](
        success=True, code="Success", message="Answers loaded", data=InterviewAnswerStore(documents).list(user_id)
    )
