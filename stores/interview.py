import logging
import uuid
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError as SchemaValidationError

from core.errors import NotFound, ValidationError
from schemas.interview import (
    GenerateInterviewFeedbackRes, InterviewAnswer, InterviewQuestion, InterviewQuestionCreateReq,
)
from stores.documents import DocumentStore
from stores.seed_data import DEFAULT_QUESTIONS
from utils.textutils import now_ms

logger = logging.getLogger(__name__)

ANSWERS = "interviewAnswers"
QUESTIONS = "interviewQuestions"


class InterviewAnswerStore:
    """At most one current answer per (user, question); resubmission overwrites."""

    def __init__(self, documents: DocumentStore):
        self.documents = documents

    def get(self, user_id: str, question_id: str) -> Optional[InterviewAnswer]:
        docs = self.documents.find(ANSWERS, user_id=user_id, questionId=question_id)
        return InterviewAnswer.model_validate(docs[0]) if docs else None

    def list(self, user_id: str) -> List[InterviewAnswer]:
        answers = [InterviewAnswer.model_validate(d) for d in self.documents.find(ANSWERS, user_id=user_id)]
        return sorted(answers, key=lambda a: a.createdAt, reverse=True)

    def save(self, user_id: str, question_id: str, question: str, answer: str,
             feedback: GenerateInterviewFeedbackRes) -> InterviewAnswer:
        now = now_ms()
        existing = self.get(user_id, question_id)
        if existing is None:
            record = InterviewAnswer(
                id=f"{user_id}-{question_id}-{now}",
                userId=user_id,
                questionId=question_id,
                question=question,
                answer=answer,
                feedback=feedback,
                transcript=feedback.transcript,
                createdAt=now,
            )
            self.documents.set(ANSWERS, record.id, record.model_dump(mode="json"), user_id=user_id)
            return record

        record = existing.model_copy(update={
            "question": question,
            "answer": answer,
            "feedback": feedback,
            "transcript": feedback.transcript,
            "createdAt": max(now, existing.createdAt + 1),
        })
        self.documents.update(ANSWERS, record.id, record.model_dump(mode="json"))
        return record


class QuestionStore:

    def __init__(self, documents: DocumentStore):
        self.documents = documents

    def list(self) -> List[InterviewQuestion]:
        questions = [InterviewQuestion.model_validate(d) for d in self.documents.find(QUESTIONS)]
        return sorted(questions, key=lambda q: q.question)

    def get(self, question_id: str) -> InterviewQuestion:
        doc = self.documents.get(QUESTIONS, question_id)
        if doc is None:
            logger.warning("No question found with id: %s", question_id)
            raise NotFound(f"question {question_id} not found")
        return InterviewQuestion.model_validate(doc)

    def add(self, req: InterviewQuestionCreateReq) -> InterviewQuestion:
        doc_id = uuid.uuid4().hex
        question = InterviewQuestion(id=doc_id, **req.model_dump())
        self.documents.set(QUESTIONS, doc_id, question.model_dump(mode="json"))
        return question

    def bulk_load(self, raw_questions: Iterable[Any]) -> int:
        """Validate every question first, then write them all in one batch."""
        items = []
        for i, raw in enumerate(raw_questions):
            if not isinstance(raw, dict):
                raise ValidationError(f"question #{i} is invalid: expected an object")
            try:
                req = InterviewQuestionCreateReq.model_validate(raw)
                question = InterviewQuestion(id=raw.get("id") or uuid.uuid4().hex, **req.model_dump())
            except SchemaValidationError as e:
                raise ValidationError(f"question #{i} is invalid: {e.errors()[0]['msg']}") from e
            items.append((question.id, question.model_dump(mode="json")))
        return self.documents.set_many(QUESTIONS, items)

    def seed_defaults(self) -> int:
        if self.documents.find(QUESTIONS):
            return 0
        logger.info("No questions found, seeding initial data...")
        return self.bulk_load(DEFAULT_QUESTIONS)
