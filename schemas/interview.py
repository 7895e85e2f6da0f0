from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from schemas.common import Difficulty

NOT_APPLICABLE = "N/A"


class GenerateInterviewFeedbackReq(BaseModel):
    question: str = Field(min_length=1)
    answerText: Optional[str] = None
    # data:audio/<fmt>;base64,<payload>
    answerAudio: Optional[str] = None


class CriterionRating(BaseModel):
    rating: str
    reason: str


class ContentAnalysis(BaseModel):
    clarity: CriterionRating
    relevance: CriterionRating


class DeliveryAnalysis(ContentAnalysis):
    fillerWords: CriterionRating
    pacing: CriterionRating
    confidence: CriterionRating


class TextFeedbackDraft(BaseModel):
    """Model output for a typed answer: content criteria only."""
    feedback: str = Field(min_length=1)
    score: int = Field(ge=0, le=100)
    analysis: ContentAnalysis


class AudioFeedbackDraft(BaseModel):
    """Model output for a spoken answer: transcript plus all five criteria."""
    feedback: str = Field(min_length=1)
    score: int = Field(ge=0, le=100)
    transcript: str
    analysis: DeliveryAnalysis


class GenerateInterviewFeedbackRes(BaseModel):
    feedback: str
    score: int = Field(ge=0, le=100)
    transcript: str
    analysis: DeliveryAnalysis
    tokensUsed: int = Field(default=0, ge=0)


class InterviewQuestion(BaseModel):
    id: str
    question: str
    category: Literal["Behavioral", "Technical"]
    type: Literal["General", "Backend", "Frontend", "Full Stack", "DevOps"]
    difficulty: Difficulty
    company: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class InterviewQuestionCreateReq(BaseModel):
    question: str = Field(min_length=1)
    category: Literal["Behavioral", "Technical"]
    type: Literal["General", "Backend", "Frontend", "Full Stack", "DevOps"]
    difficulty: Difficulty
    company: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class InterviewAnswerReq(BaseModel):
    answerText: Optional[str] = None
    answerAudio: Optional[str] = None


class InterviewAnswer(BaseModel):
    id: str
    userId: str
    questionId: str
    question: str
    answer: str
    feedback: GenerateInterviewFeedbackRes
    transcript: Optional[str] = None
    createdAt: int
