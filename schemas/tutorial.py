from typing import List, Optional

from pydantic import BaseModel, Field

from schemas.common import Difficulty


class GenerateTutorialReq(BaseModel):
    prompt: str = Field(min_length=1)
    difficulty: Difficulty
    operatingSystem: Optional[str] = None


class SubTaskDraft(BaseModel):
    id: str
    title: str
    description: str


class TutorialStepDraft(BaseModel):
    id: str
    title: str
    description: str
    subTasks: List[SubTaskDraft] = Field(min_length=1)


class TutorialDraft(BaseModel):
    """What the model is asked to return for a tutorial outline."""
    title: str
    description: str
    steps: List[TutorialStepDraft] = Field(min_length=1)
    tags: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    simulationDiagram: str = ""


class GenerateTutorialRes(TutorialDraft):
    tokensUsed: int = Field(default=0, ge=0)


class GenerateStepContentReq(BaseModel):
    projectTitle: str
    stepTitle: str
    subTaskTitle: str
    subTaskDescription: str
    fullOutline: str


class ContentDraft(BaseModel):
    content: str = Field(min_length=1)


class GenerateStepContentRes(ContentDraft):
    tokensUsed: int = Field(default=0, ge=0)


class AssistanceReq(BaseModel):
    tutorialStep: str = Field(min_length=1)
    question: str = Field(min_length=10)
    userCode: Optional[str] = None


class AssistanceDraft(BaseModel):
    assistanceMessage: str = Field(min_length=1)


class AssistanceRes(AssistanceDraft):
    tokensUsed: int = Field(default=0, ge=0)
