# app/schemas/learning.py
from pydantic import BaseModel, Field
from typing import List, Optional

from schemas.common import Difficulty
from schemas.tutorial import ContentDraft


class GenerateLearningPathReq(BaseModel):
    topic: str = Field(min_length=1)
    difficulty: Difficulty
    operatingSystem: Optional[str] = None


class LessonDraft(BaseModel):
    id: str
    title: str
    description: str


class ModuleDraft(BaseModel):
    id: str
    title: str
    description: str
    lessons: List[LessonDraft] = Field(min_length=1)


class LearningPathDraft(BaseModel):
    title: str
    introduction: str
    modules: List[ModuleDraft] = Field(min_length=1)


class GenerateLearningPathRes(LearningPathDraft):
    id: str
    topic: str
    difficulty: Difficulty
    tokensUsed: int = Field(default=0, ge=0)


class GenerateLessonContentReq(BaseModel):
    pathTitle: str
    moduleTitle: str
    lessonTitle: str
    fullOutline: str
    operatingSystem: Optional[str] = None


class GenerateLessonContentRes(ContentDraft):
    tokensUsed: int = Field(default=0, ge=0)


# persisted aggregate

class LearningLesson(BaseModel):
    id: str
    title: str
    description: str
    content: Optional[str] = None


class LearningModule(BaseModel):
    id: str
    title: str
    description: str
    lessons: List[LearningLesson] = []


class LearningPath(BaseModel):
    id: str
    title: str
    introduction: str
    modules: List[LearningModule] = []
    topic: str
    difficulty: Difficulty

    def find_module(self, module_id: str) -> Optional[LearningModule]:
        return next((m for m in self.modules if m.id == module_id), None)

    def outline(self) -> str:
        lines = [f"# {self.title}", self.introduction, ""]
        for i, module in enumerate(self.modules, start=1):
            lines.append(f"Module {i}: {module.title} - {module.description}")
            for j, lesson in enumerate(module.lessons, start=1):
                lines.append(f"  Lesson {i}.{j}: {lesson.title} - {lesson.description}")
        return "\n".join(lines).strip()
