from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class SubTask(BaseModel):
    id: str
    title: str
    description: str
    completed: bool = False
    content: Optional[str] = None


class TutorialStep(BaseModel):
    id: str
    title: str
    description: str = ""
    subTasks: List[SubTask] = Field(default_factory=list)
    completed: bool = False

    @model_validator(mode="after")
    def _sync_completed(self):
        # a step is done exactly when all of its sub-tasks are
        if self.subTasks:
            self.completed = all(st.completed for st in self.subTasks)
        return self


class Project(BaseModel):
    id: str
    title: str
    description: str
    image: str = ""
    dataAiHint: Optional[str] = None
    steps: List[TutorialStep] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    simulationDiagram: Optional[str] = None

    def find_step(self, step_id: str) -> Optional[TutorialStep]:
        return next((s for s in self.steps if s.id == step_id), None)

    def outline(self) -> str:
        """Plain-text outline handed to content flows as context."""
        lines = [f"# {self.title}", self.description, ""]
        for i, step in enumerate(self.steps, start=1):
            lines.append(f"{i}. {step.title}: {step.description}")
            for j, st in enumerate(step.subTasks, start=1):
                lines.append(f"   {i}.{j} {st.title}: {st.description}")
        return "\n".join(lines).strip()
