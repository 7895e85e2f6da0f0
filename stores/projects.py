from typing import Callable, List, Optional, Tuple

from core.errors import NotFound
from schemas.project import Project, SubTask, TutorialStep
from schemas.tutorial import GenerateStepContentReq, GenerateStepContentRes, GenerateTutorialRes
from schemas.usage import ContentFill
from services.step_content import generate_step_content
from stores.aggregates import AggregateStore
from stores.content_guard import ContentGuard
from stores.documents import DocumentStore
from stores.seed_data import default_projects
from utils.textutils import now_ms, slugify

PROJECT_IMAGE = "https://placehold.co/600x400.png"


def _locate(project: Project, step_id: str, sub_task_id: str) -> Tuple[TutorialStep, SubTask]:
    step = project.find_step(step_id)
    if step is None:
        raise NotFound(f"step {step_id} not found in project {project.id}")
    for st in step.subTasks:
        if st.id == sub_task_id:
            return step, st
    raise NotFound(f"sub-task {sub_task_id} not found in step {step_id}")


def project_from_tutorial(res: GenerateTutorialRes) -> Project:
    return Project(
        id=f"{slugify(res.title)}-{now_ms()}",
        title=res.title,
        description=res.description,
        image=PROJECT_IMAGE,
        dataAiHint=" ".join(res.title.lower().split()[:2]),
        steps=[
            TutorialStep(
                id=s.id,
                title=s.title,
                description=s.description,
                subTasks=[SubTask(id=st.id, title=st.title, description=st.description) for st in s.subTasks],
            )
            for s in res.steps
        ],
        tags=res.tags,
        skills=res.skills,
        simulationDiagram=res.simulationDiagram or None,
    )


class ProjectStore(AggregateStore[Project]):
    collection = "projects"
    model = Project

    def __init__(
            self,
            user_id: str,
            documents: DocumentStore,
            generate_content: Callable[[GenerateStepContentReq], GenerateStepContentRes] = generate_step_content,
            guard: Optional[ContentGuard] = None,
    ):
        super().__init__(user_id, documents, guard=guard)
        self.generate_content = generate_content

    def default_items(self) -> List[Project]:
        return default_projects()

    def create_from_tutorial(self, res: GenerateTutorialRes) -> Project:
        return self.add(project_from_tutorial(res))

    def toggle_subtask(self, project_id: str, step_id: str, sub_task_id: str) -> Project:
        def _toggle(project: Project) -> None:
            step, sub_task = _locate(project, step_id, sub_task_id)
            sub_task.completed = not sub_task.completed
            step.completed = all(st.completed for st in step.subTasks)

        return self._mutate(project_id, _toggle)

    def fill_subtask_content(self, project_id: str, step_id: str, sub_task_id: str) -> ContentFill:
        def _child(project: Project):
            step, sub_task = _locate(project, step_id, sub_task_id)
            req = GenerateStepContentReq(
                projectTitle=project.title,
                stepTitle=step.title,
                subTaskTitle=sub_task.title,
                subTaskDescription=sub_task.description,
                fullOutline=project.outline(),
            )
            return sub_task, req

        return self._materialize(project_id, f"{step_id}/{sub_task_id}", _child, self.generate_content)
