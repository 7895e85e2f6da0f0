from typing import Callable, List, Optional, Tuple

from core.errors import NotFound
from schemas.learning import (
    GenerateLearningPathRes, GenerateLessonContentReq, GenerateLessonContentRes,
    LearningLesson, LearningModule, LearningPath,
)
from schemas.usage import ContentFill
from services.learning_planner import generate_lesson_content
from stores.aggregates import AggregateStore
from stores.content_guard import ContentGuard
from stores.documents import DocumentStore
from stores.seed_data import default_learning_paths


def _locate(path: LearningPath, module_id: str, lesson_id: str) -> Tuple[LearningModule, LearningLesson]:
    module = path.find_module(module_id)
    if module is None:
        raise NotFound(f"module {module_id} not found in learning path {path.id}")
    for lesson in module.lessons:
        if lesson.id == lesson_id:
            return module, lesson
    raise NotFound(f"lesson {lesson_id} not found in module {module_id}")


def path_from_response(res: GenerateLearningPathRes) -> LearningPath:
    return LearningPath(
        id=res.id,
        title=res.title,
        introduction=res.introduction,
        modules=[
            LearningModule(
                id=m.id,
                title=m.title,
                description=m.description,
                lessons=[LearningLesson(id=l.id, title=l.title, description=l.description) for l in m.lessons],
            )
            for m in res.modules
        ],
        topic=res.topic,
        difficulty=res.difficulty,
    )


class LearningPathStore(AggregateStore[LearningPath]):
    collection = "learningPaths"
    model = LearningPath

    def __init__(
            self,
            user_id: str,
            documents: DocumentStore,
            generate_content: Callable[[GenerateLessonContentReq], GenerateLessonContentRes] = generate_lesson_content,
            guard: Optional[ContentGuard] = None,
    ):
        super().__init__(user_id, documents, guard=guard)
        self.generate_content = generate_content

    def default_items(self) -> List[LearningPath]:
        return default_learning_paths()

    def create_from_learning_path(self, res: GenerateLearningPathRes) -> LearningPath:
        return self.add(path_from_response(res))

    def fill_lesson_content(self, path_id: str, module_id: str, lesson_id: str,
                            operating_system: Optional[str] = None) -> ContentFill:
        def _child(path: LearningPath):
            module, lesson = _locate(path, module_id, lesson_id)
            req = GenerateLessonContentReq(
                pathTitle=path.title,
                moduleTitle=module.title,
                lessonTitle=lesson.title,
                fullOutline=path.outline(),
                operatingSystem=operating_system,
            )
            return lesson, req

        return self._materialize(path_id, f"{module_id}/{lesson_id}", _child, self.generate_content)
