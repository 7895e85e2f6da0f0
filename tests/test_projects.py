import threading

import pytest

from conftest import tutorial_payload
from core.errors import GenerationFailed, NotFound, PersistenceFailed
from schemas.project import Project
from schemas.tutorial import GenerateStepContentReq, GenerateStepContentRes, GenerateTutorialRes
from schemas.usage import ContentState
from stores.content_guard import ContentGuard
from stores.documents import DocumentStore
from stores.projects import ProjectStore

PORTFOLIO = "build-a-personal-portfolio-website"


class CountingGenerator:
    def __init__(self, content: str = "# Generated") -> None:
        self.calls: list[GenerateStepContentReq] = []
        self.content = content

    def __call__(self, req: GenerateStepContentReq) -> GenerateStepContentRes:
        self.calls.append(req)
        return GenerateStepContentRes(content=f"{self.content}: {req.subTaskTitle}", tokensUsed=42)


def _store(documents: DocumentStore, guard: ContentGuard, user: str = "u1", gen=None) -> ProjectStore:
    return ProjectStore(user, documents, generate_content=gen or CountingGenerator(), guard=guard)


def test_first_load_seeds_and_persists_defaults(documents: DocumentStore, guard: ContentGuard) -> None:
    projects = _store(documents, guard).load()
    assert [p.id for p in projects] == [PORTFOLIO, "create-a-weather-app", "task-management-app"]

    again = _store(documents, guard).load()
    assert [p.id for p in again] == [p.id for p in projects]
    assert len(documents.find("projects", user_id="u1")) == 3


def test_users_do_not_see_each_other(documents: DocumentStore, guard: ContentGuard) -> None:
    mine = _store(documents, guard, user="u1")
    mine.load()
    mine.delete("create-a-weather-app")

    theirs = _store(documents, guard, user="u2").load()
    assert "create-a-weather-app" in [p.id for p in theirs]
    assert "create-a-weather-app" not in [p.id for p in _store(documents, guard, user="u1").load()]


def test_add_update_delete_write_then_reflect(documents: DocumentStore, guard: ContentGuard) -> None:
    store = _store(documents, guard)
    store.load()

    project = store.create_from_tutorial(GenerateTutorialRes(**tutorial_payload(), tokensUsed=10))
    assert project.id.startswith("build-a-cli-todo-app-")
    assert store.items[-1] == project
    assert all(not st.completed for s in project.steps for st in s.subTasks)

    renamed = project.model_copy(update={"title": "Renamed"})
    store.update(renamed)
    assert store.get(project.id).title == "Renamed"
    assert documents.get("projects", f"u1:{project.id}")["title"] == "Renamed"

    assert store.delete(project.id) is True
    assert project.id not in [p.id for p in store.items]
    assert documents.get("projects", f"u1:{project.id}") is None


def test_update_twice_is_idempotent(documents: DocumentStore, guard: ContentGuard) -> None:
    store = _store(documents, guard)
    project = store.load()[0].model_copy(update={"description": "Changed"})

    store.update(project)
    stored_once = documents.get("projects", f"u1:{project.id}")
    items_once = [p.model_dump() for p in store.items]

    store.update(project)
    assert documents.get("projects", f"u1:{project.id}") == stored_once
    assert [p.model_dump() for p in store.items] == items_once


def test_update_unknown_project_is_not_found(documents: DocumentStore, guard: ContentGuard) -> None:
    store = _store(documents, guard)
    store.load()
    with pytest.raises(NotFound):
        store.update(Project(id="ghost", title="Ghost", description=""))
    assert "ghost" not in [p.id for p in store.items]


def test_step_completion_follows_sub_tasks(documents: DocumentStore, guard: ContentGuard) -> None:
    store = _store(documents, guard)
    store.load()
    step = store.get(PORTFOLIO).find_step("step-4")
    sub_ids = [st.id for st in step.subTasks]

    for sub_id in sub_ids:
        project = store.toggle_subtask(PORTFOLIO, "step-4", sub_id)
    assert project.find_step("step-4").completed is True

    project = store.toggle_subtask(PORTFOLIO, "step-4", sub_ids[0])
    assert project.find_step("step-4").completed is False

    stored = Project.model_validate(documents.get("projects", f"u1:{PORTFOLIO}"))
    assert stored.find_step("step-4").completed is False
    assert [st.completed for st in stored.find_step("step-4").subTasks] == [False, True]


def test_toggle_unknown_sub_task_is_not_found(documents: DocumentStore, guard: ContentGuard) -> None:
    store = _store(documents, guard)
    store.load()
    with pytest.raises(NotFound):
        store.toggle_subtask(PORTFOLIO, "step-1", "nope")
    with pytest.raises(NotFound):
        store.toggle_subtask(PORTFOLIO, "step-99", "step-99-1")


def test_fill_generates_once_then_reuses_content(documents: DocumentStore, guard: ContentGuard) -> None:
    gen = CountingGenerator()
    store = _store(documents, guard, gen=gen)
    store.load()

    first = store.fill_subtask_content(PORTFOLIO, "step-1", "step-1-1")
    second = store.fill_subtask_content(PORTFOLIO, "step-1", "step-1-1")

    assert first.state is ContentState.DONE and first.tokensUsed == 42
    assert second.state is ContentState.DONE and second.tokensUsed == 0
    assert second.content == first.content == "# Generated: Install Node.js"
    assert len(gen.calls) == 1

    req = gen.calls[0]
    assert req.projectTitle == "Build a Personal Portfolio Website"
    assert req.stepTitle == "Setup Your Development Environment"
    assert "Deploy to the Web" in req.fullOutline

    stored = Project.model_validate(documents.get("projects", f"u1:{PORTFOLIO}"))
    assert stored.find_step("step-1").subTasks[0].content == first.content


def test_concurrent_fill_makes_one_call(documents: DocumentStore, guard: ContentGuard) -> None:
    started = threading.Event()
    release = threading.Event()
    calls = []

    def slow_generate(req: GenerateStepContentReq) -> GenerateStepContentRes:
        calls.append(req)
        started.set()
        release.wait(5)
        return GenerateStepContentRes(content="# Body", tokensUsed=10)

    _store(documents, guard).load()
    results = {}

    def first() -> None:
        results["first"] = _store(documents, guard, gen=slow_generate).fill_subtask_content(
            PORTFOLIO, "step-2", "step-2-1")

    t = threading.Thread(target=first)
    t.start()
    assert started.wait(5)

    second = _store(documents, guard, gen=slow_generate).fill_subtask_content(PORTFOLIO, "step-2", "step-2-1")
    release.set()
    t.join(5)

    assert second.state is ContentState.IN_FLIGHT
    assert second.content is None
    assert results["first"].state is ContentState.DONE
    assert len(calls) == 1

    third = _store(documents, guard, gen=slow_generate).fill_subtask_content(PORTFOLIO, "step-2", "step-2-1")
    assert third.content == "# Body"
    assert len(calls) == 1


def test_failed_fill_releases_the_claim(documents: DocumentStore, guard: ContentGuard) -> None:
    def failing(req: GenerateStepContentReq) -> GenerateStepContentRes:
        raise GenerationFailed("generate_step_content", "boom")

    store = _store(documents, guard, gen=failing)
    store.load()
    with pytest.raises(GenerationFailed):
        store.fill_subtask_content(PORTFOLIO, "step-3", "step-3-1")
    assert guard.state(("projects", "u1", PORTFOLIO, "step-3/step-3-1")) is ContentState.IDLE

    gen = CountingGenerator()
    retry = _store(documents, guard, gen=gen).fill_subtask_content(PORTFOLIO, "step-3", "step-3-1")
    assert retry.state is ContentState.DONE
    assert len(gen.calls) == 1


def test_sibling_fills_from_stale_copies_keep_both(documents: DocumentStore, guard: ContentGuard) -> None:
    a = _store(documents, guard)
    b = _store(documents, guard)
    a.load()
    b.load()

    a.fill_subtask_content(PORTFOLIO, "step-5", "step-5-1")
    b.fill_subtask_content(PORTFOLIO, "step-5", "step-5-2")

    stored = Project.model_validate(documents.get("projects", f"u1:{PORTFOLIO}"))
    contents = [st.content for st in stored.find_step("step-5").subTasks]
    assert contents == ["# Generated: Push to GitHub", "# Generated: Deploy with Vercel"]


def test_deleting_everything_does_not_bring_defaults_back(documents: DocumentStore, guard: ContentGuard) -> None:
    store = _store(documents, guard)
    for project in list(store.load()):
        store.delete(project.id)

    assert _store(documents, guard).load() == []
    assert documents.find("projects", user_id="u1") == []


def test_failed_writes_leave_local_items_untouched(
        documents: DocumentStore, broken_documents: DocumentStore, guard: ContentGuard) -> None:
    _store(documents, guard).load()
    store = _store(broken_documents, guard)
    before = [p.model_dump() for p in store.load()]

    with pytest.raises(PersistenceFailed):
        store.create_from_tutorial(GenerateTutorialRes(**tutorial_payload(), tokensUsed=0))
    with pytest.raises(PersistenceFailed):
        store.update(store.get(PORTFOLIO).model_copy(update={"title": "Renamed"}))
    with pytest.raises(PersistenceFailed):
        store.delete("create-a-weather-app")
    with pytest.raises(PersistenceFailed):
        store.toggle_subtask(PORTFOLIO, "step-1", "step-1-1")

    assert [p.model_dump() for p in store.items] == before
    assert [p.model_dump() for p in _store(documents, guard).load()] == before


def test_guard_forgets_finished_fills(documents: DocumentStore, guard: ContentGuard) -> None:
    store = _store(documents, guard)
    store.fill_subtask_content(PORTFOLIO, "step-1", "step-1-2")
    store.toggle_subtask(PORTFOLIO, "step-1", "step-1-2")
    assert guard.is_idle()
