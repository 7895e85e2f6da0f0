from __future__ import annotations

import json
import os
from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace
from typing import Any

os.environ.setdefault("OPENAI_API_KEY", "sk-test-not-a-real-key")

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

import services.flow_runner as flow_runner
from core.database import init_db, make_engine
from stores.content_guard import ContentGuard
from stores.documents import DocumentStore


class FakeCompletions:
    """Stands in for ``client.chat.completions``; replies are queued per test."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self._replies: list[tuple[Any, Any]] = []

    def queue(self, payload: Any, prompt_tokens: int = 120, completion_tokens: int = 80) -> None:
        usage = SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens)
        self._replies.append((payload, usage))

    def queue_without_usage(self, payload: Any) -> None:
        self._replies.append((payload, None))

    def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        payload, usage = self._replies.pop(0)
        if isinstance(payload, Exception):
            raise payload
        content = payload if isinstance(payload, str) else json.dumps(payload)
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)], usage=usage)

    def user_text(self, call: int = -1) -> str:
        content = self.calls[call]["messages"][1]["content"]
        if isinstance(content, str):
            return content
        return next(part["text"] for part in content if part["type"] == "text")


@pytest.fixture
def fake_llm(monkeypatch: pytest.MonkeyPatch) -> FakeCompletions:
    completions = FakeCompletions()
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    monkeypatch.setattr(flow_runner, "get_client", lambda: client)
    return completions


@pytest.fixture
def session_factory(tmp_path: Path) -> Iterator[sessionmaker]:
    engine = make_engine(f"sqlite:///{tmp_path / 'documents.db'}")
    init_db(engine)
    try:
        yield sessionmaker(bind=engine, autoflush=False)
    finally:
        engine.dispose()


@pytest.fixture
def documents(session_factory: sessionmaker) -> DocumentStore:
    return DocumentStore(session_factory)


@pytest.fixture
def broken_documents(session_factory: sessionmaker) -> DocumentStore:
    """Same database, but every commit that carries a write fails in the driver."""

    def make_session() -> Session:
        session = session_factory()
        commit = session.commit

        def failing_commit() -> None:
            if session.new or session.dirty or session.deleted:
                raise OperationalError("COMMIT", {}, Exception("disk I/O error"))
            commit()

        session.commit = failing_commit
        return session

    return DocumentStore(make_session)


@pytest.fixture
def guard() -> ContentGuard:
    return ContentGuard()


def tutorial_payload() -> dict[str, Any]:
    return {
        "title": "Build a CLI Todo App",
        "description": "A command-line todo manager.",
        "steps": [
            {
                "id": "step-1-setup",
                "title": "Project Setup",
                "description": "Create the project skeleton.",
                "subTasks": [
                    {"id": "subtask-1-1", "title": "Create the Package", "description": "Lay out the package."},
                    {"id": "subtask-1-2", "title": "Add a Test Runner", "description": "Install pytest."},
                ],
            },
            {
                "id": "step-2-commands",
                "title": "Commands",
                "description": "Implement the commands.",
                "subTasks": [
                    {"id": "subtask-2-1", "title": "Implement Add", "description": "Add a todo item."},
                ],
            },
        ],
        "tags": ["Python", "Easy"],
        "skills": ["argparse", "File I/O"],
        "simulationDiagram": "graph TD; A[CLI] --> B[(todos.json)];",
    }


def learning_path_payload() -> dict[str, Any]:
    return {
        "title": "Rust for Beginners",
        "introduction": "Learn the basics of Rust.",
        "modules": [
            {
                "id": "module-1-basics",
                "title": "Basics",
                "description": "Syntax and tooling.",
                "lessons": [
                    {"id": "lesson-1-1", "title": "Installing Rust", "description": "Use rustup."},
                    {"id": "lesson-1-2", "title": "Cargo", "description": "Build and run projects."},
                ],
            },
            {
                "id": "module-2-ownership",
                "title": "Ownership",
                "description": "Borrowing and lifetimes.",
                "lessons": [
                    {"id": "lesson-2-1", "title": "Moves", "description": "What a move does."},
                ],
            },
        ],
    }


def _rating(rating: str = "Good") -> dict[str, str]:
    return {"rating": rating, "reason": "Reasonable."}


def text_feedback_payload(score: int = 72) -> dict[str, Any]:
    return {
        "feedback": "**Good start.** Add a concrete example.",
        "score": score,
        "analysis": {"clarity": _rating("Good"), "relevance": _rating("Excellent")},
    }


def audio_feedback_payload() -> dict[str, Any]:
    return {
        "feedback": "Clear answer with a few hesitations.",
        "score": 81,
        "transcript": "Big O describes how running time grows with input size.",
        "analysis": {
            "clarity": _rating("Good"),
            "relevance": _rating("Excellent"),
            "fillerWords": _rating("Average"),
            "pacing": _rating("Good"),
            "confidence": _rating("Needs Improvement"),
        },
    }
