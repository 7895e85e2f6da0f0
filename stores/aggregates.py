"""
Per-user stores for aggregate documents (projects, learning paths).

A store mirrors one user's collection in ``items``. Writes go to the document
store first and are reflected locally only once they succeed.
"""
import logging
from typing import Callable, Generic, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from core.errors import NotFound
from schemas.usage import ContentFill, ContentState
from stores.content_guard import ContentGuard, content_guard
from stores.documents import DocumentStore
from utils.textutils import now_ms

logger = logging.getLogger(__name__)

# per-user markers recording that defaults were written once
SEEDS = "seeds"

A = TypeVar("A", bound=BaseModel)
Req = TypeVar("Req", bound=BaseModel)


class AggregateStore(Generic[A]):
    collection: str = ""
    model: Type[A]

    def __init__(self, user_id: str, documents: DocumentStore, guard: Optional[ContentGuard] = None):
        self.user_id = user_id
        self.documents = documents
        self.guard = guard or content_guard
        self.items: List[A] = []
        self.loaded = False

    def default_items(self) -> List[A]:
        return []

    def _key(self, item_id: str) -> str:
        # entity ids (e.g. seeded projects) repeat across users
        return f"{self.user_id}:{item_id}"

    def _to_doc(self, item: A) -> dict:
        return {**item.model_dump(mode="json"), "userId": self.user_id}

    def _seed_marker(self) -> str:
        return f"{self.collection}:{self.user_id}"

    def load(self) -> List[A]:
        docs = self.documents.find(self.collection, user_id=self.user_id)
        if docs or self.documents.get(SEEDS, self._seed_marker()) is not None:
            self.items = [self.model.model_validate(d) for d in docs]
        else:
            # first load only; an emptied collection stays empty
            defaults = self.default_items()
            marker = {"collection": self.collection, "userId": self.user_id, "seededAt": now_ms()}
            writes = [(self.collection, self._key(item.id), self._to_doc(item), self.user_id) for item in defaults]
            writes.append((SEEDS, self._seed_marker(), marker, self.user_id))
            self.documents.write_batch(writes)
            logger.info("Seeded %d default %s for user %s", len(defaults), self.collection, self.user_id)
            self.items = defaults
        self.loaded = True
        return self.items

    def get(self, item_id: str) -> A:
        if not self.loaded:
            self.load()
        for item in self.items:
            if item.id == item_id:
                return item
        raise NotFound(f"{self.collection}/{item_id} not found")

    def add(self, item: A) -> A:
        if not self.loaded:
            self.load()
        self.documents.set(self.collection, self._key(item.id), self._to_doc(item), user_id=self.user_id)
        self._reflect(item)
        return item

    def update(self, item: A) -> A:
        if not self.loaded:
            self.load()
        self._fetch(item.id)
        self.documents.set(self.collection, self._key(item.id), self._to_doc(item), user_id=self.user_id)
        self._reflect(item)
        return item

    def delete(self, item_id: str) -> bool:
        if not self.loaded:
            self.load()
        self._fetch(item_id)
        removed = self.documents.delete(self.collection, self._key(item_id))
        self.items = [i for i in self.items if i.id != item_id]
        return removed

    def _reflect(self, item: A) -> None:
        for idx, existing in enumerate(self.items):
            if existing.id == item.id:
                self.items[idx] = item
                return
        self.items.append(item)

    def _fetch(self, item_id: str) -> A:
        """Current stored copy of an aggregate owned by this user."""
        doc = self.documents.get(self.collection, self._key(item_id))
        if doc is None or doc.get("userId") != self.user_id:
            raise NotFound(f"{self.collection}/{item_id} not found")
        return self.model.model_validate(doc)

    def _mutate(self, item_id: str, fn: Callable[[A], None]) -> A:
        """Apply ``fn`` to a fresh copy of the aggregate and persist the whole document."""
        with self.guard.aggregate_lock((self.collection, self.user_id, item_id)):
            fresh = self._fetch(item_id)
            fn(fresh)
            return self.update(fresh)

    def _materialize(
            self,
            item_id: str,
            child_id: str,
            locate: Callable[[A], Tuple[BaseModel, Req]],
            generate: Callable[[Req], BaseModel],
    ) -> ContentFill:
        """Generate the body of one child on first view.

        ``locate`` returns the child and the generation request for it;
        ``generate`` runs the content flow.
        """
        child, req = locate(self.get(item_id))
        if child.content:
            return ContentFill(state=ContentState.DONE, content=child.content)

        key = (self.collection, self.user_id, item_id, child_id)
        if not self.guard.try_begin(key):
            logger.debug("Content for %s already in flight", key)
            return ContentFill(state=ContentState.IN_FLIGHT)

        try:
            current, _ = locate(self._fetch(item_id))
            if current.content:
                # filled by another request since this copy was loaded
                return ContentFill(state=ContentState.DONE, content=current.content)

            res = generate(req)

            def _apply(fresh: A) -> None:
                target, _ = locate(fresh)
                target.content = res.content

            self._mutate(item_id, _apply)
        finally:
            self.guard.finish(key)

        return ContentFill(state=ContentState.DONE, content=res.content, tokensUsed=res.tokensUsed)
