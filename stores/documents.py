"""
JSON document store on top of SQLAlchemy.

Collections are addressed by name; each document is a JSON object keyed by
(collection, doc_id) and optionally owned by a user.
"""
import copy
import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from core.database import get_session_factory
from core.errors import PersistenceFailed
from models.document import DocumentRecord

logger = logging.getLogger(__name__)


class DocumentStore:

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory or get_session_factory()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Document store write failed: %s", e)
            raise PersistenceFailed(f"document store error: {e.__class__.__name__}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._session() as s:
            rec = s.get(DocumentRecord, (collection, doc_id))
            return copy.deepcopy(rec.data) if rec is not None else None

    def set(self, collection: str, doc_id: str, data: Dict[str, Any], user_id: Optional[str] = None) -> None:
        """Create or fully replace a document."""
        with self._session() as s:
            self._put(s, collection, doc_id, data, user_id)

    def update(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        """Merge fields into an existing document; fails if it does not exist."""
        with self._session() as s:
            rec = s.get(DocumentRecord, (collection, doc_id))
            if rec is None:
                raise PersistenceFailed(f"{collection}/{doc_id} does not exist")
            merged = copy.deepcopy(rec.data)
            merged.update(copy.deepcopy(data))
            rec.data = merged

    def add(self, collection: str, data: Dict[str, Any], user_id: Optional[str] = None) -> str:
        doc_id = uuid.uuid4().hex
        self.set(collection, doc_id, data, user_id=user_id)
        return doc_id

    def set_many(self, collection: str, items: Iterable[Tuple[str, Dict[str, Any]]],
                 user_id: Optional[str] = None) -> int:
        """Write several documents in one transaction; all or nothing."""
        return self.write_batch((collection, doc_id, data, user_id) for doc_id, data in items)

    def write_batch(self, writes: Iterable[Tuple[str, str, Dict[str, Any], Optional[str]]]) -> int:
        """Create or replace documents across collections in one transaction."""
        n = 0
        with self._session() as s:
            for collection, doc_id, data, user_id in writes:
                self._put(s, collection, doc_id, data, user_id)
                n += 1
        return n

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._session() as s:
            rec = s.get(DocumentRecord, (collection, doc_id))
            if rec is None:
                return False
            s.delete(rec)
            return True

    def find(self, collection: str, user_id: Optional[str] = None, **match: Any) -> List[Dict[str, Any]]:
        """Documents of a collection, optionally filtered by owner and top-level field equality."""
        stmt = select(DocumentRecord).where(DocumentRecord.collection == collection)
        if user_id is not None:
            stmt = stmt.where(DocumentRecord.user_id == user_id)
        stmt = stmt.order_by(DocumentRecord.created_at, DocumentRecord.doc_id)

        with self._session() as s:
            rows = s.scalars(stmt).all()
            docs = [copy.deepcopy(r.data) for r in rows]

        if match:
            docs = [d for d in docs if all(d.get(k) == v for k, v in match.items())]
        return docs

    @staticmethod
    def _put(s: Session, collection: str, doc_id: str, data: Dict[str, Any], user_id: Optional[str]) -> None:
        rec = s.get(DocumentRecord, (collection, doc_id))
        if rec is None:
            s.add(DocumentRecord(collection=collection, doc_id=doc_id, user_id=user_id, data=copy.deepcopy(data)))
        else:
            rec.data = copy.deepcopy(data)
            if user_id is not None:
                rec.user_id = user_id
