"""
Document store abstraction for Firestore, SQL and an in-memory test implementation.

Documents are plain dicts addressed by (collection, document id). Every
implementation assigns the document id and the server-side ``createdAt``
timestamp itself when a document is created with ``create_document``.
"""

from __future__ import annotations

import copy
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

from firebase_admin import firestore
from google.cloud.firestore_v1 import SERVER_TIMESTAMP
from sqlalchemy import JSON, Column, DateTime, String, create_engine, select
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from emotes_backend.constants import CREATED_AT_FIELD


class DbClient(Protocol):
    """Interface for document store access."""

    def get_document(self, collection: str, doc_id: str) -> Optional[dict]:
        ...

    def set_document(
        self, collection: str, doc_id: str, data: dict, *, merge: bool = False
    ) -> None:
        ...

    def create_document(self, collection: str, data: dict) -> str:
        ...

    def delete_document(self, collection: str, doc_id: str) -> None:
        ...

    def list_documents(
        self,
        collection: str,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: int = 100,
    ) -> list[dict]:
        ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _sort_documents(
    docs: list[dict], order_by: Optional[str], descending: bool
) -> list[dict]:
    if not order_by:
        return docs
    # Documents without the field are dropped, matching Firestore's order_by.
    present = [d for d in docs if d.get(order_by) is not None]
    return sorted(present, key=lambda d: d[order_by], reverse=descending)


class InMemoryDbClient:
    """Simple in-memory document store for development and tests."""

    def __init__(self):
        self.collections: Dict[str, Dict[str, dict]] = {}

    def _collection(self, collection: str) -> Dict[str, dict]:
        return self.collections.setdefault(collection, {})

    def get_document(self, collection: str, doc_id: str) -> Optional[dict]:
        doc = self._collection(collection).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    def set_document(
        self, collection: str, doc_id: str, data: dict, *, merge: bool = False
    ) -> None:
        docs = self._collection(collection)
        if merge and doc_id in docs:
            docs[doc_id].update(copy.deepcopy(data))
        else:
            docs[doc_id] = copy.deepcopy(data)

    def create_document(self, collection: str, data: dict) -> str:
        doc_id = uuid.uuid4().hex
        record = copy.deepcopy(data)
        record["id"] = doc_id
        record[CREATED_AT_FIELD] = _utcnow()
        self._collection(collection)[doc_id] = record
        return doc_id

    def delete_document(self, collection: str, doc_id: str) -> None:
        self._collection(collection).pop(doc_id, None)

    def list_documents(
        self,
        collection: str,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: int = 100,
    ) -> list[dict]:
        docs = [copy.deepcopy(d) for d in self._collection(collection).values()]
        return _sort_documents(docs, order_by, descending)[:limit]

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.collections.clear()


class FirestoreDbClient:
    """
    Cloud Firestore implementation backed by the firebase_admin SDK.

    ``create_document`` lets Firestore generate the id and stamps ``createdAt``
    with ``SERVER_TIMESTAMP`` so the time comes from the server, not this process.
    """

    def __init__(self, app=None, client=None):
        self._client = client or firestore.client(app)

    def get_document(self, collection: str, doc_id: str) -> Optional[dict]:
        snapshot = self._client.collection(collection).document(doc_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    def set_document(
        self, collection: str, doc_id: str, data: dict, *, merge: bool = False
    ) -> None:
        self._client.collection(collection).document(doc_id).set(data, merge=merge)

    def create_document(self, collection: str, data: dict) -> str:
        doc_ref = self._client.collection(collection).document()
        doc_ref.set({**data, "id": doc_ref.id, CREATED_AT_FIELD: SERVER_TIMESTAMP})
        return doc_ref.id

    def delete_document(self, collection: str, doc_id: str) -> None:
        self._client.collection(collection).document(doc_id).delete()

    def list_documents(
        self,
        collection: str,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: int = 100,
    ) -> list[dict]:
        query: Any = self._client.collection(collection)
        if order_by:
            direction = (
                firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            )
            query = query.order_by(order_by, direction=direction)
        query = query.limit(limit)
        return [snapshot.to_dict() for snapshot in query.stream()]


class SqlDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).

    Each document is one row holding its JSON body; ``createdAt`` lives in its
    own column so listings can be ordered by it in SQL.
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    @staticmethod
    def _to_document(row: "DocumentRow") -> dict:
        doc = dict(row.data or {})
        if row.created_at is not None:
            doc[CREATED_AT_FIELD] = row.created_at
        return doc

    def get_document(self, collection: str, doc_id: str) -> Optional[dict]:
        with self.Session() as session:
            row = session.get(DocumentRow, (collection, doc_id))
            return self._to_document(row) if row else None

    def set_document(
        self, collection: str, doc_id: str, data: dict, *, merge: bool = False
    ) -> None:
        with self.Session() as session:
            row = session.get(DocumentRow, (collection, doc_id))
            if row:
                # Reassign rather than mutate so SQLAlchemy sees the JSON change.
                row.data = {**(row.data or {}), **data} if merge else dict(data)
            else:
                session.add(
                    DocumentRow(collection=collection, doc_id=doc_id, data=dict(data))
                )
            session.commit()

    def create_document(self, collection: str, data: dict) -> str:
        doc_id = uuid.uuid4().hex
        with self.Session() as session:
            session.add(
                DocumentRow(
                    collection=collection,
                    doc_id=doc_id,
                    data={**data, "id": doc_id},
                    created_at=_utcnow(),
                )
            )
            session.commit()
        return doc_id

    def delete_document(self, collection: str, doc_id: str) -> None:
        with self.Session() as session:
            row = session.get(DocumentRow, (collection, doc_id))
            if row:
                session.delete(row)
                session.commit()

    def list_documents(
        self,
        collection: str,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: int = 100,
    ) -> list[dict]:
        with self.Session() as session:
            stmt = select(DocumentRow).where(DocumentRow.collection == collection)
            if order_by == CREATED_AT_FIELD:
                column = DocumentRow.created_at
                stmt = (
                    stmt.where(column.is_not(None))
                    .order_by(column.desc() if descending else column.asc())
                    .limit(limit)
                )
                rows = session.execute(stmt).scalars().all()
                return [self._to_document(row) for row in rows]
            rows = session.execute(stmt).scalars().all()
            docs = [self._to_document(row) for row in rows]
            return _sort_documents(docs, order_by, descending)[:limit]


Base = declarative_base()


class DocumentRow(Base):
    __tablename__ = "documents"

    collection = Column(String, primary_key=True)
    doc_id = Column(String, primary_key=True)
    data = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=True, index=True)
