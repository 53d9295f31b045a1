"""
Document store adapter over the async Firestore client.

Everything the dashboard reads or writes goes through DocumentStore, so
Google API faults are converted to StoreError in exactly one place.
Documents come back as plain dicts carrying their id under "id".
"""

import logging
from typing import Any, Iterable, Optional

from fastapi import Request
from google.api_core import exceptions as google_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from .errors import StoreError, store_error_from

logger = logging.getLogger(__name__)

SERVER_TIMESTAMP = firestore.SERVER_TIMESTAMP

# (field, value) pairs, combined with AND
Filters = Iterable[tuple[str, Any]]


def _snapshot_to_dict(snapshot) -> dict:
    data = snapshot.to_dict() or {}
    data["id"] = snapshot.id
    return data


class DocumentStore:
    """Collection/document CRUD with equality filters and single-field ordering"""

    def __init__(self, client):
        self.client = client

    def _query(self, collection: str, filters: Filters = ()):
        query = self.client.collection(collection)
        for field, value in filters:
            query = query.where(filter=FieldFilter(field, "==", value))
        return query

    async def get_document(self, collection: str, doc_id: str) -> Optional[dict]:
        try:
            snapshot = await self.client.collection(collection).document(doc_id).get()
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"❌ Failed to read {collection}/{doc_id}: {e}")
            raise store_error_from(e) from e
        if not snapshot.exists:
            return None
        return _snapshot_to_dict(snapshot)

    async def create_document(self, collection: str, data: dict) -> str:
        try:
            _, ref = await self.client.collection(collection).add(data)
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"❌ Failed to create document in {collection}: {e}")
            raise store_error_from(e) from e
        logger.info(f"✅ Created {collection}/{ref.id}")
        return ref.id

    async def set_document(self, collection: str, doc_id: str, data: dict) -> None:
        try:
            await self.client.collection(collection).document(doc_id).set(data)
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"❌ Failed to write {collection}/{doc_id}: {e}")
            raise store_error_from(e) from e

    async def update_fields(self, collection: str, doc_id: str, fields: dict) -> None:
        """Partial update; fields not named are left untouched"""
        try:
            await self.client.collection(collection).document(doc_id).update(fields)
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"❌ Failed to update {collection}/{doc_id}: {e}")
            raise store_error_from(e) from e

    async def delete_document(self, collection: str, doc_id: str) -> None:
        try:
            await self.client.collection(collection).document(doc_id).delete()
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"❌ Failed to delete {collection}/{doc_id}: {e}")
            raise store_error_from(e) from e

    async def list_documents(
        self,
        collection: str,
        filters: Filters = (),
        order_by: Optional[str] = None,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> list[dict]:
        query = self._query(collection, filters)
        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        if limit:
            query = query.limit(limit)

        try:
            return [_snapshot_to_dict(snapshot) async for snapshot in query.stream()]
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"❌ Failed to list {collection}: {e}")
            raise store_error_from(e) from e

    async def count_documents(self, collection: str, filters: Filters = ()) -> int:
        query = self._query(collection, filters)
        try:
            results = await query.count(alias="total").get()
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"❌ Failed to count {collection}: {e}")
            raise store_error_from(e) from e
        return int(results[0][0].value) if results else 0


def get_store(request: Request) -> DocumentStore:
    """Dependency returning the store created at startup"""
    return request.app.state.store


__all__ = ["DocumentStore", "SERVER_TIMESTAMP", "StoreError", "get_store"]
