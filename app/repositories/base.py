"""Generic MongoDB repository shared by the catalog collections"""

from abc import ABC
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from bson import ObjectId
from pydantic import BaseModel
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from app.services.filters import ListQuery

T = TypeVar("T", bound=BaseModel)

EntityId = Union[str, ObjectId]


class BaseRepository(ABC, Generic[T]):
    """Maps one collection onto one entity model.

    Lookups by id accept either an ObjectId or its hex string. A malformed id
    behaves like an id that matches nothing.
    """

    def __init__(self, db: Database, collection_name: str, model_class: Type[T]):
        self.db = db
        self.collection: Collection = db[collection_name]
        self.model_class = model_class

    def find_by_id(self, entity_id: EntityId) -> Optional[T]:
        selector = self._id_filter(entity_id)
        if selector is None:
            return None
        return self._to_model(self.collection.find_one(selector))

    def find_one(self, query: Dict[str, Any]) -> Optional[T]:
        return self._to_model(self.collection.find_one(query))

    def find_many(
        self,
        query: Dict[str, Any],
        sort: Optional[List[tuple]] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[T]:
        cursor = self.collection.find(query)
        if sort:
            cursor = cursor.sort(sort)
        return [self._to_model(doc) for doc in cursor.skip(skip).limit(limit)]

    def paginate(self, list_query: ListQuery) -> tuple[List[T], int]:
        """One page of a filtered listing plus the unpaginated total."""
        page = self.find_many(
            list_query.filter,
            sort=list_query.sort,
            skip=list_query.skip,
            limit=list_query.limit,
        )
        return page, self.count(list_query.filter)

    def insert_one(self, entity: Union[T, Dict[str, Any]]) -> T:
        if isinstance(entity, BaseModel):
            doc = entity.model_dump(by_alias=True, exclude_none=True)
        else:
            doc = dict(entity)
        doc["_id"] = self.collection.insert_one(doc).inserted_id
        return self._to_model(doc)

    def update_one(self, entity_id: EntityId, updates: Dict[str, Any]) -> Optional[T]:
        """$set the given fields, stamp updated_at, return the new version."""
        selector = self._id_filter(entity_id)
        if selector is None:
            return None
        doc = self.collection.find_one_and_update(
            selector,
            {"$set": {**updates, "updated_at": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return self._to_model(doc)

    def delete_one(self, entity_id: EntityId) -> bool:
        selector = self._id_filter(entity_id)
        if selector is None:
            return False
        return self.collection.delete_one(selector).deleted_count > 0

    def count(self, query: Optional[Dict[str, Any]] = None) -> int:
        return self.collection.count_documents(query or {})

    def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return list(self.collection.aggregate(pipeline))

    def _to_model(self, doc: Optional[Dict[str, Any]]) -> Optional[T]:
        if not doc:
            return None
        return self.model_class.model_validate(doc)

    @classmethod
    def _id_filter(cls, entity_id: Optional[EntityId]) -> Optional[Dict[str, ObjectId]]:
        identifier = cls._to_object_id(entity_id)
        return None if identifier is None else {"_id": identifier}

    @staticmethod
    def _to_object_id(value: Optional[EntityId]) -> Optional[ObjectId]:
        if isinstance(value, ObjectId):
            return value
        if isinstance(value, str) and ObjectId.is_valid(value):
            return ObjectId(value)
        return None
