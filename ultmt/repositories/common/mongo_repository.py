from typing import Any, Generic, List, Optional, Type, TypeVar

from bson import ObjectId
from pymongo.collection import Collection

from ultmt.models.common.document import Document
from ultmt_project.db.config import DatabaseManager

DocumentType = TypeVar("DocumentType", bound=Document)


def to_object_id(value: Any) -> Optional[ObjectId]:
    """ObjectId for a hex string or ObjectId, None for anything that cannot be one."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


class MongoRepository(Generic[DocumentType]):
    """
    Shared find / create / save / delete for one collection. Subclasses set
    collection_name and model.
    """

    collection_name: str
    model: Type[DocumentType]

    @classmethod
    def get_collection(cls) -> Collection:
        return DatabaseManager().get_collection(cls.collection_name)

    @classmethod
    def get_by_id(cls, document_id) -> Optional[DocumentType]:
        object_id = to_object_id(document_id)
        if object_id is None:
            return None
        document = cls.get_collection().find_one({"_id": object_id})
        return cls.model(**document) if document else None

    @classmethod
    def get_by_ids(cls, document_ids) -> List[DocumentType]:
        object_ids = [oid for oid in (to_object_id(value) for value in document_ids) if oid is not None]
        if not object_ids:
            return []
        cursor = cls.get_collection().find({"_id": {"$in": object_ids}})
        return [cls.model(**document) for document in cursor]

    @classmethod
    def find(cls, query: dict) -> List[DocumentType]:
        return [cls.model(**document) for document in cls.get_collection().find(query)]

    @classmethod
    def find_one(cls, query: dict) -> Optional[DocumentType]:
        document = cls.get_collection().find_one(query)
        return cls.model(**document) if document else None

    @classmethod
    def create(cls, entity: DocumentType) -> DocumentType:
        cls.get_collection().insert_one(entity.to_document())
        return entity

    @classmethod
    def save(cls, entity: DocumentType) -> DocumentType:
        """Write the whole document back, inserting it if it is not stored yet."""
        cls.get_collection().replace_one({"_id": entity.id}, entity.to_document(), upsert=True)
        return entity

    @classmethod
    def delete_by_id(cls, document_id) -> bool:
        object_id = to_object_id(document_id)
        if object_id is None:
            return False
        result = cls.get_collection().delete_one({"_id": object_id})
        return result.deleted_count > 0

    @classmethod
    def update_many(cls, query: dict, update: dict) -> int:
        result = cls.get_collection().update_many(query, update)
        return result.modified_count
