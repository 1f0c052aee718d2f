from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ultmt.models.common.pyobjectid import PyObjectId


class Document(BaseModel):
    """
    Base for every stored entity. The id defaults to a fresh ObjectId so callers
    can reference a document (continuationId, embedded snapshots) before it is
    inserted.
    """

    collection_name: ClassVar[str]

    id: PyObjectId = Field(default_factory=PyObjectId, alias="_id")

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
    )

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)
