from typing import ClassVar

from pydantic import Field

from ultmt.models.common.document import Document


class TeamDesignationModel(Document):
    collection_name: ClassVar[str] = "teamdesignations"

    description: str = Field(..., min_length=1)
    abbreviation: str = Field(..., min_length=1, max_length=3)
