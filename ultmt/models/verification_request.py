from datetime import datetime, timezone
from typing import ClassVar

from pydantic import Field

from ultmt.constants.roster import SourceType, Status
from ultmt.models.common.document import Document
from ultmt.models.common.pyobjectid import PyObjectId
from ultmt.models.embedded import EmbeddedUser


class VerificationRequestModel(Document):
    collection_name: ClassVar[str] = "verificationrequests"

    sourceType: SourceType
    sourceId: PyObjectId
    creator: EmbeddedUser
    status: Status = Status.PENDING
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updatedAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
