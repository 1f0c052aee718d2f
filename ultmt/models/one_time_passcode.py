from datetime import datetime, timedelta, timezone
from typing import ClassVar, Optional

from pydantic import Field

from ultmt.constants.roster import OTPReason
from ultmt.models.common.document import Document
from ultmt.models.common.pyobjectid import PyObjectId


def _default_expiry() -> datetime:
    return datetime.now(timezone.utc) + timedelta(hours=1)


class OneTimePasscodeModel(Document):
    collection_name: ClassVar[str] = "onetimepasscodes"

    passcode: str = Field(..., pattern=r"^\d{6}$")
    creator: PyObjectId
    reason: OTPReason
    team: Optional[PyObjectId] = None
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expiresAt: datetime = Field(default_factory=_default_expiry)

    def is_expired(self) -> bool:
        return self.expiresAt < datetime.now(timezone.utc)
