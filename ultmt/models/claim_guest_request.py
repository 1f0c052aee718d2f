from typing import ClassVar

from ultmt.constants.roster import Status
from ultmt.models.common.document import Document
from ultmt.models.common.pyobjectid import PyObjectId


class ClaimGuestRequestModel(Document):
    collection_name: ClassVar[str] = "claimguestrequests"

    guestId: PyObjectId
    userId: PyObjectId
    teamId: PyObjectId
    status: Status = Status.PENDING
