from typing import ClassVar

from ultmt.constants.roster import Initiator, Status
from ultmt.models.common.document import Document
from ultmt.models.common.pyobjectid import PyObjectId


class RosterRequestModel(Document):
    collection_name: ClassVar[str] = "rosterrequests"

    team: PyObjectId
    user: PyObjectId
    requestSource: Initiator
    status: Status = Status.PENDING
