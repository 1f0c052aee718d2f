import secrets
from datetime import datetime
from typing import Optional

from ultmt.constants.roster import PASSCODE_LENGTH
from ultmt.models.one_time_passcode import OneTimePasscodeModel
from ultmt.repositories.common.mongo_repository import MongoRepository


class OneTimePasscodeRepository(MongoRepository[OneTimePasscodeModel]):
    collection_name = OneTimePasscodeModel.collection_name
    model = OneTimePasscodeModel

    @classmethod
    def generate_unique_passcode(cls) -> str:
        collection = cls.get_collection()
        while True:
            passcode = "".join(secrets.choice("0123456789") for _ in range(PASSCODE_LENGTH))
            if collection.count_documents({"passcode": passcode}, limit=1) == 0:
                return passcode

    @classmethod
    def get_by_passcode(cls, passcode: str) -> Optional[OneTimePasscodeModel]:
        return cls.find_one({"passcode": passcode})

    @classmethod
    def delete_expired_before(cls, cutoff: datetime) -> int:
        result = cls.get_collection().delete_many({"expiresAt": {"$lt": cutoff}})
        return result.deleted_count
