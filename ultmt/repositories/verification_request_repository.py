from ultmt.models.verification_request import VerificationRequestModel
from ultmt.repositories.common.mongo_repository import MongoRepository


class VerificationRequestRepository(MongoRepository[VerificationRequestModel]):
    collection_name = VerificationRequestModel.collection_name
    model = VerificationRequestModel
