import logging
from datetime import datetime, timezone

from django.conf import settings
from rest_framework import status

from ultmt.constants.messages import ApiErrors
from ultmt.constants.roster import VERIFIABLE_SOURCE_TYPES, VERIFICATION_RESPONSES, SourceType, Status
from ultmt.exceptions.api_exceptions import ApiException
from ultmt.models.verification_request import VerificationRequestModel
from ultmt.repositories.common.mongo_repository import to_object_id
from ultmt.repositories.team_repository import TeamRepository
from ultmt.repositories.user_repository import UserRepository
from ultmt.repositories.verification_request_repository import VerificationRequestRepository
from ultmt.utils.email_utils import send_verification_email
from ultmt.utils.embedded import embed_user
from ultmt.utils.entity_lookup import get_team_or_raise, get_user_or_raise
from ultmt.utils.validation_chain import ValidationChain

logger = logging.getLogger(__name__)


class VerificationRequestService:
    @classmethod
    def get_verification(cls, verification_id: str) -> VerificationRequestModel:
        verification = VerificationRequestRepository.get_by_id(verification_id)
        if verification is None:
            raise ApiException(ApiErrors.UNABLE_TO_FIND_VERIFICATION, status.HTTP_404_NOT_FOUND)
        return verification

    @classmethod
    def request_verification(cls, user_id: str, source_type: str, source_id: str) -> VerificationRequestModel:
        """
        Ask the admins to verify a team or a user account.

        Team requests need manager authority over the team. Users can only ask
        for their own account to be verified.
        """
        if source_type not in VERIFIABLE_SOURCE_TYPES:
            raise ApiException(ApiErrors.INVALID_SOURCE_TYPE)

        if source_type == SourceType.TEAM.value:
            ValidationChain().user_exists(user_id).team_exists(source_id).user_is_manager(user_id, source_id).test()
        else:
            ValidationChain().user_exists(user_id).test()
            if to_object_id(user_id) != to_object_id(source_id):
                raise ApiException(ApiErrors.UNAUTHORIZED_TO_VERIFY, status.HTTP_401_UNAUTHORIZED)

        creator = get_user_or_raise(user_id)
        verification = VerificationRequestModel(
            sourceType=source_type, sourceId=to_object_id(source_id), creator=embed_user(creator)
        )
        VerificationRequestRepository.create(verification)

        if settings.ADMIN_EMAILS:
            try:
                send_verification_email(settings.ADMIN_EMAILS, source_type, source_id, creator.username)
            except OSError as e:
                logger.error(f"Unable to email admins about verification {verification.id}: {e}")
                raise ApiException(ApiErrors.UNABLE_TO_SEND_EMAIL, status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"Verification {verification.id} requested for {source_type} {source_id}")
        return verification

    @classmethod
    def respond_to_verification(cls, user_id: str, verification_id: str, response: str) -> VerificationRequestModel:
        ValidationChain().user_is_admin(user_id).verification_exists(verification_id).test()
        if response not in VERIFICATION_RESPONSES:
            raise ApiException(ApiErrors.INVALID_RESPONSE_TYPE)

        verification = cls.get_verification(verification_id)
        verification.status = response
        verification.updatedAt = datetime.now(timezone.utc)
        VerificationRequestRepository.save(verification)

        if response == Status.APPROVED.value:
            cls._mark_verified(verification)

        logger.info(f"Verification {verification.id} {response} by admin {user_id}")
        return verification

    @staticmethod
    def _mark_verified(verification: VerificationRequestModel) -> None:
        if verification.sourceType == SourceType.TEAM.value:
            team = get_team_or_raise(verification.sourceId)
            team.verified = True
            TeamRepository.save(team)
            UserRepository.set_embedded_team_fields(team.id, {"verified": True})
        else:
            user = get_user_or_raise(verification.sourceId)
            user.verified = True
            UserRepository.save(user)
