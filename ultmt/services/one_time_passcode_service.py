import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from django.conf import settings

from ultmt.constants.messages import ApiErrors
from ultmt.constants.roster import OTPReason
from ultmt.exceptions.api_exceptions import ApiException
from ultmt.models.one_time_passcode import OneTimePasscodeModel
from ultmt.repositories.common.mongo_repository import to_object_id
from ultmt.repositories.one_time_passcode_repository import OneTimePasscodeRepository
from ultmt.utils.validation_chain import ValidationChain

logger = logging.getLogger(__name__)


class OneTimePasscodeService:
    @classmethod
    def create_otp(
        cls, creator_id: str, reason: OTPReason, team_id: Optional[str] = None, lifetime: Optional[int] = None
    ) -> OneTimePasscodeModel:
        """
        Issue a passcode for the creator. lifetime is in seconds and defaults to
        PASSCODE_LIFETIME.
        """
        ValidationChain().user_exists(creator_id).test()

        seconds = lifetime if lifetime is not None else settings.PASSCODE_LIFETIME
        otp = OneTimePasscodeModel(
            passcode=OneTimePasscodeRepository.generate_unique_passcode(),
            creator=to_object_id(creator_id),
            reason=OTPReason(reason),
            team=to_object_id(team_id) if team_id else None,
            expiresAt=datetime.now(timezone.utc) + timedelta(seconds=seconds),
        )
        return OneTimePasscodeRepository.create(otp)

    @classmethod
    def get_valid_passcode(cls, passcode: str, reason: OTPReason) -> OneTimePasscodeModel:
        otp = OneTimePasscodeRepository.get_by_passcode(passcode) if passcode else None
        if otp is None or otp.is_expired() or otp.reason != OTPReason(reason):
            raise ApiException(ApiErrors.INVALID_PASSCODE)
        return otp

    @classmethod
    def delete_expired_passcodes(cls) -> int:
        # only codes that expired more than an hour ago
        cutoff = datetime.now(timezone.utc) - timedelta(hours=1)
        deleted = OneTimePasscodeRepository.delete_expired_before(cutoff)
        logger.info(f"Deleted {deleted} expired passcodes")
        return deleted
