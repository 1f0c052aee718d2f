import logging
from typing import List

from ultmt.models.team_designation import TeamDesignationModel
from ultmt.repositories.team_designation_repository import TeamDesignationRepository
from ultmt.utils.validation_chain import ValidationChain

logger = logging.getLogger(__name__)


class TeamDesignationService:
    @classmethod
    def create_team_designation(cls, user_id: str, description: str, abbreviation: str) -> TeamDesignationModel:
        ValidationChain().user_is_admin(user_id).test()
        designation = TeamDesignationRepository.upsert(description, abbreviation)
        logger.info(f"Designation {designation.id} saved as {description} ({abbreviation})")
        return designation

    @classmethod
    def get_designations(cls) -> List[TeamDesignationModel]:
        return TeamDesignationRepository.get_all()
