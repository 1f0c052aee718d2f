from enum import Enum

from rest_framework import status


class AppHealthStatus(Enum):
    UP = "UP"
    DOWN = "DOWN"

    @property
    def http_status(self) -> int:
        return status.HTTP_200_OK if self is AppHealthStatus.UP else status.HTTP_503_SERVICE_UNAVAILABLE


class ComponentHealthStatus(Enum):
    UP = "UP"
    DOWN = "DOWN"
