from rest_framework import status


class ApiException(Exception):
    """
    The one domain error. Carries the human readable message and the HTTP status
    the failure maps to; every validator and service failure is raised as this.
    """

    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)
