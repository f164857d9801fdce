from typing import Mapping

from fastapi import status
from src.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def http_error(error: Error, client_statuses: Mapping[str, int]) -> Exception:
    """ClientError for codes listed in client_statuses, ServerError for anything else"""
    if error.code in client_statuses:
        return ClientError(error, status_code=client_statuses[error.code])
    return ServerError(error)
