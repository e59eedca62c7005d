from fastapi import status
from src.libs.result import Error, ErrorKind

ERROR_KIND_STATUS = {
    ErrorKind.bad_request: status.HTTP_400_BAD_REQUEST,
    ErrorKind.unauthorized: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.forbidden: status.HTTP_403_FORBIDDEN,
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.conflict: status.HTTP_409_CONFLICT,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error):
    """Translate an application Error into the matching HTTP exception"""
    status_code = ERROR_KIND_STATUS.get(error.kind)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
