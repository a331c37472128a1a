"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error taxonomy
used across services and dependencies, so call sites never spell out
status codes.

Usage:
    from dailyreport.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("보고서를 찾을 수 없습니다.")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 (범위 안에서 리소스를 찾을 수 없을 때).

    Raised when a referenced entity does not exist in the caller's scope.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "리소스를 찾을 수 없습니다.") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 (자연키 중복).

    Raised when a natural key is already taken, e.g. a department name
    within a company or an employee code within a company.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "이미 존재하는 항목입니다.") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ConflictError(HTTPException):
    """409 Conflict 예외 (참조 무결성 때문에 작업 불가).

    Raised when an operation is blocked by rows that still reference the
    target, e.g. deleting a company that still has employees.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "다른 데이터가 참조 중이라 처리할 수 없습니다.") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 (권한 부족).

    Raised when the authenticated principal's role is not allowed to run
    the operation.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "권한이 없습니다.") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 (인증 실패).

    Raised when the session cookie is missing, expired or tampered with,
    or when login credentials do not match.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "인증이 필요합니다.") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 (비즈니스 검증 실패).

    Raised when input passes schema validation but breaks a business rule
    (empty report batch, mixed dates in one batch, short password).

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "잘못된 요청입니다.") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ServiceUnavailableError(HTTPException):
    """503 Service Unavailable 예외 (외부 LLM 미설정 또는 호출 실패).

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "요약 생성 서비스를 사용할 수 없습니다.") -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
