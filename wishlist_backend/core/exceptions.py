# wishlist_backend/core/exceptions.py
"""
서비스 계층에서 발생시키는 예외 클래스 모음.

라우트는 ServiceError를 잡아 status_code와 to_dict()로 응답을 만들고,
그 밖의 예외는 로그를 남긴 뒤 500으로 응답합니다.
"""
from typing import Any, Dict, Optional


class ServiceError(Exception):
    """HTTP 상태 코드와 에러 코드를 함께 가지는 서비스 예외의 기반 클래스"""
    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        return {"error_code": self.error_code, "message": self.message}


class RequestValidationError(ServiceError):
    """필수 입력 누락 또는 형식 오류 (400)"""
    status_code = 400
    error_code = "VALIDATION_ERROR"


class ConflictError(ServiceError):
    """이메일/사용자명 중복 등 유일성 위반 (400)"""
    status_code = 400
    error_code = "CONFLICT"


class AuthError(ServiceError):
    """잘못된 자격 증명 (401). 계정 존재 여부가 드러나지 않도록 메시지를 통일합니다."""
    status_code = 401
    error_code = "INVALID_CREDENTIALS"


class NotFoundError(ServiceError):
    status_code = 404
    error_code = "NOT_FOUND"


class InternalError(ServiceError):
    """저장소나 외부 의존성 실패. 호출자에게는 불투명한 메시지만 전달합니다."""
    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"
