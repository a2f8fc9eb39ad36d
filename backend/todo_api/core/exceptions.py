# 커스텀 예외 클래스 정의
# 주니어 개발자님께: API가 돌려주는 모든 에러는 TodoAppError를 상속합니다.
# 그래서 main.py의 예외 핸들러 하나로 {"success": false, "error": ...} 응답을 만들 수 있습니다.


class TodoAppError(Exception):
    """HTTP 상태 코드로 변환되는 모든 에러의 기본 클래스

    Attributes:
        status_code: 호출자에게 돌려줄 HTTP 상태 코드
        message: 응답 봉투의 "error" 필드에 들어갈 메시지
    """
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TodoAppError):
    """입력값이 형식에 맞지 않거나 빠져 있을 때 (400)"""
    status_code = 400
    default_message = "Invalid input"


class AuthenticationError(TodoAppError):
    """토큰이 없거나 잘못되었거나 만료되었을 때, 또는 로그인 정보가 틀렸을 때 (401)"""
    status_code = 401
    default_message = "Unauthorized"


class AuthorizationError(TodoAppError):
    """인증은 되었지만 다른 사용자의 리소스일 때 (403)"""
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(TodoAppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(TodoAppError):
    """유니크 키 충돌 (예: 이미 가입된 이메일) (409)"""
    status_code = 409
    default_message = "Conflict"


# ---- 토큰 검증 실패 ----

class InvalidSignature(AuthenticationError):
    """서명이 서비스 비밀키와 맞지 않음"""
    default_message = "Invalid token signature"


class TokenExpired(AuthenticationError):
    default_message = "Token expired"


class MalformedToken(AuthenticationError):
    """{sub, email, iat, exp} 형태로 해석할 수 없는 토큰"""
    default_message = "Malformed token"
