class ApiError(Exception):
    """
    기본 API 예외의 최상위 클래스
    - 모든 커스텀 API 예외가 이 클래스를 상속
    - main.py의 예외 핸들러가 EXCEPTION_STATUS_MAP으로 상태 코드를 결정
    """
    def __init__(self, message: str):
        """
        - message: 사용자에게 전달할 예외 메시지 문자열
        """
        # 예외 메시지 설정
        self.message = message
        # 상위 Exception 초기화
        super().__init__(message)


class BadRequestError(ApiError):
    """400 Bad Request (입력 누락/형식 오류)"""
    pass


class InvalidCredentialsError(BadRequestError):
    """400 - 로그인 비밀번호 불일치"""
    pass


class UpstreamServiceError(BadRequestError):
    """400 - 외부 서비스(ID 제공자, 이미지 호스트) 실패"""
    pass


class AuthProviderError(UpstreamServiceError):
    """400 - 페더레이션 ID 토큰 검증 실패"""
    pass


class UnauthorizedError(ApiError):
    """401 Unauthorized"""
    pass


class InvalidTokenError(UnauthorizedError):
    """401 - 서명/만료 오류, 폐기된 토큰, 존재하지 않는 사용자"""
    pass


class ForbiddenError(ApiError):
    """403 Forbidden"""
    pass


class NotFoundError(ApiError):
    """404 Not Found"""
    pass
