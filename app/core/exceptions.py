"""
커스텀 예외 클래스 정의.

이 모듈은 애플리케이션 전체에서 사용할 예외 클래스들을 정의합니다.
예외 계층 구조를 통해 타입별 에러 처리가 가능합니다.
"""


class AppException(Exception):
    """
    애플리케이션 기본 예외.

    모든 커스텀 예외의 기본 클래스입니다.
    일반적인 애플리케이션 에러에 사용됩니다.
    """
    pass


class DatabaseException(AppException):
    """
    데이터베이스 관련 예외.

    SQLAlchemy 세션 커밋 실패, 연결 실패 등
    저장소 작업 중 발생하는 에러에 사용됩니다.
    """
    pass


class BusinessLogicException(AppException):
    """
    비즈니스 로직 예외.

    자기 자신을 부모 폴더로 지정하는 것처럼
    도메인 규칙을 위반하는 요청에 사용됩니다.
    """
    pass


class ConflictException(BusinessLogicException):
    """
    리소스 상태 충돌.

    같은 위치의 폴더 이름 중복, 태그 이름 중복,
    하위 항목이 남아 있는 폴더 삭제 시도 등에 사용됩니다.
    """
    pass


class ResourceNotFoundException(AppException):
    """
    리소스를 찾을 수 없음.

    요청한 리소스(폴더, 북마크, 태그)가 존재하지 않을 때 사용됩니다.
    """
    pass


class ValidationException(AppException):
    """
    입력값 검증 실패.

    검색 조건이 하나도 없는 검색 요청처럼
    요청 데이터의 형식이나 값이 유효하지 않을 때 사용됩니다.
    """
    pass
