"""Service-layer rule violations.

API 레이어에서 HTTP 상태 코드로 변환된다 (status_code 속성).
"""


class ServiceError(ValueError):
    """규칙 위반 기본 클래스 (400)"""

    status_code = 400


class NotFoundError(ServiceError):
    """참조 대상 없음 (404)"""

    status_code = 404


class InvalidRoleError(ServiceError):
    """알 수 없는 역할 문자열"""


class InactiveCharacterError(ServiceError):
    """비활성 캐릭터"""


class RoomClosedError(ServiceError):
    """비활성 룸에 참가/발화"""


class RoomFullError(ServiceError):
    """max_members 초과"""

    status_code = 409


class DuplicateMemberError(ServiceError):
    """이미 참가 중"""

    status_code = 409


class NotAMemberError(ServiceError):
    """룸 멤버가 아님"""
