# custom exception 정의 및 관리
from typing import Optional


class NorikaeException(Exception):  # 예외 구조 정의
    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class UpstreamSearchException(NorikaeException):
    """경로 검색 업스트림 호출 자체가 실패한 경우 (검색 전체 실패)"""

    def __init__(
        self,
        message: str = "経路検索に失敗しました",
        status_code: Optional[int] = None,
    ):
        self.status_code = status_code
        super().__init__(message, code="SEARCH_FAILED")


class StationLookupException(NorikaeException):
    # 역 1건 조회 실패 => resolver에서 항상 잡아서 fallback 처리
    def __init__(self, station_id: str, message: str = "駅情報を取得できません"):
        self.station_id = station_id
        super().__init__(f"{message}: {station_id}", code="STATION_LOOKUP_FAILED")


class InvalidSearchRequestException(NorikaeException):
    def __init__(self, message: str = "リクエストが不正です"):
        super().__init__(message, code="INVALID_REQUEST")
