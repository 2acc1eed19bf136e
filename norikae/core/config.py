import os
from dotenv import load_dotenv

load_dotenv()  # 환경변수 읽어오기


class Settings:
    PROJECT_NAME: str = "Norikae Navi Backend"
    VERSION: str = "1.0.0"

    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    PORT: int = int(os.getenv("PORT", 3000))

    # 업스트림 엔드포인트 (비공개 API => 주소 변경 시 환경변수로 교체)
    NAVI_BASE_URL: str = os.getenv(
        "NAVI_BASE_URL", "https://navi-transit.yahooapis.jp"
    )
    POI_BASE_URL: str = os.getenv("POI_BASE_URL", "https://poi-transit.yahooapis.jp")
    USER_AGENT: str = os.getenv("USER_AGENT", "Mozilla/5.0 (norikae-navi)")
    UPSTREAM_TIMEOUT_SECONDS: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", 15))

    # 역 이름 조회 동시성 제한
    STATION_LOOKUP_CONCURRENCY: int = int(os.getenv("STATION_LOOKUP_CONCURRENCY", 5))
    # 한 요청당 조회 가능한 역 코드 수 (초과 시 호출 측에서 거절)
    STATION_LOOKUP_MAX_CODES: int = int(os.getenv("STATION_LOOKUP_MAX_CODES", 100))

    # 성능 모니터링
    ENABLE_PERFORMANCE_MONITORING: bool = (
        os.getenv("ENABLE_PERFORMANCE_MONITORING", "true").lower() == "true"
    )
    SLOW_REQUEST_THRESHOLD_MS: int = int(os.getenv("SLOW_REQUEST_THRESHOLD_MS", 3000))

    # 검색 메트릭 로그 활성화 플래그
    ENABLE_ROUTE_METRICS: bool = (
        os.getenv("ENABLE_ROUTE_METRICS", "true").lower() == "true"
    )

    # CORS 설정
    ALLOWED_ORIGINS: list[str] = os.getenv(
        "ALLOWED_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000",
    ).split(",")


settings = Settings()  # 모듈화


# 업스트림 표기 규칙: 도보 구간은 노선명 "徒歩" + 회색(230,230,230)
WALK_LINE_NAME = "徒歩"
WALK_COLOR = (230, 230, 230)

# 회사명/노선명에 포함되면 버스로 판단
BUS_MARKERS = ("バス", "bus")

# 배지 표시명 (프론트 표기 그대로)
BADGE_LABELS = {
    "fastest": "最速",
    "fewestTransfers": "乗換少",
    "cheapest": "最安",
}

# 시각 지정 유형 (naviSearch type 파라미터)
TIME_TYPES = {
    1: "departure",
    2: "arrival",
    3: "first_train",
    4: "last_train",
    5: "now",
}

# 정렬 기준 (naviSearch sort 파라미터)
SORT_TYPES = {
    0: "fastest",
    1: "fewest_transfers",
    2: "cheapest",
}
