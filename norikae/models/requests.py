from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# service별 requests 구조 정의


# 경로 검색
class SearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(..., alias="from", min_length=1, description="출발지 이름")
    to: str = Field(..., min_length=1, description="목적지 이름")
    fcode: Optional[str] = Field(None, description="출발지 역/정류장 코드")
    tcode: Optional[str] = Field(None, description="목적지 역/정류장 코드")
    date: Optional[str] = Field(
        None, pattern=r"^\d{12}$", description="기준 일시 (YYYYMMDDHHmm, 생략 시 현재)"
    )
    via: Optional[str] = Field(None, description="경유지 (쉼표 구분)")
    type: int = Field(
        default=1, ge=1, le=5, description="1=출발, 2=도착, 3=첫차, 4=막차, 5=현재"
    )
    sort: int = Field(default=0, ge=0, le=2, description="0=빠른순, 1=환승적은순, 2=저렴한순")

    def to_upstream_params(self, date: str) -> dict:
        """naviSearch 쿼리 파라미터"""
        return {
            "from": self.from_,
            "to": self.to,
            "fcode": self.fcode,
            "tcode": self.tcode,
            "via": self.via,
            "date": date,
            "type": self.type,
            "sort": self.sort,
        }
