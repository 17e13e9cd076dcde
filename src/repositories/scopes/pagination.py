from typing import Optional
from pydantic import BaseModel, Field
from sqlalchemy.orm import Query

from src.config import settings

def offset_cal(page: int, limit: int) -> int:
    """(page, limit)을 쿼리의 offset으로 변환합니다. 음수가 나오지 않도록 0으로 고정합니다."""
    return max((page - 1) * limit, 0)

class Pagination(BaseModel):
    """
    ID 목록 조회에 사용하는 페이지네이션 옵션입니다.

    페이지네이션을 적용하지 않으려면 이 객체 대신 None을 넘깁니다.
    (None은 "모든 행", Pagination(page=1)은 "첫 페이지"로 서로 다릅니다.)
    """
    page: int = Field(default=1, ge=1)
    limit: int = Field(default_factory=lambda: settings.default_page_limit, ge=1)

    @property
    def offset(self) -> int:
        return offset_cal(self.page, self.limit)

def paginate(query: Query, pagination: Optional[Pagination]) -> Query:
    """페이지네이션 옵션이 있으면 offset/limit을 적용하고, 없으면 쿼리를 그대로 반환합니다."""
    if pagination is None:
        return query
    return query.offset(pagination.offset).limit(pagination.limit)
