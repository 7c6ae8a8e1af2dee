"""Users 도메인 Pydantic 스키마"""

from pydantic import BaseModel, Field

from admin_auth.shared.constants import Pagination


class UserPageQuery(BaseModel):
    """사용자 목록 페이지 요청"""

    page: int = Field(1, ge=1, description="페이지 번호 (1부터 시작)")
    page_size: int = Field(
        Pagination.DEFAULT_PAGE_SIZE,
        ge=1,
        le=Pagination.MAX_PAGE_SIZE,
        description="페이지 크기",
    )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class UserPageItem(BaseModel):
    """사용자 목록 항목"""

    id: int = Field(..., description="사용자 ID")
    username: str = Field(..., description="사용자명")
    nickname: str | None = Field(None, description="닉네임")
    dept_id: int | None = Field(None, description="부서 ID")
    status: int = Field(..., description="상태 (1: 정상)")
