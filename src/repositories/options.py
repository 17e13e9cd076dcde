from typing import Optional
from pydantic import BaseModel

from src.repositories.scopes import Pagination

# 목록 조회 옵션
class RoleOption(BaseModel):
    with_permissions: bool = False
    pagination: Optional[Pagination] = None

class PermissionOption(BaseModel):
    pagination: Optional[Pagination] = None

# 부분 수정(patch)용 스키마. 명시적으로 지정한 필드만 반영됩니다.
class RolePatch(BaseModel):
    name: Optional[str] = None
    guard_name: Optional[str] = None
    description: Optional[str] = None

class PermissionPatch(BaseModel):
    name: Optional[str] = None
    guard_name: Optional[str] = None
    description: Optional[str] = None
