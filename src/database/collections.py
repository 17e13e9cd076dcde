from typing import List

class ModelCollection(list):
    """
    Role / Permission 모델 목록을 감싸는 컬렉션입니다.
    권한 확인 로직은 이 컬렉션의 ids()와 len()만 사용합니다.
    """

    def ids(self) -> List[int]:
        """중복을 제거한 ID 목록을 처음 등장한 순서대로 반환합니다."""
        seen = set()
        result = []
        for item in self:
            if item.id not in seen:
                seen.add(item.id)
                result.append(item.id)
        return result

    def guard_names(self) -> List[str]:
        return [item.guard_name for item in self]

class RoleCollection(ModelCollection):
    """역할(Role) 모델의 컬렉션."""

class PermissionCollection(ModelCollection):
    """권한(Permission) 모델의 컬렉션."""
