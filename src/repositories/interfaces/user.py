from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.database.collections import RoleCollection
from src.repositories.scopes import Pagination

class IUserRepository(ABC):
    """사용자-역할(user_roles) 연결을 관리합니다. 사용자 자체는 이 계층 밖에서 관리됩니다."""

    @abstractmethod
    def migrate(self) -> None:
        pass

    @abstractmethod
    def add_roles(self, user_id: int, roles: RoleCollection) -> None:
        """사용자에게 역할을 추가합니다. 이미 가진 역할은 무시합니다."""
        pass

    @abstractmethod
    def replace_roles(self, user_id: int, roles: RoleCollection) -> None:
        """사용자의 역할을 주어진 역할 집합으로 교체합니다."""
        pass

    @abstractmethod
    def remove_roles(self, user_id: int, roles: RoleCollection) -> None:
        pass

    @abstractmethod
    def clear_roles(self, user_id: int) -> None:
        pass

    @abstractmethod
    def get_user_ids_of_role(self, role_id: int, pagination: Optional[Pagination] = None) -> Tuple[List[int], int]:
        """특정 역할을 가진 사용자 ID 목록과 전체 개수를 조회합니다."""
        pass
