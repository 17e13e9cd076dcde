from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.database import models
from src.database.collections import PermissionCollection
from src.repositories.options import PermissionPatch
from src.repositories.scopes import Pagination

class IPermissionRepository(ABC):
    @abstractmethod
    def migrate(self) -> None:
        """permissions, role_permissions 테이블을 생성합니다."""
        pass

    @abstractmethod
    def get_permission_by_id(self, permission_id: int) -> models.Permission:
        """고유 ID로 특정 권한을 조회합니다. 없으면 NoResultFound가 발생합니다."""
        pass

    @abstractmethod
    def get_permission_by_guard_name(self, guard_name: str) -> models.Permission:
        """guard name으로 특정 권한을 조회합니다. 없으면 NoResultFound가 발생합니다."""
        pass

    @abstractmethod
    def get_permissions(self, permission_ids: List[int]) -> PermissionCollection:
        pass

    @abstractmethod
    def get_permissions_by_guard_names(self, guard_names: List[str]) -> PermissionCollection:
        pass

    @abstractmethod
    def get_permission_ids(self, pagination: Optional[Pagination] = None) -> Tuple[List[int], int]:
        pass

    @abstractmethod
    def get_permission_ids_of_role(self, role_id: int, pagination: Optional[Pagination] = None) -> Tuple[List[int], int]:
        pass

    @abstractmethod
    def first_or_create(self, permission: models.Permission) -> models.Permission:
        pass

    @abstractmethod
    def updates(self, permission: models.Permission, patch: PermissionPatch) -> models.Permission:
        pass

    @abstractmethod
    def delete(self, permission: models.Permission) -> None:
        """role_permissions 행과 권한을 하나의 트랜잭션으로 삭제합니다."""
        pass
