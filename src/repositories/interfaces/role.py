from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.database import models
from src.database.collections import RoleCollection, PermissionCollection
from src.repositories.options import RolePatch
from src.repositories.scopes import Pagination

class IRoleRepository(ABC):
    @abstractmethod
    def migrate(self) -> None:
        """roles, role_permissions, user_roles 테이블을 생성합니다."""
        pass

    # 단건 조회. 결과가 없으면 sqlalchemy.exc.NoResultFound가 발생합니다.

    @abstractmethod
    def get_role_by_id(self, role_id: int) -> models.Role:
        """고유 ID로 특정 역할을 조회합니다."""
        pass

    @abstractmethod
    def get_role_by_id_with_permissions(self, role_id: int) -> models.Role:
        """고유 ID로 특정 역할을 권한 목록과 함께 조회합니다."""
        pass

    @abstractmethod
    def get_role_by_guard_name(self, guard_name: str) -> models.Role:
        """guard name으로 특정 역할을 조회합니다."""
        pass

    @abstractmethod
    def get_role_by_guard_name_with_permissions(self, guard_name: str) -> models.Role:
        """guard name으로 특정 역할을 권한 목록과 함께 조회합니다."""
        pass

    # 다건 조회. 존재하지 않는 식별자는 오류 없이 결과에서 빠집니다.

    @abstractmethod
    def get_roles(self, role_ids: List[int]) -> RoleCollection:
        pass

    @abstractmethod
    def get_roles_with_permissions(self, role_ids: List[int]) -> RoleCollection:
        pass

    @abstractmethod
    def get_roles_by_guard_names(self, guard_names: List[str]) -> RoleCollection:
        pass

    @abstractmethod
    def get_roles_by_guard_names_with_permissions(self, guard_names: List[str]) -> RoleCollection:
        pass

    # ID 목록 조회

    @abstractmethod
    def get_role_ids(self, pagination: Optional[Pagination] = None) -> Tuple[List[int], int]:
        """
        역할 ID 목록을 조회합니다.

        Returns:
            (현재 페이지의 역할 ID 목록, 페이지네이션 적용 전 전체 개수) 튜플.
        """
        pass

    @abstractmethod
    def get_role_ids_of_user(self, user_id: int, pagination: Optional[Pagination] = None) -> Tuple[List[int], int]:
        """특정 사용자에게 부여된 역할 ID 목록과 전체 개수를 조회합니다."""
        pass

    @abstractmethod
    def get_role_ids_of_permission(self, permission_id: int, pagination: Optional[Pagination] = None) -> Tuple[List[int], int]:
        """특정 권한을 가진 역할 ID 목록과 전체 개수를 조회합니다."""
        pass

    # 생성 / 수정 / 삭제

    @abstractmethod
    def first_or_create(self, role: models.Role) -> models.Role:
        """같은 guard name의 역할이 있으면 그것을, 없으면 새로 저장한 역할을 반환합니다."""
        pass

    @abstractmethod
    def updates(self, role: models.Role, patch: RolePatch) -> models.Role:
        """patch에 지정된 필드만 수정합니다."""
        pass

    @abstractmethod
    def delete(self, role: models.Role) -> None:
        """
        역할을 삭제합니다.
        user_roles 행 삭제와 역할 삭제는 하나의 트랜잭션으로 처리되며, 실패 시 모두 롤백됩니다.
        """
        pass

    # 권한 연결

    @abstractmethod
    def add_permissions(self, role: models.Role, permissions: PermissionCollection) -> None:
        pass

    @abstractmethod
    def replace_permissions(self, role: models.Role, permissions: PermissionCollection) -> None:
        pass

    @abstractmethod
    def remove_permissions(self, role: models.Role, permissions: PermissionCollection) -> None:
        pass

    @abstractmethod
    def clear_permissions(self, role: models.Role) -> None:
        pass

    # 권한 확인

    @abstractmethod
    def has_permission(self, roles: RoleCollection, permission: models.Permission) -> bool:
        """역할들 중 하나라도 주어진 권한을 가지고 있는지 확인합니다."""
        pass

    @abstractmethod
    def has_all_permissions(self, roles: RoleCollection, permissions: PermissionCollection) -> bool:
        """역할들이 함께(합집합으로) 주어진 모든 권한을 가지고 있는지 확인합니다."""
        pass

    @abstractmethod
    def has_any_permissions(self, roles: RoleCollection, permissions: PermissionCollection) -> bool:
        """역할들 중 하나라도 주어진 권한 중 하나라도 가지고 있는지 확인합니다."""
        pass
