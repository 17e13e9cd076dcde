from typing import Dict, Any, List, Optional, Tuple

from sqlalchemy.exc import NoResultFound

from src.database import models
from src.database.collections import RoleCollection, PermissionCollection
from src.repositories.interfaces import IRoleRepository, IPermissionRepository, IUserRepository
from src.repositories.options import RoleOption, PermissionOption, RolePatch, PermissionPatch
from src.services.exceptions import RoleNotFoundError, PermissionNotFoundError

class AuthorizationService:
    """역할, 권한, 사용자-역할 연결 및 권한 확인 기능을 guard name 기준으로 제공합니다."""

    def __init__(self, role_repo: IRoleRepository, permission_repo: IPermissionRepository, user_repo: IUserRepository):
        """
        AuthorizationService를 초기화합니다.

        Args:
            role_repo: 역할 데이터와 역할-권한 연결에 접근하기 위한 리포지토리.
            permission_repo: 권한 데이터에 접근하기 위한 리포지토리.
            user_repo: 사용자-역할 연결에 접근하기 위한 리포지토리.
        """
        self.role_repo = role_repo
        self.permission_repo = permission_repo
        self.user_repo = user_repo

    # ------------------------------------------------------------------
    # 역할 / 권한 관리
    # ------------------------------------------------------------------

    def create_role(self, guard_name: str, name: Optional[str] = None, description: Optional[str] = None) -> Dict[str, Any]:
        """
        역할을 생성합니다. 같은 guard name의 역할이 이미 있으면 기존 역할을 반환합니다.

        Returns:
            역할의 id, name, guard_name, description을 담은 딕셔너리.
        """
        role = models.Role(name=name or guard_name, guard_name=guard_name, description=description)
        return self._role_to_dict(self.role_repo.first_or_create(role))

    def create_permission(self, guard_name: str, name: Optional[str] = None, description: Optional[str] = None) -> Dict[str, Any]:
        """권한을 생성합니다. 같은 guard name의 권한이 이미 있으면 기존 권한을 반환합니다."""
        permission = models.Permission(name=name or guard_name, guard_name=guard_name, description=description)
        return self._permission_to_dict(self.permission_repo.first_or_create(permission))

    def get_role(self, guard_name: str, with_permissions: bool = False) -> Dict[str, Any]:
        """
        guard name으로 역할을 조회합니다.

        Raises:
            RoleNotFoundError: 해당 guard name의 역할을 찾을 수 없을 때.
        """
        role = self._find_role(guard_name, with_permissions=with_permissions)
        return self._role_to_dict(role, with_permissions=with_permissions)

    def get_permission(self, guard_name: str) -> Dict[str, Any]:
        """
        guard name으로 권한을 조회합니다.

        Raises:
            PermissionNotFoundError: 해당 guard name의 권한을 찾을 수 없을 때.
        """
        return self._permission_to_dict(self._find_permission(guard_name))

    def list_roles(self, option: Optional[RoleOption] = None) -> Tuple[List[Dict[str, Any]], int]:
        """
        역할 목록을 조회합니다.

        Returns:
            (역할 딕셔너리 목록, 페이지네이션 적용 전 전체 개수) 튜플.
        """
        option = option or RoleOption()
        role_ids, total_count = self.role_repo.get_role_ids(option.pagination)
        return self._roles_by_ids(role_ids, option.with_permissions), total_count

    def list_permissions(self, option: Optional[PermissionOption] = None) -> Tuple[List[Dict[str, Any]], int]:
        """권한 목록과 전체 개수를 조회합니다."""
        option = option or PermissionOption()
        permission_ids, total_count = self.permission_repo.get_permission_ids(option.pagination)
        permissions = sorted(self.permission_repo.get_permissions(permission_ids), key=lambda p: p.id)
        return [self._permission_to_dict(p) for p in permissions], total_count

    def update_role(self, guard_name: str, patch: RolePatch) -> Dict[str, Any]:
        """patch에 지정된 필드만 수정합니다."""
        role = self._find_role(guard_name)
        return self._role_to_dict(self.role_repo.updates(role, patch))

    def update_permission(self, guard_name: str, patch: PermissionPatch) -> Dict[str, Any]:
        permission = self._find_permission(guard_name)
        return self._permission_to_dict(self.permission_repo.updates(permission, patch))

    def delete_role(self, guard_name: str) -> bool:
        """
        역할을 삭제합니다. 역할에 연결된 사용자-역할, 역할-권한 연결도 함께 삭제됩니다.

        Raises:
            RoleNotFoundError: 해당 guard name의 역할을 찾을 수 없을 때.
        """
        self.role_repo.delete(self._find_role(guard_name))
        return True

    def delete_permission(self, guard_name: str) -> bool:
        self.permission_repo.delete(self._find_permission(guard_name))
        return True

    # ------------------------------------------------------------------
    # 역할-권한 연결
    # ------------------------------------------------------------------

    def give_permissions_to_role(self, role_guard_name: str, permission_guard_names: List[str]) -> bool:
        role = self._find_role(role_guard_name)
        self.role_repo.add_permissions(role, self._resolve_permissions(permission_guard_names))
        return True

    def sync_permissions_of_role(self, role_guard_name: str, permission_guard_names: List[str]) -> bool:
        """역할의 권한을 주어진 권한 목록과 정확히 같아지도록 교체합니다."""
        role = self._find_role(role_guard_name)
        self.role_repo.replace_permissions(role, self._resolve_permissions(permission_guard_names))
        return True

    def revoke_permissions_from_role(self, role_guard_name: str, permission_guard_names: List[str]) -> bool:
        role = self._find_role(role_guard_name)
        self.role_repo.remove_permissions(role, self._resolve_permissions(permission_guard_names))
        return True

    def clear_permissions_of_role(self, role_guard_name: str) -> bool:
        self.role_repo.clear_permissions(self._find_role(role_guard_name))
        return True

    # ------------------------------------------------------------------
    # 사용자-역할 연결
    # ------------------------------------------------------------------

    def assign_roles_to_user(self, user_id: int, role_guard_names: List[str]) -> bool:
        self.user_repo.add_roles(user_id, self._resolve_roles(role_guard_names))
        return True

    def sync_roles_of_user(self, user_id: int, role_guard_names: List[str]) -> bool:
        self.user_repo.replace_roles(user_id, self._resolve_roles(role_guard_names))
        return True

    def revoke_roles_from_user(self, user_id: int, role_guard_names: List[str]) -> bool:
        self.user_repo.remove_roles(user_id, self._resolve_roles(role_guard_names))
        return True

    def list_roles_of_user(self, user_id: int, option: Optional[RoleOption] = None) -> Tuple[List[Dict[str, Any]], int]:
        """사용자에게 부여된 역할 목록과 전체 개수를 조회합니다."""
        option = option or RoleOption()
        role_ids, total_count = self.role_repo.get_role_ids_of_user(user_id, option.pagination)
        return self._roles_by_ids(role_ids, option.with_permissions), total_count

    # ------------------------------------------------------------------
    # 권한 확인
    # ------------------------------------------------------------------

    def role_has_permission(self, role_guard_name: str, permission_guard_name: str) -> bool:
        roles = RoleCollection([self._find_role(role_guard_name)])
        return self.role_repo.has_permission(roles, self._find_permission(permission_guard_name))

    def roles_have_all_permissions(self, role_guard_names: List[str], permission_guard_names: List[str]) -> bool:
        """역할들이 함께 주어진 모든 권한을 가지고 있는지 확인합니다."""
        roles = self._resolve_roles(role_guard_names)
        return self.role_repo.has_all_permissions(roles, self._resolve_permissions(permission_guard_names))

    def roles_have_any_permissions(self, role_guard_names: List[str], permission_guard_names: List[str]) -> bool:
        roles = self._resolve_roles(role_guard_names)
        return self.role_repo.has_any_permissions(roles, self._resolve_permissions(permission_guard_names))

    def user_has_permission(self, user_id: int, permission_guard_name: str) -> bool:
        """
        사용자가 가진 역할 중 하나라도 주어진 권한을 가지고 있는지 확인합니다.

        Raises:
            PermissionNotFoundError: 해당 guard name의 권한을 찾을 수 없을 때.
        """
        permission = self._find_permission(permission_guard_name)
        return self.role_repo.has_permission(self._roles_of_user(user_id), permission)

    def user_has_all_permissions(self, user_id: int, permission_guard_names: List[str]) -> bool:
        permissions = self._resolve_permissions(permission_guard_names)
        return self.role_repo.has_all_permissions(self._roles_of_user(user_id), permissions)

    def user_has_any_permissions(self, user_id: int, permission_guard_names: List[str]) -> bool:
        permissions = self._resolve_permissions(permission_guard_names)
        return self.role_repo.has_any_permissions(self._roles_of_user(user_id), permissions)

    # ------------------------------------------------------------------
    # 내부 헬퍼
    # ------------------------------------------------------------------

    def _find_role(self, guard_name: str, with_permissions: bool = False) -> models.Role:
        try:
            if with_permissions:
                return self.role_repo.get_role_by_guard_name_with_permissions(guard_name)
            return self.role_repo.get_role_by_guard_name(guard_name)
        except NoResultFound:
            raise RoleNotFoundError(f"Role '{guard_name}' not found.")

    def _find_permission(self, guard_name: str) -> models.Permission:
        try:
            return self.permission_repo.get_permission_by_guard_name(guard_name)
        except NoResultFound:
            raise PermissionNotFoundError(f"Permission '{guard_name}' not found.")

    def _resolve_roles(self, guard_names: List[str]) -> RoleCollection:
        # 다건 조회는 없는 guard name을 조용히 버리므로, 여기서 누락 여부를 직접 검사합니다.
        roles = self.role_repo.get_roles_by_guard_names(guard_names)
        missing = set(guard_names) - set(roles.guard_names())
        if missing:
            raise RoleNotFoundError(f"Roles not found: {', '.join(sorted(missing))}")
        return roles

    def _resolve_permissions(self, guard_names: List[str]) -> PermissionCollection:
        permissions = self.permission_repo.get_permissions_by_guard_names(guard_names)
        missing = set(guard_names) - set(permissions.guard_names())
        if missing:
            raise PermissionNotFoundError(f"Permissions not found: {', '.join(sorted(missing))}")
        return permissions

    def _roles_of_user(self, user_id: int) -> RoleCollection:
        role_ids, _ = self.role_repo.get_role_ids_of_user(user_id)
        return self.role_repo.get_roles(role_ids)

    def _roles_by_ids(self, role_ids: List[int], with_permissions: bool) -> List[Dict[str, Any]]:
        if with_permissions:
            roles = self.role_repo.get_roles_with_permissions(role_ids)
        else:
            roles = self.role_repo.get_roles(role_ids)
        # IN 조회는 순서를 보장하지 않으므로 ID 목록의 순서대로 다시 정렬합니다.
        order = {role_id: index for index, role_id in enumerate(role_ids)}
        roles = sorted(roles, key=lambda r: order.get(r.id, len(order)))
        return [self._role_to_dict(r, with_permissions=with_permissions) for r in roles]

    @staticmethod
    def _role_to_dict(role: models.Role, with_permissions: bool = False) -> Dict[str, Any]:
        data = {"id": role.id, "name": role.name, "guard_name": role.guard_name, "description": role.description}
        if with_permissions:
            data["permissions"] = sorted(p.guard_name for p in role.permissions)
        return data

    @staticmethod
    def _permission_to_dict(permission: models.Permission) -> Dict[str, Any]:
        return {
            "id": permission.id,
            "name": permission.name,
            "guard_name": permission.guard_name,
            "description": permission.description,
        }
