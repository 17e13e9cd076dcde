from .role import Role
from .permission import Permission
from .association import UserRole, RolePermission

__all__ = ["Role", "Permission", "UserRole", "RolePermission"]
