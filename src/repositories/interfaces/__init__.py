from .role import IRoleRepository
from .permission import IPermissionRepository
from .user import IUserRepository

__all__ = ["IRoleRepository", "IPermissionRepository", "IUserRepository"]
