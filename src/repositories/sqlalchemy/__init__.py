from .sqlalchemy_role_repository import SqlalchemyRoleRepository
from .sqlalchemy_permission_repository import SqlalchemyPermissionRepository
from .sqlalchemy_user_repository import SqlalchemyUserRepository

__all__ = ["SqlalchemyRoleRepository", "SqlalchemyPermissionRepository", "SqlalchemyUserRepository"]
