from sqlalchemy import Column, Integer, ForeignKey
from ..database import Base

class UserRole(Base):
    """
    사용자(User)와 역할(Role) 사이의 다대다(many-to-many) 관계를 연결하는 연관 테이블입니다.
    사용자는 이 계층 밖에서 관리되므로 user_id에는 외래 키를 두지 않습니다.
    """
    __tablename__ = 'user_roles'
    user_id = Column(Integer, primary_key=True)
    role_id = Column(Integer, ForeignKey('roles.id'), primary_key=True)

class RolePermission(Base):
    """
    역할(Role)과 권한(Permission) 사이의 다대다 관계를 연결하는 연관 테이블입니다.
    Role.permissions / Permission.roles 관계의 secondary 테이블로도 사용됩니다.
    """
    __tablename__ = 'role_permissions'
    role_id = Column(Integer, ForeignKey('roles.id'), primary_key=True)
    permission_id = Column(Integer, ForeignKey('permissions.id'), primary_key=True)
