from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from ..database import Base

class Permission(Base):
    """
    시스템에서 허용되는 하나의 행위를 나타냅니다.
    (예: 'edit-articles').
    역할(Role)에 묶여서 사용자에게 전달됩니다.
    """
    __tablename__ = "permissions"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    guard_name = Column(String, unique=True, nullable=False, index=True)
    description = Column(String)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    roles = relationship("Role", secondary="role_permissions", back_populates="permissions")
