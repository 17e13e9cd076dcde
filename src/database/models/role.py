from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from ..database import Base

class Role(Base):
    """
    사용자에게 부여되는 권한(Permission)의 묶음을 정의합니다.
    (예: 'editor', 'viewer').
    guard_name은 외부에서 역할을 식별하는 고유 키이며, 숫자 ID는 내부용입니다.
    """
    __tablename__ = "roles"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    guard_name = Column(String, unique=True, nullable=False, index=True)
    description = Column(String)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    permissions = relationship("Permission", secondary="role_permissions", back_populates="roles")
