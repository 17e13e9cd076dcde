# src/services/exceptions.py

# 저장소(SQLAlchemy) 계층의 오류(IntegrityError, OperationalError 등)는
# 이 모듈에서 감싸지 않고 그대로 호출자에게 전달됩니다.

# --- Not Found Exceptions ---
class RoleNotFoundError(Exception):
    """역할을 찾을 수 없을 때"""
    pass

class PermissionNotFoundError(Exception):
    """권한을 찾을 수 없을 때"""
    pass
