# tests/conftest.py
import pytest
from unittest.mock import patch
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.sql.expression import Insert
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.database import models
from src.repositories.sqlalchemy import (
    SqlalchemyRoleRepository, SqlalchemyPermissionRepository, SqlalchemyUserRepository
)

# ===================================================================
#  인메모리 SQLite 기반 Fixture 설정
# ===================================================================

@pytest.fixture
def db_session():
    """테스트마다 새로운 인메모리 SQLite DB와 세션을 생성합니다."""
    # StaticPool: 세션이 커밋/롤백 후에도 같은 인메모리 DB 연결을 계속 사용하도록 함
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    SqlalchemyRoleRepository(session).migrate()
    yield session
    session.close()
    engine.dispose()

@pytest.fixture
def role_repo(db_session) -> SqlalchemyRoleRepository:
    return SqlalchemyRoleRepository(db_session)

@pytest.fixture
def permission_repo(db_session) -> SqlalchemyPermissionRepository:
    return SqlalchemyPermissionRepository(db_session)

@pytest.fixture
def user_repo(db_session) -> SqlalchemyUserRepository:
    return SqlalchemyUserRepository(db_session)

@pytest.fixture
def seeded(role_repo, permission_repo):
    """
    기본 역할/권한 데이터를 생성합니다.
    roles: editor(1), viewer(2), admin(3)
    permissions: edit-articles(1), view-articles(2), delete-articles(3)
    """
    roles = {
        guard: role_repo.first_or_create(models.Role(name=guard.title(), guard_name=guard))
        for guard in ("editor", "viewer", "admin")
    }
    permissions = {
        guard: permission_repo.first_or_create(models.Permission(name=guard, guard_name=guard))
        for guard in ("edit-articles", "view-articles", "delete-articles")
    }
    return {"roles": roles, "permissions": permissions}

@pytest.fixture
def failing_inserts(db_session):
    """
    db_session.execute가 INSERT 문에서만 OperationalError를 내도록 만드는 컨텍스트를 반환합니다.
    DELETE 등 다른 문장은 실제로 실행되므로, 연관 교체 작업의 중간 실패를 재현할 수 있습니다.
    """
    real_execute = db_session.execute

    def execute(statement, *args, **kwargs):
        if isinstance(statement, Insert):
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))
        return real_execute(statement, *args, **kwargs)

    return lambda: patch.object(db_session, "execute", side_effect=execute)
