import logging

from src.config import settings
from .database import SessionLocal
from src.repositories.sqlalchemy import (
    SqlalchemyRoleRepository, SqlalchemyPermissionRepository, SqlalchemyUserRepository
)

logger = logging.getLogger(__name__)

def initialize_db():
    """
    RBAC 테이블(roles, permissions, role_permissions, user_roles)을 생성합니다.
    다른 어떤 리포지토리 작업보다 먼저 한 번 실행되어야 합니다.
    이미 존재하는 테이블은 다시 생성하지 않습니다.
    """
    logger.info("DB 초기화 중 (SQLAlchemy 사용)...")

    db = SessionLocal()
    try:
        SqlalchemyRoleRepository(db).migrate()
        SqlalchemyPermissionRepository(db).migrate()
        SqlalchemyUserRepository(db).migrate()
        logger.info("테이블 생성 완료.")
    finally:
        db.close()

if __name__ == '__main__':
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    initialize_db()
