from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from src.config import settings

# 데이터베이스 연결 문자열은 설정(.env 또는 환경 변수 DATABASE_URL)에서 읽어옵니다.
SQLALCHEMY_DATABASE_URL = settings.database_url

# SQLite URL일 때만 check_same_thread를 끕니다. 다른 드라이버에는 연결 인자를 넘기지 않습니다.
connect_args = {"check_same_thread": False} if SQLALCHEMY_DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args=connect_args, echo=settings.database_echo
)

# 리포지토리에 주입할 세션 팩토리. 변경 사항은 리포지토리의 commit 호출 시점에만 반영됩니다.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# roles, permissions 및 연관 테이블 모델의 공통 Base
Base = declarative_base()
