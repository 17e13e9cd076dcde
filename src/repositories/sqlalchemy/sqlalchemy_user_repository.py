from typing import List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from src.database import models
from src.database.database import Base
from src.database.collections import RoleCollection
from src.repositories.interfaces import IUserRepository
from src.repositories.scopes import Pagination, paginate

class SqlalchemyUserRepository(IUserRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def migrate(self) -> None:
        Base.metadata.create_all(bind=self.db.get_bind(), tables=[models.Role.__table__, models.UserRole.__table__])

    def add_roles(self, user_id: int, roles: RoleCollection) -> None:
        try:
            self._insert_missing_roles(user_id, roles.ids())
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def replace_roles(self, user_id: int, roles: RoleCollection) -> None:
        role_ids = roles.ids()
        try:
            self.db.query(models.UserRole).filter(
                models.UserRole.user_id == user_id,
                models.UserRole.role_id.notin_(role_ids)
            ).delete(synchronize_session=False)
            self._insert_missing_roles(user_id, role_ids)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def remove_roles(self, user_id: int, roles: RoleCollection) -> None:
        try:
            self.db.query(models.UserRole).filter(
                models.UserRole.user_id == user_id,
                models.UserRole.role_id.in_(roles.ids())
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def clear_roles(self, user_id: int) -> None:
        try:
            self.db.query(models.UserRole).filter(models.UserRole.user_id == user_id).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def get_user_ids_of_role(self, role_id: int, pagination: Optional[Pagination] = None) -> Tuple[List[int], int]:
        query = self.db.query(models.UserRole.user_id).filter(models.UserRole.role_id == role_id)
        total_count = query.count()
        rows = paginate(query.order_by(models.UserRole.user_id.asc()), pagination).all()
        return [row[0] for row in rows], total_count

    def _insert_missing_roles(self, user_id: int, role_ids: List[int]) -> None:
        existing = {
            row[0] for row in self.db.query(models.UserRole.role_id)
            .filter(models.UserRole.user_id == user_id).all()
        }
        rows = [{"user_id": user_id, "role_id": rid} for rid in role_ids if rid not in existing]
        if rows:
            self.db.execute(models.UserRole.__table__.insert(), rows)
