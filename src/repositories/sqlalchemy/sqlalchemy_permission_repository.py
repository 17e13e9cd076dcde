import logging
from typing import List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from src.database import models
from src.database.database import Base
from src.database.collections import PermissionCollection
from src.repositories.interfaces import IPermissionRepository
from src.repositories.options import PermissionPatch
from src.repositories.scopes import Pagination, paginate

logger = logging.getLogger(__name__)

class SqlalchemyPermissionRepository(IPermissionRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def migrate(self) -> None:
        Base.metadata.create_all(
            bind=self.db.get_bind(),
            tables=[models.Role.__table__, models.Permission.__table__, models.RolePermission.__table__],
        )

    def get_permission_by_id(self, permission_id: int) -> models.Permission:
        return self.db.query(models.Permission).filter(models.Permission.id == permission_id).one()

    def get_permission_by_guard_name(self, guard_name: str) -> models.Permission:
        return self.db.query(models.Permission).filter(models.Permission.guard_name == guard_name).one()

    def get_permissions(self, permission_ids: List[int]) -> PermissionCollection:
        return PermissionCollection(self.db.query(models.Permission).filter(models.Permission.id.in_(permission_ids)).all())

    def get_permissions_by_guard_names(self, guard_names: List[str]) -> PermissionCollection:
        return PermissionCollection(self.db.query(models.Permission).filter(models.Permission.guard_name.in_(guard_names)).all())

    def get_permission_ids(self, pagination: Optional[Pagination] = None) -> Tuple[List[int], int]:
        query = self.db.query(models.Permission.id)
        total_count = query.count()
        rows = paginate(query.order_by(models.Permission.id.asc()), pagination).all()
        return [row[0] for row in rows], total_count

    def get_permission_ids_of_role(self, role_id: int, pagination: Optional[Pagination] = None) -> Tuple[List[int], int]:
        query = self.db.query(models.RolePermission.permission_id).filter(models.RolePermission.role_id == role_id)
        total_count = query.count()
        rows = paginate(query.order_by(models.RolePermission.permission_id.asc()), pagination).all()
        return [row[0] for row in rows], total_count

    def first_or_create(self, permission: models.Permission) -> models.Permission:
        existing = self.db.query(models.Permission).filter(models.Permission.guard_name == permission.guard_name).first()
        if existing:
            return existing
        try:
            self.db.add(permission)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(permission)
        logger.info(f"권한 생성: guard_name={permission.guard_name}, id={permission.id}")
        return permission

    def updates(self, permission: models.Permission, patch: PermissionPatch) -> models.Permission:
        for field, value in patch.model_dump(exclude_unset=True).items():
            setattr(permission, field, value)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(permission)
        return permission

    def delete(self, permission: models.Permission) -> None:
        permission_id = permission.id
        try:
            self.db.query(models.RolePermission).filter(models.RolePermission.permission_id == permission_id).delete(synchronize_session=False)
            self.db.expire(permission, ["roles"])
            self.db.delete(permission)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning(f"권한 삭제 실패, 롤백합니다: id={permission_id}")
            raise
        logger.info(f"권한 삭제: id={permission_id}")
