import logging
from typing import List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
from src.database import models
from src.database.database import Base
from src.database.collections import RoleCollection, PermissionCollection
from src.repositories.interfaces import IRoleRepository
from src.repositories.options import RolePatch
from src.repositories.scopes import Pagination, paginate

logger = logging.getLogger(__name__)

class SqlalchemyRoleRepository(IRoleRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def migrate(self) -> None:
        Base.metadata.create_all(
            bind=self.db.get_bind(),
            tables=[
                models.Role.__table__,
                models.Permission.__table__,
                models.RolePermission.__table__,
                models.UserRole.__table__,
            ],
        )

    # 단건 조회

    def get_role_by_id(self, role_id: int) -> models.Role:
        return self.db.query(models.Role).filter(models.Role.id == role_id).one()

    def get_role_by_id_with_permissions(self, role_id: int) -> models.Role:
        return self.db.query(models.Role).options(joinedload(models.Role.permissions)).filter(models.Role.id == role_id).one()

    def get_role_by_guard_name(self, guard_name: str) -> models.Role:
        return self.db.query(models.Role).filter(models.Role.guard_name == guard_name).one()

    def get_role_by_guard_name_with_permissions(self, guard_name: str) -> models.Role:
        return self.db.query(models.Role).options(joinedload(models.Role.permissions)).filter(models.Role.guard_name == guard_name).one()

    # 다건 조회

    def get_roles(self, role_ids: List[int]) -> RoleCollection:
        return RoleCollection(self.db.query(models.Role).filter(models.Role.id.in_(role_ids)).all())

    def get_roles_with_permissions(self, role_ids: List[int]) -> RoleCollection:
        return RoleCollection(self.db.query(models.Role).options(joinedload(models.Role.permissions)).filter(models.Role.id.in_(role_ids)).all())

    def get_roles_by_guard_names(self, guard_names: List[str]) -> RoleCollection:
        return RoleCollection(self.db.query(models.Role).filter(models.Role.guard_name.in_(guard_names)).all())

    def get_roles_by_guard_names_with_permissions(self, guard_names: List[str]) -> RoleCollection:
        return RoleCollection(self.db.query(models.Role).options(joinedload(models.Role.permissions)).filter(models.Role.guard_name.in_(guard_names)).all())

    # ID 목록 조회

    def get_role_ids(self, pagination: Optional[Pagination] = None) -> Tuple[List[int], int]:
        query = self.db.query(models.Role.id)
        total_count = query.count()
        rows = paginate(query.order_by(models.Role.id.asc()), pagination).all()
        return [row[0] for row in rows], total_count

    def get_role_ids_of_user(self, user_id: int, pagination: Optional[Pagination] = None) -> Tuple[List[int], int]:
        query = self.db.query(models.UserRole.role_id).filter(models.UserRole.user_id == user_id)
        total_count = query.count()
        rows = paginate(query.order_by(models.UserRole.role_id.asc()), pagination).all()
        return [row[0] for row in rows], total_count

    def get_role_ids_of_permission(self, permission_id: int, pagination: Optional[Pagination] = None) -> Tuple[List[int], int]:
        query = self.db.query(models.RolePermission.role_id).filter(models.RolePermission.permission_id == permission_id)
        total_count = query.count()
        rows = paginate(query.order_by(models.RolePermission.role_id.asc()), pagination).all()
        return [row[0] for row in rows], total_count

    # 생성 / 수정 / 삭제

    def first_or_create(self, role: models.Role) -> models.Role:
        # guard_name만 비교합니다. 나머지 필드는 기존 역할을 찾는 데 사용하지 않습니다.
        existing = self.db.query(models.Role).filter(models.Role.guard_name == role.guard_name).first()
        if existing:
            return existing
        try:
            self.db.add(role)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(role)
        logger.info(f"역할 생성: guard_name={role.guard_name}, id={role.id}")
        return role

    def updates(self, role: models.Role, patch: RolePatch) -> models.Role:
        for field, value in patch.model_dump(exclude_unset=True).items():
            setattr(role, field, value)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(role)
        return role

    def delete(self, role: models.Role) -> None:
        role_id = role.id
        try:
            # 1. user_roles 연결 행 삭제
            self.db.query(models.UserRole).filter(models.UserRole.role_id == role_id).delete(synchronize_session=False)
            # 2. role_permissions 연결 행 삭제
            self.db.query(models.RolePermission).filter(models.RolePermission.role_id == role_id).delete(synchronize_session=False)
            # 이미 로드된 permissions 컬렉션으로 같은 행을 다시 지우지 않도록 만료시킵니다.
            self.db.expire(role, ["permissions"])
            # 3. 역할 삭제
            self.db.delete(role)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning(f"역할 삭제 실패, 롤백합니다: id={role_id}")
            raise
        logger.info(f"역할 삭제: id={role_id}")

    # 권한 연결

    def add_permissions(self, role: models.Role, permissions: PermissionCollection) -> None:
        try:
            self._insert_missing_permissions(role.id, permissions.ids())
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def replace_permissions(self, role: models.Role, permissions: PermissionCollection) -> None:
        permission_ids = permissions.ids()
        try:
            self.db.query(models.RolePermission).filter(
                models.RolePermission.role_id == role.id,
                models.RolePermission.permission_id.notin_(permission_ids)
            ).delete(synchronize_session=False)
            self._insert_missing_permissions(role.id, permission_ids)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def remove_permissions(self, role: models.Role, permissions: PermissionCollection) -> None:
        try:
            self.db.query(models.RolePermission).filter(
                models.RolePermission.role_id == role.id,
                models.RolePermission.permission_id.in_(permissions.ids())
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def clear_permissions(self, role: models.Role) -> None:
        try:
            self.db.query(models.RolePermission).filter(models.RolePermission.role_id == role.id).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    # 권한 확인

    def has_permission(self, roles: RoleCollection, permission: models.Permission) -> bool:
        count = self.db.query(models.RolePermission).filter(
            models.RolePermission.role_id.in_(roles.ids()),
            models.RolePermission.permission_id == permission.id
        ).count()
        return count > 0

    def has_all_permissions(self, roles: RoleCollection, permissions: PermissionCollection) -> bool:
        # 역할별로 보유한 권한의 합집합이 요청된 권한 집합을 모두 덮는지 확인합니다.
        # (행 개수 == 역할 수 * 권한 수 비교는 역할들이 권한을 나눠 가진 경우 False가 됩니다.)
        required = set(permissions.ids())
        if not required:
            return True
        rows = self.db.query(models.RolePermission.permission_id).filter(
            models.RolePermission.role_id.in_(roles.ids()),
            models.RolePermission.permission_id.in_(list(required))
        ).distinct().all()
        return {row[0] for row in rows} == required

    def has_any_permissions(self, roles: RoleCollection, permissions: PermissionCollection) -> bool:
        count = self.db.query(models.RolePermission).filter(
            models.RolePermission.role_id.in_(roles.ids()),
            models.RolePermission.permission_id.in_(permissions.ids())
        ).count()
        return count > 0

    def _insert_missing_permissions(self, role_id: int, permission_ids: List[int]) -> None:
        existing = {
            row[0] for row in self.db.query(models.RolePermission.permission_id)
            .filter(models.RolePermission.role_id == role_id).all()
        }
        rows = [{"role_id": role_id, "permission_id": pid} for pid in permission_ids if pid not in existing]
        if rows:
            self.db.execute(models.RolePermission.__table__.insert(), rows)
