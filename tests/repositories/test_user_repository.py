# tests/repositories/test_user_repository.py
import pytest
from sqlalchemy.exc import OperationalError

from src.database.collections import RoleCollection
from src.repositories.scopes import Pagination

def role_ids_of(role_repo, user_id) -> set:
    ids, _ = role_repo.get_role_ids_of_user(user_id)
    return set(ids)

def test_add_roles_ignores_existing(role_repo, user_repo, seeded):
    """이미 가진 역할을 다시 추가해도 중복 행이 생기지 않습니다."""
    roles = seeded["roles"]
    user_repo.add_roles(1, RoleCollection([roles["editor"]]))
    user_repo.add_roles(1, RoleCollection([roles["editor"], roles["viewer"]]))

    ids, total = role_repo.get_role_ids_of_user(1)
    assert set(ids) == {roles["editor"].id, roles["viewer"].id}
    assert total == 2

def test_replace_roles(role_repo, user_repo, seeded):
    roles = seeded["roles"]
    user_repo.add_roles(1, RoleCollection([roles["editor"], roles["viewer"]]))

    user_repo.replace_roles(1, RoleCollection([roles["viewer"], roles["admin"]]))

    assert role_ids_of(role_repo, 1) == {roles["viewer"].id, roles["admin"].id}

def test_replace_roles_failure_keeps_previous_roles(role_repo, user_repo, failing_inserts, seeded):
    """역할 교체 중 INSERT가 실패하면 사용자의 기존 역할이 그대로 남아야 합니다."""
    # === Arrange ===
    roles = seeded["roles"]
    user_repo.add_roles(1, RoleCollection([roles["editor"], roles["viewer"]]))

    # === Act & Assert ===
    with failing_inserts():
        with pytest.raises(OperationalError):
            user_repo.replace_roles(1, RoleCollection([roles["viewer"], roles["admin"]]))

    # === Assert ===
    assert role_ids_of(role_repo, 1) == {roles["editor"].id, roles["viewer"].id}

def test_remove_and_clear_roles(role_repo, user_repo, seeded):
    roles = seeded["roles"]
    user_repo.add_roles(1, RoleCollection(roles.values()))
    user_repo.add_roles(2, RoleCollection([roles["viewer"]]))

    user_repo.remove_roles(1, RoleCollection([roles["admin"]]))
    assert role_ids_of(role_repo, 1) == {roles["editor"].id, roles["viewer"].id}

    user_repo.clear_roles(1)
    assert role_ids_of(role_repo, 1) == set()
    # 다른 사용자의 역할은 영향을 받지 않음
    assert role_ids_of(role_repo, 2) == {roles["viewer"].id}

def test_get_user_ids_of_role(user_repo, seeded):
    viewer = seeded["roles"]["viewer"]
    for user_id in (5, 3, 9):
        user_repo.add_roles(user_id, RoleCollection([viewer]))

    assert user_repo.get_user_ids_of_role(viewer.id) == ([3, 5, 9], 3)
    assert user_repo.get_user_ids_of_role(viewer.id, Pagination(page=2, limit=2)) == ([9], 3)
