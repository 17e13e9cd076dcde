# tests/database/test_collections.py
from src.database import models
from src.database.collections import RoleCollection, PermissionCollection

def test_ids_removes_duplicates_and_keeps_order():
    """ids()는 중복된 모델을 한 번만 포함하고, 처음 등장한 순서를 유지합니다."""
    editor = models.Role(id=2, name="Editor", guard_name="editor")
    viewer = models.Role(id=1, name="Viewer", guard_name="viewer")
    roles = RoleCollection([editor, viewer, editor])

    assert roles.ids() == [2, 1]
    assert len(roles) == 3

def test_guard_names():
    permissions = PermissionCollection([
        models.Permission(id=1, name="edit", guard_name="edit-articles"),
        models.Permission(id=2, name="view", guard_name="view-articles"),
    ])
    assert permissions.guard_names() == ["edit-articles", "view-articles"]

def test_empty_collection():
    assert RoleCollection().ids() == []
