"""





PermissionResolver 단위 테스트.
- 클럽 소유자는 조회 없이 전체 권한, 스태프 행 그대로 반영,
  비활성 스태프 / 행 없음(정책별) / 조회 오류 / refresh 동작을 가짜 조회 소스로 검증한다.


"""

import uuid

from app.core.permissions import PERMISSION_KEYS
from app.models.user import Role
from app.services.permission_gate import permission_gate
from app.services.permissions import Actor, MissingRowPolicy, PermissionResolver, StaffPermissionRow


class FakeSource:
    def __init__(self, row=None, error=None):
        self.row = row
        self.error = error
        self.calls = 0

    def find_by_profile(self, profile_id):
        self.calls += 1
        if self.error:
            raise self.error
        return self.row


def _row(profile_id, is_active=True, **perms):
    return StaffPermissionRow(
        staff_id=uuid.uuid4(),
        club_id=uuid.uuid4(),
        profile_id=profile_id,
        is_active=is_active,
        permissions={key: perms.get(key, False) for key in PERMISSION_KEYS},
    )


def _actor(role):
    return Actor(id=uuid.uuid4(), role=role)


def test_no_actor():
    resolver = PermissionResolver(None, FakeSource(), MissingRowPolicy.DENY_ALL).load()
    assert resolver.loading is False
    assert resolver.permissions is None
    assert resolver.is_staff is False
    assert resolver.has_permission("can_view_dashboard") is False


def test_club_owner_has_everything_without_lookup():
    source = FakeSource()
    resolver = PermissionResolver(_actor(Role.CLUB), source, MissingRowPolicy.DENY_ALL).load()

    assert source.calls == 0
    assert resolver.is_staff is False
    assert all(resolver.has_permission(key) for key in PERMISSION_KEYS)


def test_staff_row_used_as_is():
    actor = _actor(Role.STAFF)
    source = FakeSource(_row(actor.id, can_view_dashboard=True, can_manage_players=True))
    resolver = PermissionResolver(actor, source, MissingRowPolicy.GRANT_ALL).load()

    assert resolver.is_staff is True
    assert resolver.has_permission("can_view_dashboard") is True
    assert resolver.has_permission("can_manage_players") is True
    assert resolver.has_permission("can_manage_staff") is False
    assert resolver.has_permission("can_do_anything") is False


def test_inactive_staff_has_nothing():
    actor = _actor(Role.STAFF)
    source = FakeSource(_row(actor.id, is_active=False, can_view_dashboard=True))
    resolver = PermissionResolver(actor, source, MissingRowPolicy.GRANT_ALL).load()

    assert resolver.is_staff is True
    assert resolver.has_permission("can_view_dashboard") is False


def test_missing_row_deny_all():
    resolver = PermissionResolver(_actor(Role.SCOUT), FakeSource(), MissingRowPolicy.DENY_ALL).load()
    assert resolver.is_staff is False
    assert resolver.permissions == {key: False for key in PERMISSION_KEYS}


def test_missing_row_grant_all():
    resolver = PermissionResolver(_actor(Role.SCOUT), FakeSource(), MissingRowPolicy.GRANT_ALL).load()
    assert resolver.is_staff is False
    assert resolver.has_permission("can_manage_staff") is True


def test_lookup_error_means_no_permissions(caplog):
    source = FakeSource(error=RuntimeError("db down"))
    resolver = PermissionResolver(_actor(Role.STAFF), source, MissingRowPolicy.GRANT_ALL).load()

    assert resolver.loading is False
    assert resolver.permissions is None
    assert resolver.has_permission("can_view_dashboard") is False
    assert "Error loading permissions" in caplog.text


def test_loading_state_denies_everything():
    resolver = PermissionResolver(_actor(Role.CLUB), FakeSource(), MissingRowPolicy.DENY_ALL)
    # load() 전에는 loading=True
    assert resolver.loading is True
    assert resolver.has_permission("can_view_dashboard") is False
    assert permission_gate(resolver, "can_view_dashboard", "child") is None


def test_refresh_picks_up_changes():
    actor = _actor(Role.STAFF)
    source = FakeSource(_row(actor.id, can_view_dashboard=True))
    resolver = PermissionResolver(actor, source, MissingRowPolicy.DENY_ALL).load()
    assert resolver.has_permission("can_manage_players") is False

    source.row = _row(actor.id, can_manage_players=True)
    # refresh 전에는 이전 결과 유지
    assert resolver.has_permission("can_manage_players") is False

    resolver.refresh()
    assert source.calls == 2
    assert resolver.has_permission("can_manage_players") is True
    assert resolver.has_permission("can_view_dashboard") is False
