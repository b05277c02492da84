"""





선수 계정 관리 통합 테스트.
- 선수 발급(자격 증명 1회 응답, 해시 저장), username 충돌 처리,
  Idempotency-Key 중복 요청 409, 비밀번호 재설정, 삭제, 행위 로그,
  CSV 내보내기 권한까지 검증한다.


"""

from sqlalchemy import select

from app.core.security import verify_password
from app.models.club_log import ClubActionLog, ClubAction
from app.models.player import Player
from tests.helpers import auth_header, setup_club, create_staff_via_api, get_user_by_email


def _create_player(client, token, email="jane.doe@test.com", headers=None):
    return client.post(
        "/players",
        headers={**auth_header(token), **(headers or {})},
        json={"first_name": "Jane", "last_name": "Doe", "email": email, "position": "FW", "jersey_number": 9},
    )


def test_create_player_returns_credentials_once(client, db_session):
    ctx = setup_club(client, db_session, club_name="Riverside FC")
    token = ctx["owner_token"]

    res = _create_player(client, token)
    assert res.status_code == 201, res.text
    data = res.json()["data"]

    creds = data["credentials"]
    assert creds["username"] == "jane.doe"
    assert creds["user_type"] == "player"
    assert creds["club_name"] == "Riverside FC"
    assert creds["password"].startswith("jane.doe")
    assert data["player"]["password_reset_required"] is True

    # DB 에는 해시만 저장
    user = get_user_by_email(db_session, "jane.doe@test.com")
    assert user.password_hash != creds["password"]
    assert verify_password(creds["password"], user.password_hash)

    # 목록 조회에는 비밀번호가 없음
    listed = client.get("/players", headers=auth_header(token))
    assert listed.status_code == 200
    assert len(listed.json()["data"]) == 1
    assert "password" not in listed.json()["data"][0]


def test_player_username_collision_gets_suffix(client, db_session):
    ctx = setup_club(client, db_session)
    token = ctx["owner_token"]

    first = _create_player(client, token, email="jane.doe@test.com")
    second = _create_player(client, token, email="jane.doe@other.com")
    assert first.status_code == 201, first.text
    assert second.status_code == 201, second.text

    assert first.json()["data"]["credentials"]["username"] == "jane.doe"
    assert second.json()["data"]["credentials"]["username"] == "jane.doe1"


def test_duplicate_email_400(client, db_session):
    ctx = setup_club(client, db_session)
    token = ctx["owner_token"]

    assert _create_player(client, token).status_code == 201
    dup = _create_player(client, token)
    assert dup.status_code == 400
    assert dup.json()["detail"] == "Email already registered"


def test_idempotency_key_replay_409_without_credentials(client, db_session):
    ctx = setup_club(client, db_session)
    token = ctx["owner_token"]

    first = _create_player(client, token, headers={"Idempotency-Key": "req-1"})
    assert first.status_code == 201, first.text

    replay = _create_player(client, token, email="someone.else@test.com", headers={"Idempotency-Key": "req-1"})
    assert replay.status_code == 409
    assert "credentials" not in replay.text

    assert len(db_session.scalars(select(Player)).all()) == 1


def test_reset_player_password(client, db_session):
    ctx = setup_club(client, db_session)
    token = ctx["owner_token"]

    created = _create_player(client, token).json()["data"]
    player_id = created["player"]["id"]
    old_password = created["credentials"]["password"]

    res = client.post(f"/players/{player_id}/reset-password", headers=auth_header(token))
    assert res.status_code == 200, res.text
    creds = res.json()["data"]
    assert creds["username"] == "jane.doe"
    assert creds["user_type"] == "player"

    db_session.expire_all()
    user = get_user_by_email(db_session, "jane.doe@test.com")
    assert verify_password(creds["password"], user.password_hash)
    if creds["password"] != old_password:
        assert not verify_password(old_password, user.password_hash)
    assert user.password_reset_required is True


def test_reset_unknown_player_404(client, db_session):
    ctx = setup_club(client, db_session)
    res = client.post(
        "/players/00000000-0000-0000-0000-000000000000/reset-password",
        headers=auth_header(ctx["owner_token"]),
    )
    assert res.status_code == 404


def test_delete_player_and_logs(client, db_session):
    ctx = setup_club(client, db_session)
    token = ctx["owner_token"]

    player_id = _create_player(client, token).json()["data"]["player"]["id"]

    res = client.delete(f"/players/{player_id}", headers=auth_header(token))
    assert res.status_code == 200, res.text

    db_session.expire_all()
    assert db_session.scalars(select(Player)).all() == []
    assert get_user_by_email(db_session, "jane.doe@test.com") is None

    actions = [log.action for log in db_session.scalars(select(ClubActionLog)).all()]
    assert ClubAction.CREATE_PLAYER in actions
    assert ClubAction.DELETE_PLAYER in actions


def test_players_require_manage_players_permission(client, db_session):
    ctx = setup_club(client, db_session)

    _, staff_token = create_staff_via_api(client, ctx["owner_token"], permissions={"can_view_dashboard": True})

    res = client.get("/players", headers=auth_header(staff_token))
    assert res.status_code == 403
    assert res.json()["detail"] == "Missing permission: can_manage_players"

    _, manager_token = create_staff_via_api(
        client, ctx["owner_token"], permissions={"can_manage_players": True}, name="Max Power"
    )
    created = _create_player(client, manager_token)
    assert created.status_code == 201, created.text


def test_export_players_csv(client, db_session):
    ctx = setup_club(client, db_session)
    token = ctx["owner_token"]
    _create_player(client, token)

    res = client.get("/players/export", headers=auth_header(token))
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")
    assert "attachment" in res.headers["content-disposition"]

    text = res.content.decode("utf-8-sig")
    lines = text.strip().splitlines()
    assert lines[0].startswith("first_name,last_name,email,username")
    assert "jane.doe@test.com" in lines[1]

    # 내보내기는 can_export_data 권한 필요
    _, staff_token = create_staff_via_api(client, token, permissions={"can_manage_players": True})
    denied = client.get("/players/export", headers=auth_header(staff_token))
    assert denied.status_code == 403


def test_concurrent_duplicate_email_409(client, db_session, monkeypatch):
    ctx = setup_club(client, db_session)
    token = ctx["owner_token"]
    assert _create_player(client, token).status_code == 201

    # 두 번째 요청이 첫 요청 커밋 전에 이메일 중복 검사를 통과한 상황
    monkeypatch.setattr("app.services.accounts._email_taken", lambda db, email: False)
    res = _create_player(client, token)
    assert res.status_code == 409, res.text
    assert res.json()["detail"] == "Player already exists"
    assert "credentials" not in res.text

    players = db_session.scalars(select(Player)).all()
    assert len(players) == 1
