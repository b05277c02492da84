"""





스태프 계정 / 권한 관리 통합 테스트.
- 스태프 발급(email 로그인, 표시용 핸들), 권한 조회/전체 교체,
  권한 변경이 다음 요청부터 반영되는지, 비활성화 시 권한 상실,
  자기 자신 변경 금지, 삭제 후 클럽 API 차단, xlsx 내보내기, 로그 조회까지 검증한다.


"""

import io

from openpyxl import load_workbook

from app.core.permissions import PERMISSION_KEYS
from tests.helpers import auth_header, setup_club, create_staff_via_api


def test_create_staff_with_permissions(client, db_session):
    ctx = setup_club(client, db_session, club_name="Riverside FC")

    data, staff_token = create_staff_via_api(
        client, ctx["owner_token"], permissions={"can_view_dashboard": True, "can_manage_players": True}
    )

    assert data["staff"]["staff_username"] == "jane.doe"
    assert data["staff"]["is_active"] is True
    assert data["credentials"]["username"] == data["staff"]["email"]
    assert data["credentials"]["user_type"] == "staff"
    assert data["credentials"]["club_name"] == "Riverside FC"
    assert data["permissions"]["can_view_dashboard"] is True
    assert data["permissions"]["can_manage_staff"] is False

    me = client.get("/me/permissions", headers=auth_header(staff_token))
    assert me.status_code == 200
    body = me.json()["data"]
    assert body["is_staff"] is True
    assert body["club_id"] == ctx["club_id"]
    assert body["permissions"]["can_manage_players"] is True
    assert body["permissions"]["can_export_data"] is False


def test_staff_handle_unique_within_club(client, db_session):
    ctx = setup_club(client, db_session)

    first, _ = create_staff_via_api(client, ctx["owner_token"], name="Jane Doe")
    second, _ = create_staff_via_api(client, ctx["owner_token"], name="Jane Doe")

    assert first["staff"]["staff_username"] == "jane.doe"
    assert second["staff"]["staff_username"] == "jane.doe1"


def test_unknown_permission_key_rejected(client, db_session):
    ctx = setup_club(client, db_session)

    res = client.post(
        "/staff",
        headers=auth_header(ctx["owner_token"]),
        json={"staff_name": "Jane Doe", "email": "jane@test.com", "permissions": {"can_fly": True}},
    )
    assert res.status_code == 422


def test_replace_permissions_applies_on_next_request(client, db_session):
    ctx = setup_club(client, db_session)
    owner = auth_header(ctx["owner_token"])

    data, staff_token = create_staff_via_api(client, ctx["owner_token"], permissions={"can_view_dashboard": True})
    staff_id = data["staff"]["id"]

    assert client.get("/players", headers=auth_header(staff_token)).status_code == 403

    res = client.put(f"/staff/{staff_id}/permissions", headers=owner, json={"can_manage_players": True})
    assert res.status_code == 200, res.text
    perms = res.json()["data"]
    assert perms["can_manage_players"] is True
    # 전체 교체라 빠진 키는 False
    assert perms["can_view_dashboard"] is False

    got = client.get(f"/staff/{staff_id}/permissions", headers=owner)
    assert got.json()["data"] == perms

    assert client.get("/players", headers=auth_header(staff_token)).status_code == 200


def test_inactive_staff_loses_all_permissions(client, db_session):
    ctx = setup_club(client, db_session)
    owner = auth_header(ctx["owner_token"])

    data, staff_token = create_staff_via_api(client, ctx["owner_token"], permissions={"can_manage_players": True})
    staff_id = data["staff"]["id"]

    res = client.patch(f"/staff/{staff_id}/status", headers=owner, json={"is_active": False})
    assert res.status_code == 200, res.text
    assert res.json()["data"]["is_active"] is False

    me = client.get("/me/permissions", headers=auth_header(staff_token)).json()["data"]
    assert me["is_staff"] is True
    assert not any(me["permissions"].values())
    assert client.get("/players", headers=auth_header(staff_token)).status_code == 403


def test_staff_manager_cannot_change_self(client, db_session):
    ctx = setup_club(client, db_session)

    data, manager_token = create_staff_via_api(client, ctx["owner_token"], permissions={"can_manage_staff": True})
    staff_id = data["staff"]["id"]
    headers = auth_header(manager_token)

    assert client.put(f"/staff/{staff_id}/permissions", headers=headers, json={}).status_code == 400
    assert client.patch(f"/staff/{staff_id}/status", headers=headers, json={"is_active": False}).status_code == 400
    assert client.delete(f"/staff/{staff_id}", headers=headers).status_code == 400


def test_staff_from_other_club_is_404(client, db_session):
    ctx_a = setup_club(client, db_session, club_name="A FC")
    ctx_b = setup_club(client, db_session, club_name="B FC")

    data, _ = create_staff_via_api(client, ctx_a["owner_token"])
    staff_id = data["staff"]["id"]

    res = client.get(f"/staff/{staff_id}/permissions", headers=auth_header(ctx_b["owner_token"]))
    assert res.status_code == 404


def test_reset_staff_password(client, db_session):
    ctx = setup_club(client, db_session)

    data, _ = create_staff_via_api(client, ctx["owner_token"])
    staff_id = data["staff"]["id"]

    res = client.post(f"/staff/{staff_id}/reset-password", headers=auth_header(ctx["owner_token"]))
    assert res.status_code == 200, res.text
    creds = res.json()["data"]
    assert creds["username"] == data["staff"]["email"]

    login = client.post(
        "/auth/login",
        json={"login": creds["username"], "password": creds["password"], "role": "STAFF"},
    )
    assert login.status_code == 200
    assert login.json()["data"]["password_reset_required"] is True


def test_deleted_staff_loses_club_access(client, db_session):
    ctx = setup_club(client, db_session)
    owner = auth_header(ctx["owner_token"])

    data, staff_token = create_staff_via_api(client, ctx["owner_token"], permissions={"can_manage_players": True})
    staff_id = data["staff"]["id"]

    res = client.delete(f"/staff/{staff_id}", headers=owner)
    assert res.status_code == 200, res.text

    listed = client.get("/staff", headers=owner).json()["data"]
    assert listed == []

    denied = client.get("/players", headers=auth_header(staff_token))
    assert denied.status_code == 403
    assert denied.json()["detail"] == "Club access required"


def test_export_staff_xlsx(client, db_session):
    ctx = setup_club(client, db_session)
    create_staff_via_api(client, ctx["owner_token"], permissions={"can_export_data": True})

    res = client.get("/staff/export.xlsx", headers=auth_header(ctx["owner_token"]))
    assert res.status_code == 200
    assert res.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "attachment" in res.headers["content-disposition"]
    assert res.content[:2] == b"PK"

    ws = load_workbook(io.BytesIO(res.content)).active
    rows = list(ws.iter_rows(values_only=True))
    assert list(rows[0][6:]) == list(PERMISSION_KEYS)
    assert rows[1][0] == "Jane Doe"


def test_club_logs_list(client, db_session):
    ctx = setup_club(client, db_session)
    owner = auth_header(ctx["owner_token"])

    data, _ = create_staff_via_api(client, ctx["owner_token"])
    client.patch(f"/staff/{data['staff']['id']}/status", headers=owner, json={"is_active": False})

    res = client.get("/staff/logs", headers=owner)
    assert res.status_code == 200
    actions = {log["action"] for log in res.json()["data"]}
    assert actions == {"CREATE_STAFF", "SET_STAFF_STATUS"}

    filtered = client.get("/staff/logs?action=CREATE_STAFF", headers=owner).json()["data"]
    assert len(filtered) == 1
    assert "password" not in str(filtered)


def test_permission_catalog(client, db_session):
    ctx = setup_club(client, db_session)
    res = client.get("/staff/permission-catalog", headers=auth_header(ctx["owner_token"]))
    assert res.status_code == 200
    assert {p["code"] for p in res.json()["data"]} == set(PERMISSION_KEYS)


def test_concurrent_duplicate_staff_email_409(client, db_session, monkeypatch):
    ctx = setup_club(client, db_session)
    token = ctx["owner_token"]
    body = {"staff_name": "Max Power", "email": "max@club.com", "permissions": {}}
    assert client.post("/staff", headers=auth_header(token), json=body).status_code == 201

    # 이메일 중복 검사를 통과한 뒤 저장 시점에 고유 제약 위반
    monkeypatch.setattr("app.services.accounts._email_taken", lambda db, email: False)
    res = client.post("/staff", headers=auth_header(token), json=body)
    assert res.status_code == 409, res.text
    assert res.json()["detail"] == "Staff member already exists"

    listed = client.get("/staff", headers=auth_header(token))
    assert len(listed.json()["data"]) == 1
