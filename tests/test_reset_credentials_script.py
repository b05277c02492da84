import uuid

from sqlalchemy.orm import sessionmaker

from scripts import reset_credentials

from tests.helpers import auth_header, setup_club, login


def test_reset_player_from_cli(client, db_session, monkeypatch, capsys):
    ctx = setup_club(client, db_session)
    created = client.post(
        "/players",
        headers=auth_header(ctx["owner_token"]),
        json={"first_name": "Jane", "last_name": "Doe", "email": "jane.doe@test.com"},
    ).json()["data"]

    monkeypatch.setattr(reset_credentials, "SessionLocal", sessionmaker(bind=db_session.get_bind()))

    assert reset_credentials.main(["--player-id", created["player"]["id"]]) == 0

    out = capsys.readouterr().out
    password = next(line.split(":", 1)[1].strip() for line in out.splitlines() if "Password" in line)

    # 출력된 새 비밀번호로 로그인 가능
    login(client, "jane.doe", password, role="PLAYER")


def test_unknown_staff_from_cli(db_session, monkeypatch, capsys):
    monkeypatch.setattr(reset_credentials, "SessionLocal", sessionmaker(bind=db_session.get_bind()))

    assert reset_credentials.main(["--staff-id", str(uuid.uuid4())]) == 1
    assert "Staff member not found" in capsys.readouterr().out
