# tests/helpers.py
import uuid
from sqlalchemy.orm import Session
from sqlalchemy import select

from app.models.club import Club
from app.models.user import User, Role
from app.core.security import get_password_hash


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_club_in_db(db: Session, *, email: str, password: str, club_name: str = "Test FC") -> Club:
    owner = User(
        email=email,
        password_hash=get_password_hash(password),
        name="OWNER",
        role=Role.CLUB,
    )
    db.add(owner)
    db.flush()

    club = Club(owner_id=owner.id, club_name=club_name, league="Premier", division="1")
    db.add(club)
    db.commit()
    db.refresh(club)
    return club


def login(client, login_id: str, password: str, role: str = "CLUB") -> str:
    res = client.post("/auth/login", json={"login": login_id, "password": password, "role": role})
    assert res.status_code == 200, res.text
    return res.json()["data"]["access_token"]


def setup_club(client, db: Session, club_name: str = "Test FC"):
    """
    클럽 소유자(CLUB) 계정 + 클럽 + 토큰 세팅
    """
    email = f"owner_{uuid.uuid4().hex[:6]}@test.com"
    password = "OwnerPassw0rd!"
    club = create_club_in_db(db, email=email, password=password, club_name=club_name)
    token = login(client, email, password)

    return {
        "owner_email": email,
        "owner_password": password,
        "owner_token": token,
        "club_id": str(club.id),
        "club_name": club.club_name,
    }


def create_staff_via_api(client, owner_token: str, *, permissions: dict | None = None, name: str = "Jane Doe"):
    """
    스태프 발급 후 (staff 응답 data, 발급된 토큰) 반환
    """
    email = f"staff_{uuid.uuid4().hex[:6]}@test.com"
    res = client.post(
        "/staff",
        headers=auth_header(owner_token),
        json={"staff_name": name, "email": email, "permissions": permissions or {}},
    )
    assert res.status_code == 201, res.text
    data = res.json()["data"]

    creds = data["credentials"]
    token = login(client, creds["username"], creds["password"], role="STAFF")
    return data, token


def get_user_by_email(db: Session, email: str) -> User:
    return db.scalar(select(User).where(User.email == email))
