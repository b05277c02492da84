"""

테스트 계정 생성 스크립트.

- 로컬 / 스테이징 환경에서 화면 확인용 계정을 만드는 용도
- 클럽 소유자(CLUB) 2개 + 각 클럽, 스카우트(SCOUT) 2개를 생성한다.
- 이미 같은 이메일 계정이 있으면 건너뛴다.
- 비밀번호는 TEST_ACCOUNT_PASSWORD 환경 변수 (없으면 기본값)

선수 / 스태프 계정은 클럽으로 로그인한 뒤 API로 발급한다.

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.create_test_accounts

"""

import os
from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select
from app.db.session import SessionLocal
from app.models.club import Club
from app.models.user import User, Role
from app.core.security import get_password_hash


TEST_CLUBS = [
    {
        "email": "club@manchester.com",
        "name": "Manchester Admin",
        "club_name": "Manchester United FC",
        "league": "Premier League",
        "division": "First Division",
    },
    {
        "email": "club@madrid.com",
        "name": "Madrid Admin",
        "club_name": "Real Madrid CF",
        "league": "La Liga",
        "division": "Primera División",
    },
]

TEST_SCOUTS = [
    {"email": "scout@john.com", "name": "John Thompson"},
    {"email": "scout@maria.com", "name": "Maria Garcia"},
]


def main():
    password = os.environ.get("TEST_ACCOUNT_PASSWORD", "Club123!Test")

    db = SessionLocal()
    try:
        for item in TEST_CLUBS:
            if db.scalar(select(User).where(User.email == item["email"])):
                print(f"✅ {item['email']} already exists. Skip.")
                continue

            owner = User(
                email=item["email"],
                password_hash=get_password_hash(password),
                name=item["name"],
                role=Role.CLUB,
            )
            db.add(owner)
            db.flush()

            db.add(Club(
                owner_id=owner.id,
                club_name=item["club_name"],
                league=item["league"],
                division=item["division"],
            ))
            print(f"🚀 CLUB created: {item['email']} ({item['club_name']})")

        for item in TEST_SCOUTS:
            if db.scalar(select(User).where(User.email == item["email"])):
                print(f"✅ {item['email']} already exists. Skip.")
                continue

            db.add(User(
                email=item["email"],
                password_hash=get_password_hash(password),
                name=item["name"],
                role=Role.SCOUT,
            ))
            print(f"🚀 SCOUT created: {item['email']}")

        db.commit()

    finally:
        db.close()


if __name__ == "__main__":
    main()
