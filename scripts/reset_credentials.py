"""

선수 / 스태프 비밀번호 재설정 스크립트.

- 운영자가 서버에서 직접 계정 비밀번호를 재발급할 때 사용
- 새 자격 증명은 화면에 한 번만 출력하고 바로 지운다.
- --send-email 옵션을 주면 자격 증명 메일 발송 함수로 전달한다.
  (발송 요청은 해당 클럽 소유자 명의의 access token 으로 보냄)

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.reset_credentials --player-id <uuid>
- (.venv) ~\backend~$ python -m scripts.reset_credentials --staff-id <uuid> --send-email

"""

import argparse
import sys
import uuid

from dotenv import load_dotenv
load_dotenv()

from app.core.security import create_access_token
from app.db.session import SessionLocal
from app.models.club import Club
from app.models.player import Player
from app.models.staff import ClubStaff
from app.models.user import Role
from app.services.credential_presenter import CredentialPresenter
from app.services.credential_store import CredentialStore, CredentialError
from app.services.credentials import CredentialGenerator
from app.services.email_dispatch import EmailDispatcher
from app.services.passwords import password_policy_from_settings


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Reset a player or staff password")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--player-id", type=uuid.UUID)
    target.add_argument("--staff-id", type=uuid.UUID)
    parser.add_argument("--send-email", action="store_true", help="email the new credentials to the account owner")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    db = SessionLocal()
    try:
        generator = CredentialGenerator(CredentialStore(db), password_policy_from_settings())

        if args.player_id:
            player = db.get(Player, args.player_id)
            if not player:
                print("❌ Player not found")
                return 1
            club = db.get(Club, player.club_id)
            creds = generator.reset_player_password(player.id, player.email, player.name, club.club_name)
        else:
            staff = db.get(ClubStaff, args.staff_id)
            if not staff:
                print("❌ Staff member not found")
                return 1
            club = db.get(Club, staff.club_id)
            creds = generator.reset_staff_password(staff.id, staff.email, staff.staff_name, club.club_name)

        # commit 후에는 ORM 객체가 만료되므로 미리 보관
        owner_id = club.owner_id
        db.commit()
    except CredentialError as e:
        db.rollback()
        print(f"❌ {e.message}")
        return 1
    finally:
        db.close()

    presenter = CredentialPresenter(EmailDispatcher(), on_close=generator.clear_credentials)
    presenter.open(creds)
    try:
        view = presenter.view()
        print("🔑 New credentials (shown once)")
        print(f"   Email    : {view['email']}")
        print(f"   Username : {view['username']}")
        print(f"   Password : {view['password']}")

        if args.send_email:
            token = create_access_token(subject=str(owner_id), role=Role.CLUB.value)
            if presenter.send_email(token):
                print(f"📧 Credentials emailed to {creds.email}")
            else:
                print(f"❌ {presenter.error}")
                return 1
    finally:
        presenter.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
