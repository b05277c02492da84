"""
services/club_log.py

클럽 관리 행위 로그 기록 서비스.

이 파일은 클럽 소유자 / 스태프가 수행한 계정 관련 행위를
ClubActionLog 테이블에 기록하는 역할을 담당한다.

설계 원칙:
- 로그 기록 자체는 DB에만 영향을 주고 비즈니스 흐름에는 개입하지 않음
- 비밀번호 등 자격 증명 값은 절대 인자로 받지 않음

"""

from sqlalchemy.orm import Session
from app.models.club_log import ClubActionLog, ClubAction


"""
클럽 관리 행위 로그 기록 함수

- actor_id   : 행위를 수행한 사용자 ID
- club_id    : 행위가 일어난 클럽 ID
- action     : 수행된 행위 유형
- target_id  : 대상 선수 / 스태프 ID (선택)
- detail     : 부가 정보 (선택)
- ip         : 요청 IP 주소 (선택)
- user_agent : 요청 User-Agent (선택)

NOTE:
- db.commit()은 호출 측(라우터/서비스)에서 수행

"""
def write_club_log(
    db: Session,
    *,
    actor_id,
    club_id,
    action: ClubAction,
    target_id=None,
    detail=None,
    ip=None,
    user_agent=None,
):
    log = ClubActionLog(
        actor_id=actor_id,
        club_id=club_id,
        action=action,
        target_id=target_id,
        detail=detail[:500] if detail else None,
        ip=ip,
        user_agent=user_agent[:255] if user_agent else None,
    )
    db.add(log)
