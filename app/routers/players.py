"""
players.py

클럽 소속 선수 계정 관리 API 모음.

주요 기능:
- 선수 계정 발급 (자격 증명 1회 응답)
- 클럽 선수 목록 조회
- 선수 비밀번호 재설정 (새 자격 증명 1회 응답)
- 선수 삭제
- 선수 목록 CSV 내보내기

설계 원칙:
- 모든 엔드포인트는 can_manage_players 권한 필요 (내보내기는 can_export_data)
- 자격 증명은 DB 저장(commit)이 성공한 뒤에만 응답에 포함
- 저장 / 재설정이 실패하면 자격 증명은 응답되지 않고 기존 비밀번호가 유지됨
- Idempotency-Key 헤더로 같은 생성 요청이 두 번 처리되지 않도록 방지 (409)
- 모든 변경 행위는 club_action_logs 에 기록 (비밀번호 제외)

관련 파일:
- app.services.accounts         : 선수 생성 / 삭제
- app.services.credentials      : CredentialGenerator
- app.services.club_log         : 행위 로그 기록
- app.schemas.player            : 요청/응답 스키마

"""

import csv
import io
import logging
import uuid

from starlette.responses import StreamingResponse

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy import select, desc

from app.core.deps import (
    ClubContext,
    RequestMeta,
    get_db,
    get_credential_generator,
    get_request_meta,
    require_permission,
)
from app.core.permissions import PERM_MANAGE_PLAYERS, PERM_EXPORT_DATA
from app.models.club_log import ClubAction
from app.models.player import Player
from app.schemas.credentials import CredentialResponse
from app.schemas.player import PlayerCreateRequest, PlayerResponse, PlayerCreatedResponse
from app.services.accounts import DuplicateRequestError, create_player, delete_player, get_club_player
from app.services.club_log import write_club_log
from app.services.credential_store import AccountNotFoundError, CredentialError
from app.services.credentials import CredentialGenerator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/players", tags=["players"])


"""
선수 계정 발급 API

- 자격 증명 생성 -> users / players 저장 -> 로그 기록 -> commit -> 자격 증명 응답
- 이미 등록된 이메일이면 400
- 같은 Idempotency-Key 로 다시 요청하면 409 (자격 증명 재응답 없음)

"""
@router.post("", status_code=status.HTTP_201_CREATED)
def create_player_account(
    body: PlayerCreateRequest,
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key"),
    ctx: ClubContext = Depends(require_permission(PERM_MANAGE_PLAYERS)),
    db: Session = Depends(get_db),
    generator: CredentialGenerator = Depends(get_credential_generator),
    meta: RequestMeta = Depends(get_request_meta),
):
    try:
        player, creds = create_player(
            db,
            club=ctx.club,
            generator=generator,
            first_name=body.first_name,
            last_name=body.last_name,
            email=body.email,
            position=body.position,
            jersey_number=body.jersey_number,
            request_id=idempotency_key,
        )
        write_club_log(
            db,
            actor_id=ctx.user.id,
            club_id=ctx.club.id,
            action=ClubAction.CREATE_PLAYER,
            target_id=player.id,
            detail=player.email,
            ip=meta.ip,
            user_agent=meta.user_agent,
        )
        db.commit()
        db.refresh(player)
    except DuplicateRequestError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except CredentialError as e:
        db.rollback()
        logger.error("Error creating player: %s", e.message)
        raise HTTPException(status_code=500, detail=e.message)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Player already exists")
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    response = PlayerCreatedResponse(
        player=PlayerResponse.from_player(player),
        credentials=CredentialResponse.from_credential(creds),
    )
    generator.clear_credentials()

    return {"message": "Player created", "data": response}


"""
클럽 선수 목록 조회 API

- 현재 클럽 소속 선수만 반환
- status 로 필터링 가능 (active / injured / transferred / retired)

"""
@router.get("")
def list_players(
    status_filter: str | None = Query(default=None, alias="status"),
    ctx: ClubContext = Depends(require_permission(PERM_MANAGE_PLAYERS)),
    db: Session = Depends(get_db),
):
    stmt = select(Player).where(Player.club_id == ctx.club.id)
    if status_filter:
        stmt = stmt.where(Player.status == status_filter)
    players = db.scalars(stmt.order_by(desc(Player.created_at))).all()

    return {"data": [PlayerResponse.from_player(p) for p in players]}


"""
선수 목록 CSV 다운로드 API

- can_export_data 권한 필요
- 비밀번호 / 해시는 포함하지 않음
- UTF-8 BOM 을 붙여 Excel 호환

"""
@router.get("/export")
def export_players_csv(
    ctx: ClubContext = Depends(require_permission(PERM_EXPORT_DATA)),
    db: Session = Depends(get_db),
):
    players = db.scalars(
        select(Player).where(Player.club_id == ctx.club.id).order_by(Player.last_name, Player.first_name)
    ).all()

    def generate():
        yield "\ufeff"

        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(
            ["first_name", "last_name", "email", "username", "position", "jersey_number", "status", "created_at"]
        )
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)

        for p in players:
            writer.writerow([
                p.first_name,
                p.last_name,
                p.email,
                p.profile.username or "",
                p.position or "",
                "" if p.jersey_number is None else p.jersey_number,
                p.status,
                p.created_at.isoformat(),
            ])
            yield output.getvalue()
            output.seek(0)
            output.truncate(0)

    headers = {
        "Content-Disposition": 'attachment; filename="players.csv"'
    }

    return StreamingResponse(
        generate(),
        media_type="text/csv; charset=utf-8",
        headers=headers,
    )


"""
선수 비밀번호 재설정 API

- 새 비밀번호 생성 -> 해시 저장 (password_reset_required=True) -> commit
- 저장 실패 시 자격 증명 없이 500, 기존 비밀번호 유지

"""
@router.post("/{player_id}/reset-password")
def reset_player_password(
    player_id: uuid.UUID,
    ctx: ClubContext = Depends(require_permission(PERM_MANAGE_PLAYERS)),
    db: Session = Depends(get_db),
    generator: CredentialGenerator = Depends(get_credential_generator),
    meta: RequestMeta = Depends(get_request_meta),
):
    player = get_club_player(db, ctx.club.id, player_id)
    if not player:
        raise HTTPException(status_code=404, detail="Player not found")

    try:
        creds = generator.reset_player_password(player.id, player.email, player.name, ctx.club.club_name)
        write_club_log(
            db,
            actor_id=ctx.user.id,
            club_id=ctx.club.id,
            action=ClubAction.RESET_PLAYER_PASSWORD,
            target_id=player.id,
            ip=meta.ip,
            user_agent=meta.user_agent,
        )
        db.commit()
    except AccountNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=e.message)
    except CredentialError as e:
        db.rollback()
        logger.error("Error resetting player password: %s", e.message)
        raise HTTPException(status_code=500, detail=e.message)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    response = CredentialResponse.from_credential(creds)
    generator.clear_credentials()

    return {"message": "Password reset", "data": response}


"""
선수 삭제 API

- players 행과 선수 로그인 계정(users)을 함께 삭제
- 삭제 후에도 로그(target_id)는 남음

"""
@router.delete("/{player_id}")
def remove_player(
    player_id: uuid.UUID,
    ctx: ClubContext = Depends(require_permission(PERM_MANAGE_PLAYERS)),
    db: Session = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    player = get_club_player(db, ctx.club.id, player_id)
    if not player:
        raise HTTPException(status_code=404, detail="Player not found")

    try:
        detail = player.email
        delete_player(db, player)
        write_club_log(
            db,
            actor_id=ctx.user.id,
            club_id=ctx.club.id,
            action=ClubAction.DELETE_PLAYER,
            target_id=player_id,
            detail=detail,
            ip=meta.ip,
            user_agent=meta.user_agent,
        )
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return {"message": "Player deleted", "data": {"id": str(player_id)}}
