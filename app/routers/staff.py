"""
staff.py

클럽 스태프 계정 / 권한 관리 API 모음.

주요 기능:
- 스태프 계정 발급 (권한 행 함께 생성, 자격 증명 1회 응답)
- 클럽 스태프 목록 조회
- 스태프 권한 조회 / 전체 교체
- 스태프 활성 / 비활성 전환
- 스태프 비밀번호 재설정 (새 자격 증명 1회 응답)
- 스태프 삭제
- 스태프 목록 Excel(xlsx) 내보내기
- 클럽 관리 행위 로그 조회

설계 원칙:
- 모든 엔드포인트는 can_manage_staff 권한 필요 (내보내기는 can_export_data)
- 자기 자신의 권한 / 상태 변경과 삭제는 허용하지 않음
- 자격 증명은 commit 성공 후에만 응답에 포함
- 모든 변경 행위는 club_action_logs 에 기록 (비밀번호 제외)

관련 파일:
- app.services.accounts         : 스태프 생성 / 권한 / 상태 / 삭제
- app.services.credentials      : CredentialGenerator
- app.core.permissions          : 권한 키 카탈로그
- app.schemas.staff             : 요청/응답 스키마

"""

import io
import logging
import uuid

from openpyxl import Workbook
from starlette.responses import Response

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
from app.core.permissions import ALL_PERMISSIONS, PERMISSION_KEYS, PERM_MANAGE_STAFF, PERM_EXPORT_DATA
from app.models.club_log import ClubAction, ClubActionLog
from app.models.staff import ClubStaff
from app.schemas.credentials import CredentialResponse
from app.schemas.staff import (
    StaffCreateRequest,
    StaffCreatedResponse,
    StaffPermissionsPayload,
    StaffResponse,
    StaffStatusRequest,
)
from app.services.accounts import (
    DuplicateRequestError,
    create_staff,
    delete_staff,
    get_club_staff,
    set_staff_active,
    update_staff_permissions,
)
from app.services.club_log import write_club_log
from app.services.credential_store import AccountNotFoundError, CredentialError
from app.services.credentials import CredentialGenerator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/staff", tags=["staff"])


def _get_staff_or_404(db: Session, ctx: ClubContext, staff_id: uuid.UUID) -> ClubStaff:
    staff = get_club_staff(db, ctx.club.id, staff_id)
    if not staff:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return staff


def _reject_self(ctx: ClubContext, staff: ClubStaff, what: str) -> None:
    if staff.profile_id == ctx.user.id:
        raise HTTPException(status_code=400, detail=f"You cannot {what} yourself")


def _permissions_payload(staff: ClubStaff) -> StaffPermissionsPayload:
    if staff.permissions is None:
        return StaffPermissionsPayload()
    return StaffPermissionsPayload.model_validate(staff.permissions.as_dict())


"""
스태프 계정 발급 API

- 로그인 아이디는 email, 표시용 핸들(staff_username)은 클럽 안에서 고유
- 요청한 권한으로 권한 행을 함께 생성 (빠진 키는 False)
- 같은 Idempotency-Key 로 다시 요청하면 409

"""
@router.post("", status_code=status.HTTP_201_CREATED)
def create_staff_account(
    body: StaffCreateRequest,
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key"),
    ctx: ClubContext = Depends(require_permission(PERM_MANAGE_STAFF)),
    db: Session = Depends(get_db),
    generator: CredentialGenerator = Depends(get_credential_generator),
    meta: RequestMeta = Depends(get_request_meta),
):
    try:
        staff, creds = create_staff(
            db,
            club=ctx.club,
            generator=generator,
            staff_name=body.staff_name,
            email=body.email,
            created_by=ctx.user.id,
            contact_number=body.contact_number,
            permissions=body.permissions.model_dump(),
            request_id=idempotency_key,
        )
        write_club_log(
            db,
            actor_id=ctx.user.id,
            club_id=ctx.club.id,
            action=ClubAction.CREATE_STAFF,
            target_id=staff.id,
            detail=staff.email,
            ip=meta.ip,
            user_agent=meta.user_agent,
        )
        db.commit()
        db.refresh(staff)
    except DuplicateRequestError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except CredentialError as e:
        db.rollback()
        logger.error("Error creating staff member: %s", e.message)
        raise HTTPException(status_code=500, detail=e.message)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Staff member already exists")
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    response = StaffCreatedResponse(
        staff=StaffResponse.model_validate(staff),
        permissions=_permissions_payload(staff),
        credentials=CredentialResponse.from_credential(creds),
    )
    generator.clear_credentials()

    return {"message": "Staff member created", "data": response}


@router.get("")
def list_staff(
    ctx: ClubContext = Depends(require_permission(PERM_MANAGE_STAFF)),
    db: Session = Depends(get_db),
):
    rows = db.scalars(
        select(ClubStaff).where(ClubStaff.club_id == ctx.club.id).order_by(desc(ClubStaff.created_at))
    ).all()

    return {
        "data": [
            {
                **StaffResponse.model_validate(s).model_dump(mode="json"),
                "permissions": _permissions_payload(s).model_dump(),
            }
            for s in rows
        ]
    }


# 권한 선택 화면에서 쓰는 분류 / 라벨 / 설명
@router.get("/permission-catalog")
def permission_catalog(_: ClubContext = Depends(require_permission(PERM_MANAGE_STAFF))):
    return {"data": ALL_PERMISSIONS}


"""
스태프 목록 Excel 다운로드 API

- can_export_data 권한 필요
- 스태프 기본 정보 + 권한 키별 Y/N 열
- 비밀번호 / 해시는 포함하지 않음

"""
@router.get("/export.xlsx")
def export_staff_xlsx(
    ctx: ClubContext = Depends(require_permission(PERM_EXPORT_DATA)),
    db: Session = Depends(get_db),
):
    rows = db.scalars(
        select(ClubStaff).where(ClubStaff.club_id == ctx.club.id).order_by(ClubStaff.staff_name)
    ).all()

    wb = Workbook()
    ws = wb.active
    ws.title = "staff"

    ws.append(
        ["staff_name", "email", "staff_username", "contact_number", "is_active", "created_at", *PERMISSION_KEYS]
    )

    for s in rows:
        perms = s.permissions.as_dict() if s.permissions else {}
        ws.append([
            s.staff_name,
            s.email,
            s.staff_username,
            s.contact_number or "",
            "Y" if s.is_active else "N",
            s.created_at.isoformat(),
            *["Y" if perms.get(key) else "N" for key in PERMISSION_KEYS],
        ])

    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)

    filename = f"staff_{ctx.club.id}.xlsx"
    return Response(
        content=buf.getvalue(),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


"""
클럽 관리 행위 로그 조회 API

- 최신순
- action 으로 필터링 가능
- limit / offset 페이지네이션

"""
@router.get("/logs")
def list_club_logs(
    action: ClubAction | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    ctx: ClubContext = Depends(require_permission(PERM_MANAGE_STAFF)),
    db: Session = Depends(get_db),
):
    stmt = select(ClubActionLog).where(ClubActionLog.club_id == ctx.club.id)
    if action:
        stmt = stmt.where(ClubActionLog.action == action)
    logs = db.scalars(stmt.order_by(desc(ClubActionLog.created_at)).offset(offset).limit(limit)).all()

    return {
        "data": [
            {
                "id": str(log.id),
                "actor_id": str(log.actor_id),
                "target_id": str(log.target_id) if log.target_id else None,
                "action": log.action.value,
                "detail": log.detail,
                "ip": log.ip,
                "created_at": log.created_at.isoformat(),
            }
            for log in logs
        ]
    }


@router.get("/{staff_id}/permissions")
def get_staff_permissions(
    staff_id: uuid.UUID,
    ctx: ClubContext = Depends(require_permission(PERM_MANAGE_STAFF)),
    db: Session = Depends(get_db),
):
    staff = _get_staff_or_404(db, ctx, staff_id)
    return {"data": _permissions_payload(staff)}


"""
스태프 권한 수정 API

- 요청 본문으로 권한 전체를 교체 (빠진 키는 False)
- 자기 자신의 권한은 변경 불가
- 다음 요청부터 해당 스태프의 권한 계산에 반영됨

"""
@router.put("/{staff_id}/permissions")
def replace_staff_permissions(
    staff_id: uuid.UUID,
    body: StaffPermissionsPayload,
    ctx: ClubContext = Depends(require_permission(PERM_MANAGE_STAFF)),
    db: Session = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    staff = _get_staff_or_404(db, ctx, staff_id)
    _reject_self(ctx, staff, "change permissions of")

    granted = [key for key, value in body.model_dump().items() if value]
    try:
        update_staff_permissions(db, staff, body.model_dump(), updated_by=ctx.user.id)
        write_club_log(
            db,
            actor_id=ctx.user.id,
            club_id=ctx.club.id,
            action=ClubAction.UPDATE_STAFF_PERMISSIONS,
            target_id=staff.id,
            detail=",".join(granted) or "none",
            ip=meta.ip,
            user_agent=meta.user_agent,
        )
        db.commit()
        db.refresh(staff)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return {"message": "Permissions updated", "data": _permissions_payload(staff)}


"""
스태프 활성 상태 변경 API

- 비활성 스태프는 권한 행이 남아 있어도 모든 권한 없음으로 계산됨
- 자기 자신은 변경 불가

"""
@router.patch("/{staff_id}/status")
def change_staff_status(
    staff_id: uuid.UUID,
    body: StaffStatusRequest,
    ctx: ClubContext = Depends(require_permission(PERM_MANAGE_STAFF)),
    db: Session = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    staff = _get_staff_or_404(db, ctx, staff_id)
    _reject_self(ctx, staff, "change the status of")

    try:
        set_staff_active(db, staff, body.is_active)
        write_club_log(
            db,
            actor_id=ctx.user.id,
            club_id=ctx.club.id,
            action=ClubAction.SET_STAFF_STATUS,
            target_id=staff.id,
            detail="active" if body.is_active else "inactive",
            ip=meta.ip,
            user_agent=meta.user_agent,
        )
        db.commit()
        db.refresh(staff)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return {"message": "Status updated", "data": StaffResponse.model_validate(staff)}


@router.post("/{staff_id}/reset-password")
def reset_staff_password(
    staff_id: uuid.UUID,
    ctx: ClubContext = Depends(require_permission(PERM_MANAGE_STAFF)),
    db: Session = Depends(get_db),
    generator: CredentialGenerator = Depends(get_credential_generator),
    meta: RequestMeta = Depends(get_request_meta),
):
    staff = _get_staff_or_404(db, ctx, staff_id)

    try:
        creds = generator.reset_staff_password(staff.id, staff.email, staff.staff_name, ctx.club.club_name)
        write_club_log(
            db,
            actor_id=ctx.user.id,
            club_id=ctx.club.id,
            action=ClubAction.RESET_STAFF_PASSWORD,
            target_id=staff.id,
            ip=meta.ip,
            user_agent=meta.user_agent,
        )
        db.commit()
    except AccountNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=e.message)
    except CredentialError as e:
        db.rollback()
        logger.error("Error resetting staff password: %s", e.message)
        raise HTTPException(status_code=500, detail=e.message)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    response = CredentialResponse.from_credential(creds)
    generator.clear_credentials()

    return {"message": "Password reset", "data": response}


"""
스태프 삭제 API

- club_staff / staff_permissions 행 삭제
- 로그인 계정(users)은 로그 FK 때문에 남지만 클럽 소속이 없어 클럽 API 접근 불가

"""
@router.delete("/{staff_id}")
def remove_staff(
    staff_id: uuid.UUID,
    ctx: ClubContext = Depends(require_permission(PERM_MANAGE_STAFF)),
    db: Session = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    staff = _get_staff_or_404(db, ctx, staff_id)
    _reject_self(ctx, staff, "delete")

    try:
        detail = staff.email
        delete_staff(db, staff)
        write_club_log(
            db,
            actor_id=ctx.user.id,
            club_id=ctx.club.id,
            action=ClubAction.DELETE_STAFF,
            target_id=staff_id,
            detail=detail,
            ip=meta.ip,
            user_agent=meta.user_agent,
        )
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return {"message": "Staff member deleted", "data": {"id": str(staff_id)}}
