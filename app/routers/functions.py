"""
functions.py

자격 증명 안내 메일 발송 함수 API.

CredentialPresenter 의 "이메일로 보내기" 동작이 호출하는 엔드포인트로,
요청 본문의 자격 증명을 메일로 만들어 수신자에게 보낸다.

요청:
- Authorization: Bearer <access token> (로그인한 사용자만 호출 가능)
- body: {to, recipientName, username, password, userType, clubName?}

응답:
- 200 : {"success": true, "message": "Credentials email sent successfully"}
- 400 : {"error": "Missing required fields"}
- 500 : {"error": "Failed to send email", "details": "..."}

설계 원칙:
- 요청 본문의 비밀번호는 메일 본문에만 사용하고 로그 / DB 에 남기지 않음
- 응답 형태는 {"error": ...} 로 고정 (발송 클라이언트가 error 필드를 그대로 표시)

관련 파일:
- app.services.credentials_email : 메일 본문 생성 / SMTP 발송
- app.services.email_dispatch    : 이 엔드포인트를 호출하는 클라이언트

"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.deps import get_current_user
from app.models.user import User
from app.schemas.credentials import CredentialsEmailRequest
from app.services.credentials_email import render_credentials_email, deliver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions/v1", tags=["functions"])


@router.post("/send-credentials-email")
def send_credentials_email(
    body: CredentialsEmailRequest,
    user: User = Depends(get_current_user),
):
    if not all([body.to, body.recipient_name, body.username, body.password, body.user_type]):
        return JSONResponse(status_code=400, content={"error": "Missing required fields"})

    if body.user_type not in ("player", "staff"):
        return JSONResponse(status_code=400, content={"error": "Invalid userType"})

    try:
        email = render_credentials_email(
            to=body.to,
            recipient_name=body.recipient_name,
            username=body.username,
            password=body.password,
            user_type=body.user_type,
            club_name=body.club_name,
        )
        deliver(email)
    except Exception as e:
        logger.error("Error sending credentials email to %s: %s", body.to, type(e).__name__)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to send email", "details": str(e)},
        )

    logger.info("Credentials email requested by %s for %s", user.id, body.to)
    return {"success": True, "message": "Credentials email sent successfully"}
