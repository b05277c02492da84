"""
services/permission_gate.py

권한에 따라 무엇을 보여줄지 결정하는 순수 함수 모음.

보안 경계가 아니라 "표시 결정"만 담당한다.
실제 접근 제어는 서버의 require_permission 의존성이 수행한다.

permission_gate 결정 규칙:
- resolver 로딩 중         -> None (아무것도 표시하지 않음)
- 권한 있음                -> children 그대로
- 권한 없음 + show_disabled -> DisabledContent(children) (흐리게 + "No Permission" 표시)
- 권한 없음 + fallback      -> fallback
- 권한 없음                -> None

"""

from dataclasses import dataclass
from typing import Any, Callable

from app.services.permissions import PermissionResolver

NO_PERMISSION_LABEL = "No Permission"


@dataclass(frozen=True)
class DisabledContent:
    content: Any
    label: str = NO_PERMISSION_LABEL


def permission_gate(
    resolver: PermissionResolver,
    permission: str,
    children: Any,
    fallback: Any = None,
    show_disabled: bool = False,
) -> Any:
    if resolver.loading:
        return None

    if resolver.has_permission(permission):
        return children

    if show_disabled:
        return DisabledContent(children)

    if fallback is not None:
        return fallback

    return None


# 보이기/숨기기 대신 권한 여부(bool)를 그대로 render 함수에 넘김
def permission_style(
    resolver: PermissionResolver,
    permission: str,
    render: Callable[[bool], Any],
) -> Any:
    if resolver.loading:
        return None
    return render(resolver.has_permission(permission))
