"""
permissions.py

스태프 권한(capability) 카탈로그.

클럽 스태프에게 부여할 수 있는 권한 키와
화면 표시용 분류 / 라벨 / 설명을 한 곳에서 정의한다.
staff_permissions 테이블의 컬럼 이름과 동일한 키를 사용한다.

관련 파일:
- app.models.staff            : StaffPermissions 컬럼
- app.services.permissions    : 권한 계산(PermissionResolver)
- app.routers.me              : 사이드바 메뉴 권한 매핑

"""

PERM_VIEW_DASHBOARD = "can_view_dashboard"
PERM_MANAGE_PLAYERS = "can_manage_players"
PERM_UPLOAD_MATCHES = "can_upload_matches"
PERM_EDIT_CLUB_PROFILE = "can_edit_club_profile"
PERM_MANAGE_STAFF = "can_manage_staff"
PERM_USE_AI_SCOUTING = "can_use_ai_scouting"
PERM_VIEW_MESSAGES = "can_view_messages"
PERM_MANAGE_TRANSFERS = "can_manage_transfers"
PERM_VIEW_CLUB_HISTORY = "can_view_club_history"
PERM_MODIFY_SETTINGS = "can_modify_settings"
PERM_EXPLORE_TALENT = "can_explore_talent"
PERM_VIEW_ANALYTICS = "can_view_analytics"
PERM_EXPORT_DATA = "can_export_data"
PERM_MANAGE_SUBSCRIPTIONS = "can_manage_subscriptions"

ALL_PERMISSIONS = [
    {"code": PERM_VIEW_DASHBOARD, "category": "Dashboard & Analytics", "label": "View Dashboard",
     "description": "Access main dashboard and statistics"},
    {"code": PERM_VIEW_ANALYTICS, "category": "Dashboard & Analytics", "label": "View Analytics",
     "description": "Access detailed analytics and reports"},
    {"code": PERM_MANAGE_PLAYERS, "category": "Player Management", "label": "Manage Players",
     "description": "Add, edit, and delete players"},
    {"code": PERM_MANAGE_TRANSFERS, "category": "Player Management", "label": "Manage Transfers",
     "description": "Handle player transfers and negotiations"},
    {"code": PERM_UPLOAD_MATCHES, "category": "Content & Media", "label": "Upload Matches",
     "description": "Upload and manage match videos"},
    {"code": PERM_USE_AI_SCOUTING, "category": "Content & Media", "label": "AI Scouting",
     "description": "Access AI analysis tools"},
    {"code": PERM_EDIT_CLUB_PROFILE, "category": "Club Information", "label": "Edit Club Profile",
     "description": "Modify club information"},
    {"code": PERM_VIEW_CLUB_HISTORY, "category": "Club Information", "label": "View Club History",
     "description": "Access club history and achievements"},
    {"code": PERM_VIEW_MESSAGES, "category": "Communication", "label": "View Messages",
     "description": "Read and send messages"},
    {"code": PERM_MANAGE_STAFF, "category": "Staff & System", "label": "Manage Staff",
     "description": "Add and manage other staff members"},
    {"code": PERM_MODIFY_SETTINGS, "category": "Staff & System", "label": "Modify Settings",
     "description": "Change system settings"},
    {"code": PERM_EXPLORE_TALENT, "category": "Advanced", "label": "Explore Talent",
     "description": "Browse talent marketplace"},
    {"code": PERM_EXPORT_DATA, "category": "Advanced", "label": "Export Data",
     "description": "Export reports and data"},
    {"code": PERM_MANAGE_SUBSCRIPTIONS, "category": "Advanced", "label": "Manage Subscriptions",
     "description": "Handle billing and subscriptions"},
]

# staff_permissions 컬럼 순서와 동일
PERMISSION_KEYS: tuple[str, ...] = (
    PERM_VIEW_DASHBOARD,
    PERM_MANAGE_PLAYERS,
    PERM_UPLOAD_MATCHES,
    PERM_EDIT_CLUB_PROFILE,
    PERM_MANAGE_STAFF,
    PERM_USE_AI_SCOUTING,
    PERM_VIEW_MESSAGES,
    PERM_MANAGE_TRANSFERS,
    PERM_VIEW_CLUB_HISTORY,
    PERM_MODIFY_SETTINGS,
    PERM_EXPLORE_TALENT,
    PERM_VIEW_ANALYTICS,
    PERM_EXPORT_DATA,
    PERM_MANAGE_SUBSCRIPTIONS,
)


def full_permissions() -> dict[str, bool]:
    return {key: True for key in PERMISSION_KEYS}


def no_permissions() -> dict[str, bool]:
    return {key: False for key in PERMISSION_KEYS}
