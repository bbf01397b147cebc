from .announcement import (
    AnnouncementDetailRead,
    AnnouncementRead,
    AnnouncementReadState,
    EngagementRead,
    RecipientRead,
)
from .auth import LoginRequest, LoginResponse, MessageResponse, ResetPasswordRequest, Token
from .dashboard import AdminDashboardRead, AdminStatsRead, TeacherDashboardRead
from .document import (
    DocumentRead,
    DocumentUpdate,
    FolderContentsRead,
    FolderCreate,
    FolderRead,
    FolderUpdate,
)
from .message import (
    MessageCreate,
    MessageRead,
    NotificationFeedRead,
    NotificationRead,
    ReplyCreate,
    ThreadReadResult,
    UnreadCountRead,
)
from .teacher import TeacherCreate, TeacherRead, TeacherUpdate
from .user import TeacherProfileRead, UserCreate, UserRead, UserSummaryRead
