"""API routers."""

from .admin import router as admin_router
from .appeals import router as appeals_router
from .attachments import router as attachments_router
from .auth import router as auth_router
from .comments import router as comments_router
from .forbidden_words import router as forbidden_words_router
from .health import router as health_router
from .members import router as members_router
from .moderation_actions import router as moderation_actions_router
from .moderators import router as moderators_router
from .notifications import router as notifications_router
from .polls import router as polls_router
from .posts import router as posts_router
from .reactions import router as reactions_router
from .reports import router as reports_router
from .tags import router as tags_router

__all__ = [
    "admin_router",
    "appeals_router",
    "attachments_router",
    "auth_router",
    "comments_router",
    "forbidden_words_router",
    "health_router",
    "members_router",
    "moderation_actions_router",
    "moderators_router",
    "notifications_router",
    "polls_router",
    "posts_router",
    "reactions_router",
    "reports_router",
    "tags_router",
]
