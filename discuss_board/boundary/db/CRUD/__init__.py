"""
CRUD operations for database models.

Exports the base CRUD class and model-specific CRUD singletons.

Usage:
    from discuss_board.boundary.db.CRUD import post_crud, member_crud

    post = await post_crud.get_active_by_id(db, post_id)
"""

from discuss_board.boundary.db.CRUD.base_crud import BaseCRUD
from discuss_board.boundary.db.CRUD.account_crud import (
    administrator_crud,
    consent_record_crud,
    guest_crud,
    jwt_session_crud,
    member_crud,
    moderator_crud,
    user_account_crud,
)
from discuss_board.boundary.db.CRUD.attachment_crud import attachment_crud
from discuss_board.boundary.db.CRUD.comment_crud import comment_crud, comment_edit_history_crud
from discuss_board.boundary.db.CRUD.log_crud import audit_log_crud, integration_log_crud
from discuss_board.boundary.db.CRUD.moderation_crud import (
    appeal_crud,
    content_report_crud,
    moderation_action_crud,
)
from discuss_board.boundary.db.CRUD.notification_crud import (
    notification_crud,
    notification_preference_crud,
)
from discuss_board.boundary.db.CRUD.poll_crud import poll_crud, poll_option_crud, poll_vote_crud
from discuss_board.boundary.db.CRUD.post_crud import post_crud, post_tag_crud, tag_crud
from discuss_board.boundary.db.CRUD.reaction_crud import comment_reaction_crud, post_reaction_crud
from discuss_board.boundary.db.CRUD.setting_crud import forbidden_word_crud, setting_crud

__all__ = [
    "BaseCRUD",
    "administrator_crud",
    "appeal_crud",
    "attachment_crud",
    "audit_log_crud",
    "comment_crud",
    "comment_edit_history_crud",
    "comment_reaction_crud",
    "consent_record_crud",
    "content_report_crud",
    "forbidden_word_crud",
    "guest_crud",
    "integration_log_crud",
    "jwt_session_crud",
    "member_crud",
    "moderation_action_crud",
    "moderator_crud",
    "notification_crud",
    "notification_preference_crud",
    "poll_crud",
    "poll_option_crud",
    "poll_vote_crud",
    "post_crud",
    "post_reaction_crud",
    "post_tag_crud",
    "setting_crud",
    "tag_crud",
    "user_account_crud",
]
