"""
Attachment ORM model.

File metadata for uploads attached to a post or one of its comments. The
file itself lives in external storage; only its URL is recorded.

Dependencies: sqlalchemy, discuss_board.boundary.db.base
System role: Attachment metadata persistence
"""

import uuid

from sqlalchemy import BigInteger, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from discuss_board.boundary.db.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin


class AttachmentModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """
    Uploaded file reference.

    Attributes:
        post_id: Post the file belongs to
        comment_id: Comment the file belongs to, when attached to a comment
        uploader_member_id: Member who uploaded the file
        file_name: Original file name
        file_url: Storage URL
        content_type: MIME type (pdf, png, jpeg, gif)
        size_bytes: File size
    """

    __tablename__ = "attachments"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    comment_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    uploader_member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("members.id"), nullable=False
    )
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False)
    size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False)
