import uuid
from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship

from core.db import Base


def generate_id() -> str:
    return uuid.uuid4().hex


# =================================
#  Enumerations
# =================================
class AccountType(str, PyEnum):
    TRADITIONAL = "TRADITIONAL"
    WALLET = "WALLET"


class Category(str, PyEnum):
    Music = "Music"
    Movies = "Movies"
    Entertainment = "Entertainment"
    Sports = "Sports"
    Food = "Food"
    Travel = "Travel"
    Gaming = "Gaming"
    News = "News"
    Animals = "Animals"
    Education = "Education"
    Science = "Science"
    Technology = "Technology"
    Programming = "Programming"
    LifeStyle = "LifeStyle"
    Vehicles = "Vehicles"
    Children = "Children"
    Women = "Women"
    Men = "Men"
    Other = "Other"


class PublishType(str, PyEnum):
    Video = "Video"
    Short = "Short"
    Blog = "Blog"
    Ads = "Ads"


class ThumbnailType(str, PyEnum):
    generated = "generated"
    custom = "custom"


class Visibility(str, PyEnum):
    public = "public"
    private = "private"
    draft = "draft"


class StreamType(str, PyEnum):
    onDemand = "onDemand"
    Live = "Live"


class BroadcastType(str, PyEnum):
    software = "software"
    webcam = "webcam"


class LiveStatus(str, PyEnum):
    inprogress = "inprogress"
    ready = "ready"


class CommentType(str, PyEnum):
    PUBLISH = "PUBLISH"
    COMMENT = "COMMENT"


class NotificationType(str, PyEnum):
    FOLLOW = "FOLLOW"
    LIKE = "LIKE"
    COMMENT = "COMMENT"
    TIP = "TIP"
    OTHER = "OTHER"


class ReadStatus(str, PyEnum):
    unread = "unread"
    read = "read"


class ReportReason(str, PyEnum):
    adult = "adult"
    violent = "violent"
    harass = "harass"
    hateful = "hateful"
    harmful = "harmful"
    abuse = "abuse"
    terrorism = "terrorism"
    spam = "spam"
    mislead = "mislead"


# =================================
#  Accounts & Profiles
# =================================
class Account(Base):
    __tablename__ = "accounts"

    id = Column(String, primary_key=True, default=generate_id)
    owner = Column(String, unique=True, index=True, nullable=False)  # lowercase wallet address
    auth_uid = Column(String, unique=True, index=True, nullable=True)
    type = Column(SQLEnum(AccountType, name="account_type"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    profiles = relationship(
        "Profile", back_populates="account", order_by="Profile.created_at"
    )


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String, primary_key=True, default=generate_id)
    owner = Column(String, index=True, nullable=False)  # denormalized from Account.owner
    name = Column(String, unique=True, index=True, nullable=False)
    display_name = Column(String, nullable=False)
    image = Column(String, nullable=True)
    image_ref = Column(String, nullable=True)
    banner_image = Column(String, nullable=True)
    banner_image_ref = Column(String, nullable=True)
    default_color = Column(String, nullable=True)
    account_id = Column(String, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False)
    watch_preferences = Column(JSON, default=list, nullable=False)
    read_preferences = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    account = relationship("Account", back_populates="profiles")
    publishes = relationship("Publish", back_populates="creator", passive_deletes=True)


class Follow(Base):
    __tablename__ = "follows"

    follower_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True)
    following_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    follower = relationship("Profile", foreign_keys=[follower_id])
    following = relationship("Profile", foreign_keys=[following_id])


# =================================
#  Publishes
# =================================
class Publish(Base):
    __tablename__ = "publishes"

    id = Column(String, primary_key=True, default=generate_id)
    creator_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), index=True, nullable=False)
    content_uri = Column(String, nullable=True)
    content_ref = Column(String, nullable=True)
    filename = Column(String, nullable=True)
    thumbnail = Column(String, nullable=True)
    thumbnail_ref = Column(String, nullable=True)
    thumbnail_type = Column(SQLEnum(ThumbnailType, name="thumbnail_type"), nullable=True)
    title = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    views = Column(Integer, default=0, nullable=False)
    primary_category = Column(SQLEnum(Category, name="category"), nullable=True)
    secondary_category = Column(SQLEnum(Category, name="category"), nullable=True)
    publish_type = Column(SQLEnum(PublishType, name="publish_type"), nullable=True)
    visibility = Column(SQLEnum(Visibility, name="visibility"), default=Visibility.draft, nullable=False)
    tags = Column(String, nullable=True)  # " | " separated
    upload_error = Column(Boolean, default=False, nullable=False)
    transcode_error = Column(Boolean, default=False, nullable=False)
    uploading = Column(Boolean, default=False, nullable=False)
    deleting = Column(Boolean, default=False, nullable=False)
    stream_type = Column(SQLEnum(StreamType, name="stream_type"), nullable=True)
    broadcast_type = Column(SQLEnum(BroadcastType, name="broadcast_type"), nullable=True)
    live_input_uid = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    creator = relationship("Profile", back_populates="publishes")
    playback = relationship("Playback", uselist=False, back_populates="publish", passive_deletes=True)
    blog = relationship("Blog", uselist=False, back_populates="publish", passive_deletes=True)


class Playback(Base):
    __tablename__ = "playbacks"

    id = Column(String, primary_key=True, default=generate_id)
    publish_id = Column(String, ForeignKey("publishes.id", ondelete="CASCADE"), unique=True, nullable=False)
    video_id = Column(String, nullable=False, default="")
    thumbnail = Column(String, nullable=False, default="")
    preview = Column(String, nullable=False, default="")
    duration = Column(Float, nullable=False, default=0)
    hls = Column(String, nullable=False, default="")
    dash = Column(String, nullable=False, default="")
    live_status = Column(SQLEnum(LiveStatus, name="live_status"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    publish = relationship("Publish", back_populates="playback")


class Blog(Base):
    __tablename__ = "blogs"

    publish_id = Column(String, ForeignKey("publishes.id", ondelete="CASCADE"), primary_key=True)
    content = Column(JSON, nullable=True)
    html_content = Column(Text, nullable=True)
    reading_time = Column(String, nullable=True)
    excerpt = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    publish = relationship("Publish", back_populates="blog")


class Like(Base):
    __tablename__ = "likes"

    profile_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True)
    publish_id = Column(String, ForeignKey("publishes.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class DisLike(Base):
    __tablename__ = "dislikes"

    profile_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True)
    publish_id = Column(String, ForeignKey("publishes.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Tip(Base):
    __tablename__ = "tips"

    id = Column(String, primary_key=True, default=generate_id)
    sender_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    from_address = Column(String, nullable=False)
    publish_id = Column(String, ForeignKey("publishes.id", ondelete="CASCADE"), nullable=False)
    receiver_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    to_address = Column(String, nullable=False)
    amount = Column(String, nullable=False)
    fee = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


# =================================
#  Comments
# =================================
class Comment(Base):
    __tablename__ = "comments"

    id = Column(String, primary_key=True, default=generate_id)
    creator_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    publish_id = Column(String, ForeignKey("publishes.id", ondelete="CASCADE"), index=True, nullable=False)
    comment_id = Column(String, ForeignKey("comments.id", ondelete="CASCADE"), index=True, nullable=True)
    comment_type = Column(SQLEnum(CommentType, name="comment_type"), nullable=False)
    content = Column(Text, nullable=True)
    content_blog = Column(JSON, nullable=True)
    html_content_blog = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    creator = relationship("Profile")


class CommentLike(Base):
    __tablename__ = "comment_likes"

    profile_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True)
    comment_id = Column(String, ForeignKey("comments.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class CommentDisLike(Base):
    __tablename__ = "comment_dislikes"

    profile_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True)
    comment_id = Column(String, ForeignKey("comments.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


# =================================
#  Lists: bookmarks, watch later, playlists
# =================================
class Bookmark(Base):
    __tablename__ = "bookmarks"
    __table_args__ = (UniqueConstraint("profile_id", "publish_id", name="uq_bookmark_profile_publish"),)

    id = Column(String, primary_key=True, default=generate_id)
    profile_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), index=True, nullable=False)
    publish_id = Column(String, ForeignKey("publishes.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    publish = relationship("Publish")


class WatchLater(Base):
    __tablename__ = "watch_later"
    __table_args__ = (UniqueConstraint("profile_id", "publish_id", name="uq_watch_later_profile_publish"),)

    id = Column(String, primary_key=True, default=generate_id)
    profile_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), index=True, nullable=False)
    publish_id = Column(String, ForeignKey("publishes.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    publish = relationship("Publish")


class Playlist(Base):
    __tablename__ = "playlists"
    __table_args__ = (UniqueConstraint("owner_id", "name", name="uq_playlist_owner_name"),)

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    owner_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    items = relationship(
        "PlaylistItem",
        back_populates="playlist",
        order_by="desc(PlaylistItem.created_at)",
        passive_deletes=True,
    )


class PlaylistItem(Base):
    __tablename__ = "playlist_items"
    __table_args__ = (UniqueConstraint("playlist_id", "publish_id", name="uq_playlist_item"),)

    id = Column(String, primary_key=True, default=generate_id)
    owner_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    playlist_id = Column(String, ForeignKey("playlists.id", ondelete="CASCADE"), index=True, nullable=False)
    publish_id = Column(String, ForeignKey("publishes.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    playlist = relationship("Playlist", back_populates="items")
    publish = relationship("Publish")


# =================================
#  Notifications, moderation
# =================================
class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String, primary_key=True, default=generate_id)
    profile_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)  # actor
    receiver_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), index=True, nullable=False)
    type = Column(SQLEnum(NotificationType, name="notification_type"), nullable=False)
    content = Column(String, nullable=False)
    status = Column(SQLEnum(ReadStatus, name="read_status"), default=ReadStatus.unread, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    profile = relationship("Profile", foreign_keys=[profile_id])


class DontRecommend(Base):
    __tablename__ = "dont_recommends"
    __table_args__ = (UniqueConstraint("requestor_id", "target_id", name="uq_dont_recommend"),)

    id = Column(String, primary_key=True, default=generate_id)
    requestor_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), index=True, nullable=False)
    target_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    target = relationship("Profile", foreign_keys=[target_id])


class Report(Base):
    __tablename__ = "reports"
    __table_args__ = (
        UniqueConstraint("submitted_by_id", "publish_id", "reason", name="uq_report"),
    )

    id = Column(String, primary_key=True, default=generate_id)
    submitted_by_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    publish_id = Column(String, ForeignKey("publishes.id", ondelete="CASCADE"), nullable=False)
    reason = Column(SQLEnum(ReportReason, name="report_reason"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
