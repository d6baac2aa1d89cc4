"""Comment repository layer."""

from sqlalchemy import func, insert, select
from sqlalchemy.orm import Session, aliased

from core.db import insert_if_absent


def get_comment_by_id(db: Session, *, comment_id: str):
    from models import Comment

    return db.query(Comment).filter(Comment.id == comment_id).first()


def get_publish_by_id(db: Session, *, publish_id: str):
    from models import Publish

    return db.query(Publish).filter(Publish.id == publish_id).first()


def create_comment(db: Session, **fields):
    from models import Comment

    comment = Comment(**fields)
    db.add(comment)
    db.flush()
    return comment


def delete_comment(db: Session, *, comment_id: str) -> int:
    from models import Comment

    return db.query(Comment).filter(Comment.id == comment_id).delete(synchronize_session=False)


def publish_comments_query(db: Session, *, publish_id: str):
    from models import Comment, CommentType

    return db.query(Comment).filter(
        Comment.publish_id == publish_id, Comment.comment_type == CommentType.PUBLISH
    )


def sub_comments_query(db: Session, *, comment_id: str):
    from models import Comment, CommentType

    return db.query(Comment).filter(
        Comment.comment_id == comment_id, Comment.comment_type == CommentType.COMMENT
    )


def replies_count_expr():
    """Correlated count of direct replies, for ordering by activity."""
    from models import Comment

    reply = aliased(Comment)
    return (
        select(func.count())
        .select_from(reply)
        .where(reply.comment_id == Comment.id)
        .correlate(Comment)
        .scalar_subquery()
    )


def count_rows(db: Session, model, **filters) -> int:
    return db.query(func.count()).select_from(model).filter_by(**filters).scalar() or 0


def reaction_exists(db: Session, model, *, profile_id: str, comment_id: str) -> bool:
    return db.query(model).filter_by(profile_id=profile_id, comment_id=comment_id).first() is not None


def insert_reaction_if_absent(db: Session, model, *, profile_id: str, comment_id: str) -> bool:
    return insert_if_absent(db, insert(model).values(profile_id=profile_id, comment_id=comment_id))


def delete_reaction(db: Session, model, *, profile_id: str, comment_id: str) -> int:
    return (
        db.query(model)
        .filter_by(profile_id=profile_id, comment_id=comment_id)
        .delete(synchronize_session=False)
    )
