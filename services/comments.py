import logging

from sqlalchemy import case

from extensions import db
from models.comment import Comment, CommentLike
from models.photo import Photo
from models.user import User
from services.exceptions import BadRequestError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


def _required_ints(params, names, message):
    try:
        return [int(params[name]) for name in names]
    except (TypeError, ValueError):
        raise BadRequestError(message)


def _positive_int(value):
    """Parse an optional id; zero, blanks and garbage all mean "not given"."""
    try:
        value = int(value)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def _live_comment(comment_id):
    comment = Comment.query.filter_by(id=comment_id, is_deleted=False).first()
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


def add_comment(params):
    """Add a comment to an approved photo, or a reply to one of its comments.

    A reply bumps the parent's ``reply_count`` in the same transaction as the
    insert.
    """
    if any(params.get(name) is None for name in ("photo_id", "user_id", "content")):
        raise BadRequestError("Missing required fields: photo_id, user_id, content")

    photo_id, user_id = _required_ints(params, ("photo_id", "user_id"), "Invalid photo_id or user_id")
    content = str(params["content"]).strip()
    parent_id = _positive_int(params.get("parent_comment_id"))

    if not content:
        raise BadRequestError("Comment content cannot be empty")

    photo = db.session.get(Photo, photo_id)
    if photo is None or not photo.is_approved:
        raise NotFoundError("Photo not found or not approved")

    if parent_id is not None:
        # replies nest one level deep, so the parent must be top-level
        parent = Comment.query.filter_by(
            id=parent_id, photo_id=photo_id, is_deleted=False, parent_comment_id=None
        ).first()
        if parent is None:
            raise NotFoundError("Parent comment not found")

    comment = Comment(photo_id=photo_id, user_id=user_id, content=content, parent_comment_id=parent_id)
    db.session.add(comment)
    db.session.flush()

    if parent_id is not None:
        Comment.query.filter_by(id=parent_id).update(
            {Comment.reply_count: Comment.reply_count + 1}, synchronize_session=False
        )

    db.session.commit()
    logger.info("comment %s added to photo %s by user %s (parent=%s)", comment.id, photo_id, user_id, parent_id)

    return "Comment added successfully", {
        "id": comment.id,
        "comment_id": comment.id,
        "is_reply": parent_id is not None,
    }


def get_comments(params):
    """
    List the visible comments of a photo as a two-level tree.

    Top-level comments come newest first, each with its replies oldest
    first. A reply whose parent was deleted is listed at the top level.
    """
    if params.get("photo_id") is None:
        raise BadRequestError("photo_id is required")
    (photo_id,) = _required_ints(params, ("photo_id",), "Invalid photo_id")
    user_id = _positive_int(params.get("user_id"))

    rows = (
        db.session.query(Comment, User.name, User.profile_photo)
        .join(User, Comment.user_id == User.id)
        .filter(Comment.photo_id == photo_id, Comment.is_deleted.is_(False))
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )

    liked = set()
    if user_id is not None and rows:
        liked_rows = (
            db.session.query(CommentLike.comment_id)
            .join(Comment, Comment.id == CommentLike.comment_id)
            .filter(CommentLike.user_id == user_id, Comment.photo_id == photo_id)
        )
        liked = {comment_id for (comment_id,) in liked_rows}

    entries = {}
    for comment, user_name, profile_photo in rows:
        entries[comment.id] = comment.to_dict(user_name, profile_photo, comment.id in liked)

    def attached_to(entry):
        parent = entries.get(entry["parent_comment_id"])
        if parent is not None and parent["parent_comment_id"] is None:
            return parent
        return None

    top_level = []
    for entry in entries.values():
        if attached_to(entry) is None:
            entry["replies"] = []
            top_level.append(entry)
    for entry in entries.values():
        parent = attached_to(entry)
        if parent is not None:
            parent["replies"].append(entry)

    top_level.reverse()
    return "Comments retrieved successfully", top_level


def toggle_like(params):
    if params.get("comment_id") is None or params.get("user_id") is None:
        raise BadRequestError("comment_id and user_id are required")
    comment_id, user_id = _required_ints(params, ("comment_id", "user_id"), "Invalid comment_id or user_id")

    comment = _live_comment(comment_id)
    like = CommentLike.query.filter_by(comment_id=comment.id, user_id=user_id).first()

    if like is not None:
        db.session.delete(like)
        db.session.flush()
        Comment.query.filter_by(id=comment.id).update(
            {Comment.like_count: case((Comment.like_count > 0, Comment.like_count - 1), else_=0)},
            synchronize_session=False,
        )
        message, liked = "Comment unliked", False
    else:
        db.session.add(CommentLike(comment_id=comment.id, user_id=user_id))
        # a concurrent like of the same pair fails here on the primary key
        db.session.flush()
        Comment.query.filter_by(id=comment.id).update(
            {Comment.like_count: Comment.like_count + 1}, synchronize_session=False
        )
        message, liked = "Comment liked", True

    db.session.commit()
    logger.info("comment %s %s by user %s", comment_id, "liked" if liked else "unliked", user_id)

    return message, {"liked": liked, "like_count": comment.like_count}


def delete_comment(params):
    if params.get("comment_id") is None or params.get("user_id") is None:
        raise BadRequestError("comment_id and user_id are required")
    comment_id, user_id = _required_ints(params, ("comment_id", "user_id"), "Invalid comment_id or user_id")

    comment = _live_comment(comment_id)
    if comment.user_id != user_id:
        raise ForbiddenError("You can only delete your own comments")

    # soft delete, replies and likes are left alone
    comment.is_deleted = True
    db.session.commit()
    logger.info("comment %s deleted by user %s", comment_id, user_id)

    return "Comment deleted successfully", None
