from extensions import db
from datetime import datetime


class Comment(db.Model):
    """A remark on a gallery photo, or a one-level reply to one.

    ``like_count`` and ``reply_count`` are cached aggregates of the like
    relation and of the replies; rows are never removed, ``is_deleted``
    hides them from reads.
    """
    __tablename__ = "gallery_comments"

    id = db.Column(db.Integer, primary_key=True)
    photo_id = db.Column(db.Integer, db.ForeignKey('gallery_photos.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    content = db.Column(db.Text, nullable=False)
    parent_comment_id = db.Column(db.Integer, db.ForeignKey('gallery_comments.id'), nullable=True, index=True)
    like_count = db.Column(db.Integer, nullable=False, default=0)
    reply_count = db.Column(db.Integer, nullable=False, default=0)
    is_deleted = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, index=True, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self, user_name=None, profile_photo=None, is_liked=False):
        return {
            'id': self.id,
            'photo_id': self.photo_id,
            'user_id': self.user_id,
            'content': self.content,
            'parent_comment_id': self.parent_comment_id,
            'like_count': self.like_count,
            'reply_count': self.reply_count,
            'is_deleted': bool(self.is_deleted),
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
            'user_name': user_name,
            'profile_photo': profile_photo,
            'is_liked': 1 if is_liked else 0,
        }


class CommentLike(db.Model):
    __tablename__ = "gallery_comment_likes"

    comment_id = db.Column(db.Integer, db.ForeignKey('gallery_comments.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # one like per (comment, user); concurrent double-likes fail on insert
    __table_args__ = (db.PrimaryKeyConstraint('comment_id', 'user_id'),)
