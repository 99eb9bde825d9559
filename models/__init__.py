from models.user import User
from models.photo import Photo
from models.comment import Comment, CommentLike
