from extensions import db
from datetime import datetime

PENDING = "Pending"
APPROVED = "Approved"
REJECTED = "Rejected"


class Photo(db.Model):
    __tablename__ = "gallery_photos"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(100), nullable=False)
    filename = db.Column(db.String(300), nullable=False)
    owner_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    # moderation state, only approved photos accept comments
    status = db.Column(db.String(20), nullable=False, default=PENDING)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def is_approved(self):
        return self.status == APPROVED
