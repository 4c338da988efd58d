from app.extensions import db
from app.models.poll import generate_id, utcnow


class Vote(db.Model):
    __tablename__ = "votes"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    poll_id = db.Column(
        db.String(36), db.ForeignKey("polls.id"), nullable=False, index=True
    )
    option_index = db.Column(db.Integer, nullable=False)
    voter_ip = db.Column(db.String(45), nullable=False, default="unknown")
    submission_id = db.Column(db.String(36), nullable=False, index=True)
    voted_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
