from app.extensions import db
from app.models.poll import generate_id


class ImageOption(db.Model):
    __tablename__ = "image_options"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    poll_id = db.Column(db.String(36), db.ForeignKey("polls.id"), nullable=False)
    image_url = db.Column(db.Text, nullable=False)
    caption = db.Column(db.String(200), nullable=True)
    order_index = db.Column(db.Integer, nullable=False)

    @property
    def label(self):
        return self.caption or self.image_url

    def to_dict(self):
        return {
            "id": self.id,
            "image_url": self.image_url,
            "caption": self.caption,
            "order_index": self.order_index,
        }
