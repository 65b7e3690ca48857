import uuid
from datetime import datetime, timezone
from options_manager.extensions import db


def _new_id():
    return str(uuid.uuid4())


class Option(db.Model):
    __tablename__ = "variant_options"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    name = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(20), nullable=False, default="text")
    position = db.Column(db.Integer, nullable=False, default=0)
    is_required = db.Column(db.Boolean, nullable=False, default=True)
    shop = db.Column(db.String(255), nullable=False, index=True)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    values = db.relationship(
        "OptionValue",
        backref="option",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="OptionValue.position",
    )

    __table_args__ = (
        db.UniqueConstraint("shop", "name", name="uq_variant_options_shop_name"),
    )

    TYPES = {"text", "number", "image", "color"}

    def to_dict(self):
        """Persisted shape, as returned by the admin endpoint."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "position": self.position,
            "isRequired": self.is_required,
            "shop": self.shop,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "values": [v.to_dict() for v in self.values],
        }

    def __repr__(self):
        return f"<Option {self.shop}: {self.name} ({self.type})>"
