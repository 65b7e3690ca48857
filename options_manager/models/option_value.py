from options_manager.extensions import db
from options_manager.models.option import _new_id


class OptionValue(db.Model):
    __tablename__ = "variant_option_values"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    value = db.Column(db.String(255), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    option_id = db.Column(
        db.String(36),
        db.ForeignKey("variant_options.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        db.UniqueConstraint("option_id", "value", name="uq_variant_option_values_value"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "value": self.value,
            "position": self.position,
            "isActive": self.is_active,
            "optionId": self.option_id,
        }

    def __repr__(self):
        return f"<OptionValue {self.value} [{'on' if self.is_active else 'off'}]>"
