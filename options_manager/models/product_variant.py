from datetime import datetime, timezone
from options_manager.extensions import db
from options_manager.models.option import _new_id


product_variant_options = db.Table(
    "product_variant_options",
    db.Column(
        "product_variant_id",
        db.String(36),
        db.ForeignKey("product_variants.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column(
        "option_id",
        db.String(36),
        db.ForeignKey("variant_options.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

product_variant_values = db.Table(
    "product_variant_values",
    db.Column(
        "product_variant_id",
        db.String(36),
        db.ForeignKey("product_variants.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column(
        "option_value_id",
        db.String(36),
        db.ForeignKey("variant_option_values.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class ProductVariant(db.Model):
    """A catalog variant created by applying options to a product."""

    __tablename__ = "product_variants"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    product_id = db.Column(db.String(255), nullable=False, index=True)
    catalog_variant_id = db.Column(db.String(255))
    sku = db.Column(db.String(255))
    title = db.Column(db.String(512), nullable=False, default="")
    price = db.Column(db.Float, nullable=False, default=0)
    compare_at_price = db.Column(db.Float, default=0)
    inventory = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    shop = db.Column(db.String(255), nullable=False, index=True)
    combination_key = db.Column(db.Text, nullable=False, default="")
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    options = db.relationship(
        "Option", secondary=product_variant_options, backref="product_variants"
    )
    values = db.relationship(
        "OptionValue", secondary=product_variant_values, backref="product_variants"
    )

    @staticmethod
    def combination_key_for(values):
        """Stable key for a value combination: sorted ``option_id:value`` pairs.

        Persisted on the row; value rows do not survive an option edit.
        """
        return "|".join(sorted(f"{v.option_id}:{v.value}" for v in values))

    def __repr__(self):
        return f"<ProductVariant {self.product_id}: {self.title}>"
