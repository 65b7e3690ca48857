"""Database operations for product options.

Every function commits (or rolls back) its own unit of work. Failures are
logged and re-raised as :mod:`options_manager.errors` types; callers decide
how to present them.
"""
import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from options_manager.extensions import db
from options_manager.errors import NotFoundOrForbidden, StorageError, ValidationError
from options_manager.models.option import Option
from options_manager.models.option_value import OptionValue

logger = logging.getLogger(__name__)


def _normalize_values(values):
    """Turn raw strings or ``{value, position, isActive}`` dicts into rows.

    ``position`` defaults to the list index, ``isActive`` to True.
    """
    if values is None:
        return []
    if isinstance(values, (str, dict)) or not hasattr(values, "__iter__"):
        raise ValidationError("Option values must be a list")

    rows = []
    for index, raw in enumerate(values):
        if isinstance(raw, dict):
            value = raw.get("value")
            position = raw.get("position")
            is_active = raw.get("isActive")
        else:
            value, position, is_active = raw, None, None

        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"Option value at index {index} must be a non-empty string")
        if position is None:
            position = index
        elif isinstance(position, bool) or not isinstance(position, int):
            raise ValidationError(f"Option value position at index {index} must be an integer")
        rows.append(
            OptionValue(
                value=value.strip(),
                position=position,
                is_active=True if is_active is None else bool(is_active),
            )
        )
    return rows


def _require_shop(shop):
    if not shop:
        raise ValidationError("Shop identifier is required")


def _storage_failure(action, exc):
    db.session.rollback()
    logger.exception("Error %s variant option", action)
    if isinstance(exc, IntegrityError):
        return StorageError(
            f"Error {action} option: option names must be unique per shop "
            "and values unique per option"
        )
    return StorageError(f"Error {action} option")


def create_option(shop, option_data):
    """Create an option and all of its values in one commit."""
    _require_shop(shop)
    name = (option_data.get("name") or "").strip()
    if not name:
        raise ValidationError("Option name is required")

    option_type = option_data.get("type") or "text"
    if option_type not in Option.TYPES:
        raise ValidationError(f"Unknown option type: {option_type}")

    values = _normalize_values(option_data.get("values", []))

    try:
        position = option_data.get("position")
        if position is None:
            position = Option.query.filter_by(shop=shop).count()

        option = Option(
            name=name,
            type=option_type,
            position=position,
            is_required=bool(option_data.get("isRequired", True)),
            shop=shop,
            values=values,
        )
        db.session.add(option)
        db.session.commit()
    except SQLAlchemyError as e:
        raise _storage_failure("creating", e) from e

    logger.info("Created option %s (%s) for %s", option.name, option.id, shop)
    return option


def list_options(shop):
    """All options of a shop, ordered by position, values ordered likewise."""
    try:
        return (
            Option.query.filter_by(shop=shop)
            .options(selectinload(Option.values))
            .order_by(Option.position.asc(), Option.created_at.asc(), Option.id.asc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Error fetching variant options for %s", shop)
        raise StorageError("Failed to load options") from e


def get_option(option_id, shop=None):
    """Fetch one option, optionally checking it belongs to ``shop``."""
    try:
        option = db.session.get(Option, option_id)
    except SQLAlchemyError as e:
        logger.exception("Error fetching variant option %s", option_id)
        raise StorageError("Failed to load option") from e

    if not option or (shop is not None and option.shop != shop):
        logger.warning("Option %s not found for shop %s", option_id, shop)
        raise NotFoundOrForbidden([option_id])
    return option


def update_option(option_id, option_data, shop=None):
    """Replace an option's values and update its scalar fields.

    Existing values are deleted before the replacement set is inserted, so
    value ids never survive an update.
    """
    if not option_id:
        raise ValidationError("Option id is required")
    option = get_option(option_id, shop)

    name = (option_data.get("name") or "").strip()
    if not name:
        raise ValidationError("Option name is required")

    option_type = option_data.get("type")
    if option_type and option_type != option.type:
        raise ValidationError(
            f"Option type cannot be changed from {option.type} to {option_type}"
        )

    values = _normalize_values(option_data.get("values", []))

    try:
        option.values.clear()
        # Old rows must be gone before re-inserting the same value strings.
        db.session.flush()

        option.values.extend(values)
        option.name = name
        if "isRequired" in option_data:
            option.is_required = bool(option_data["isRequired"])
        db.session.commit()
    except SQLAlchemyError as e:
        raise _storage_failure("updating", e) from e

    logger.info("Updated option %s (%s)", option.name, option.id)
    return option


def _as_id_list(option_ids):
    if option_ids is None:
        return []
    if isinstance(option_ids, (list, tuple, set)):
        return list(option_ids)
    return [option_ids]


def get_options_by_ids(option_ids, shop):
    """Load every requested option, failing if any is missing or foreign."""
    ids = _as_id_list(option_ids)
    if not ids:
        raise ValidationError("No option IDs provided")
    _require_shop(shop)

    try:
        options = Option.query.filter(Option.id.in_(ids), Option.shop == shop).all()
    except SQLAlchemyError as e:
        logger.exception("Error verifying variant options for %s", shop)
        raise StorageError("Failed to load options") from e

    found = {o.id for o in options}
    missing = [i for i in ids if i not in found]
    if missing:
        logger.warning("Unmatched option ids for %s: %s", shop, missing)
        raise NotFoundOrForbidden(missing)
    return options


def delete_options(option_ids, shop):
    """Delete one or more options owned by ``shop``.

    Returns ``{"count": int, "deleted_options": [{"id", "name"}, ...]}``.
    """
    if not _as_id_list(option_ids):
        raise ValidationError("No option IDs provided for deletion")
    options = get_options_by_ids(option_ids, shop)

    deleted = [{"id": o.id, "name": o.name} for o in options]
    try:
        for option in options:
            db.session.delete(option)  # cascades to values
        db.session.commit()
    except SQLAlchemyError as e:
        raise _storage_failure("deleting", e) from e

    logger.info(
        "Deleted %d options for %s: %s",
        len(deleted), shop, ", ".join(d["name"] for d in deleted),
    )
    return {"count": len(deleted), "deleted_options": deleted}


def get_stats():
    """Option counts per shop for the ``stats`` command."""
    rows = (
        db.session.query(Option.shop, db.func.count(Option.id))
        .group_by(Option.shop)
        .all()
    )
    return dict(rows)
