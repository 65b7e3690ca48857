"""Admin endpoint for the options screen.

GET returns the shop's options for the initial render; POST carries one
mutation selected by the ``actionType`` form field.
"""
import json
import logging

from flask import current_app, request
from rq import Retry

from options_manager import extensions
from options_manager.auth import authenticate_admin
from options_manager.blueprints.admin import admin_bp
from options_manager.errors import PersistenceError, ValidationError
from options_manager.services import option_service

logger = logging.getLogger(__name__)


@admin_bp.route("/", methods=["GET"])
def loader():
    shop = authenticate_admin()
    try:
        options = [o.to_dict() for o in option_service.list_options(shop)]
    except PersistenceError:
        # Render an empty list rather than failing the whole screen.
        logger.exception("Error loading options for %s", shop)
        options = []
    return {
        "apiKey": current_app.config["SHOPIFY_API_KEY"],
        "options": options,
    }


@admin_bp.route("/", methods=["POST"])
def action():
    shop = authenticate_admin()
    action_type = request.form.get("actionType", "")
    logger.info("Action %r for %s", action_type, shop)

    try:
        if action_type == "Add Option":
            return _add_option(shop)
        if action_type == "Edit Option":
            return _edit_option(shop)
        if action_type == "Delete Options":
            return _delete_options(shop)
        if action_type == "Apply Options to Products":
            return _apply_options(shop)
    except PersistenceError as e:
        logger.warning("%s failed for %s: %s", action_type, shop, e)
        return {"success": False, "error": str(e)}, e.status_code
    except Exception:
        logger.exception("Unexpected error handling %r for %s", action_type, shop)
        return {"success": False, "error": "An unexpected error occurred"}, 500

    return {"success": False, "error": f"Unknown action type: {action_type}"}, 400


def _form_json(field, required=True):
    raw = request.form.get(field)
    if not raw:
        if required:
            raise ValidationError(f"No {field} data provided")
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError(f"{field} is not valid JSON")


def _option_set():
    option_set = _form_json("optionSet")
    if not isinstance(option_set, dict):
        raise ValidationError("optionSet must be an object")
    name = option_set.get("optionName")
    values = option_set.get("values")
    option_type = option_set.get("optionType")
    if not name or values is None or not option_type:
        raise ValidationError(
            "Missing required fields: optionName, values, or optionType"
        )
    if not isinstance(values, list):
        raise ValidationError("values must be a list")
    return name, values, option_type


def _id_list(field):
    ids = _form_json(field)
    if isinstance(ids, str):
        ids = [ids]
    if not isinstance(ids, list):
        raise ValidationError(f"{field} must be a list of ids")
    return ids


def _add_option(shop):
    name, values, option_type = _option_set()
    option = option_service.create_option(
        shop, {"name": name, "type": option_type, "values": values}
    )
    return {"success": True, "option": option.to_dict()}


def _edit_option(shop):
    option_id = request.form.get("optionId")
    if not option_id:
        raise ValidationError("No optionId provided")
    name, values, option_type = _option_set()
    option = option_service.update_option(
        option_id,
        {"name": name, "type": option_type, "values": values},
        shop=shop,
    )
    return {"success": True, "option": option.to_dict()}


def _delete_options(shop):
    result = option_service.delete_options(_id_list("optionIds"), shop)
    return {
        "success": True,
        "count": result["count"],
        "deletedOptions": result["deleted_options"],
    }


def _apply_options(shop):
    handles = [h for h in _id_list("productIds") if isinstance(h, str) and h.strip()]
    if not handles:
        raise ValidationError("Please select at least one product")
    options = option_service.get_options_by_ids(_id_list("optionIds"), shop)

    job = extensions.task_queue.enqueue(
        "options_manager.workers.apply_options.apply_options_to_products",
        shop=shop,
        product_handles=handles,
        option_ids=[o.id for o in options],
        job_timeout=600,
        retry=Retry(max=2, interval=[30, 120]),
    )
    return {
        "success": True,
        "queued": job is not None,
        "jobId": job.id if job is not None else None,
    }
