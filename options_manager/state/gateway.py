"""Sends local option edits to the admin endpoint.

Each edit is applied to the store right away and remembered as a pending
mutation. When the response arrives the local entry is reconciled with the
server record, or reverted if the server refused the change, and the outcome
is shown in the toast.
"""
import copy
import json
import logging
import uuid

import httpx

from options_manager.services.option_transform import (
    build_new_ui_option,
    from_ui_edit,
    is_temporary_id,
    prepare_option_for_submit,
    to_ui_shape,
)
from options_manager.state.toast import Toast

logger = logging.getLogger(__name__)

ADD_OPTION = "Add Option"
EDIT_OPTION = "Edit Option"
DELETE_OPTIONS = "Delete Options"
APPLY_OPTIONS = "Apply Options to Products"


class PendingMutation:
    def __init__(self, action, revert=None):
        self.action = action
        self.revert = revert or (lambda: None)

    def __repr__(self):
        return f"<PendingMutation {self.action}>"


def _keep_checked(local, server):
    """Server record with the merchant's local checked states carried over."""
    previous = {v["name"]: v["checked"] for v in (local or {}).get("values", [])}
    return {
        **server,
        "values": [
            {**v, "checked": previous.get(v["name"], v["checked"])}
            for v in server["values"]
        ],
    }


class SubmissionGateway:
    def __init__(self, store, client, endpoint="/app/", toast=None):
        self.store = store
        self.client = client
        self.endpoint = endpoint
        self.toast = toast or Toast()
        self.pending = {}

    @property
    def loading(self):
        return bool(self.pending)

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def _begin(self, action, revert=None):
        if self.loading:
            logger.warning("Refusing %s while another change is pending", action)
            self.toast.show("Please wait for the current change to finish saving.")
            return None
        key = uuid.uuid4().hex
        self.pending[key] = PendingMutation(action, revert)
        return key

    def _post(self, data):
        try:
            resp = self.client.post(self.endpoint, data=data)
        except httpx.HTTPError as e:
            logger.warning("%s request failed: %s", data.get("actionType"), e)
            return {"success": False, "error": f"Network error: {e}"}

        try:
            payload = resp.json()
        except ValueError:
            logger.warning(
                "%s returned a non-JSON response (%s)",
                data.get("actionType"), resp.status_code,
            )
            return {
                "success": False,
                "error": f"Unexpected response from server ({resp.status_code})",
            }

        if not isinstance(payload, dict):
            return {"success": False, "error": "Unexpected response from server"}
        return payload

    def _finish(self, key, result, expects_option=False):
        mutation = self.pending.pop(key)
        if (
            expects_option
            and result.get("success")
            and not isinstance(result.get("option"), dict)
        ):
            logger.warning("%s succeeded without an option record", mutation.action)
            result = {"success": False, "error": "Server response did not include the option"}
        if not result.get("success"):
            logger.info("Reverting %s: %s", mutation.action, result.get("error"))
            mutation.revert()
        return result

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def add_option(self, name, value_names, option_type):
        local = build_new_ui_option(name, value_names, option_type)
        key = self._begin(ADD_OPTION, lambda: self.store.remove_options(local["id"]))
        if key is None:
            return None
        self.store.add_option(local)

        result = self._finish(key, self._post({
            "actionType": ADD_OPTION,
            "optionSet": json.dumps(prepare_option_for_submit(name, value_names, option_type)),
        }), expects_option=True)

        if result.get("success"):
            server = to_ui_shape([result["option"]])[0]
            current = self.store.get(local["id"]) or local
            self.store.replace_option(local["id"], _keep_checked(current, server))
            self.toast.show(f'Option "{name}" created successfully!')
        else:
            self.toast.show(f"Failed to create option: {result.get('error')}")
        return result

    def edit_option(self, option_id, name, value_names, option_type):
        original = self.store.get(option_id)
        if original is None:
            self.toast.show("Option not found.")
            return None
        if is_temporary_id(option_id):
            self.toast.show("This option is still being saved.")
            return None

        snapshot = copy.deepcopy(original)
        key = self._begin(EDIT_OPTION, lambda: self.store.update_option(snapshot))
        if key is None:
            return None
        updated = from_ui_edit(original, name, value_names, option_type)
        self.store.update_option(updated)

        result = self._finish(key, self._post({
            "actionType": EDIT_OPTION,
            "optionId": option_id,
            "optionSet": json.dumps(prepare_option_for_submit(name, value_names, option_type)),
        }), expects_option=True)

        if result.get("success"):
            server = to_ui_shape([result["option"]])[0]
            current = self.store.get(option_id) or updated
            self.store.replace_option(option_id, _keep_checked(current, server))
            self.toast.show(f'Option "{name}" updated successfully!')
        else:
            self.toast.show(f"Failed to update option: {result.get('error')}")
        return result

    def delete_options(self, option_ids):
        if not isinstance(option_ids, (list, tuple, set)):
            option_ids = [option_ids] if option_ids else []
        ids = [i for i in option_ids if i and not is_temporary_id(i)]
        if not ids:
            self.toast.show("No options selected for deletion.")
            return None

        removed = [
            (self.store.index_of(i), copy.deepcopy(self.store.get(i)))
            for i in ids
            if self.store.get(i) is not None
        ]

        def revert():
            for index, option in sorted(removed, key=lambda pair: pair[0]):
                self.store.insert_option(index, option)

        key = self._begin(DELETE_OPTIONS, revert)
        if key is None:
            return None
        self.store.remove_options(ids)

        result = self._finish(key, self._post({
            "actionType": DELETE_OPTIONS,
            "optionIds": json.dumps(ids),
        }))

        if result.get("success"):
            count = result.get("count", len(ids))
            names = ", ".join(o["name"] for o in result.get("deletedOptions", []))
            self.toast.show(
                f"Successfully deleted {count} option{'' if count == 1 else 's'}: {names}"
            )
        else:
            self.toast.show(f"Failed to delete options: {result.get('error')}")
        return result

    def apply_options(self, product_handles):
        """Ask the server to create variants from the saved options."""
        if not product_handles:
            self.toast.show("Please select at least one product to apply options to.")
            return None
        option_ids = [i for i in self.store.ids if not is_temporary_id(i)]

        key = self._begin(APPLY_OPTIONS)
        if key is None:
            return None
        result = self._finish(key, self._post({
            "actionType": APPLY_OPTIONS,
            "productIds": json.dumps(list(product_handles)),
            "optionIds": json.dumps(option_ids),
        }))

        if result.get("success"):
            self.toast.show(
                f"Applying {len(option_ids)} option(s) to {len(product_handles)} product(s)"
            )
        else:
            self.toast.show(f"Failed to apply options: {result.get('error')}")
        return result
