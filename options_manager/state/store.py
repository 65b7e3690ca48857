"""In-memory option list for one editing session.

The store is seeded from the server's option list and then mutated by local
UI events or by the submission gateway. It never performs I/O and never
raises: malformed calls are logged and ignored so a bad event cannot take the
editing screen down.
"""
import logging

from options_manager.services.option_transform import to_ui_shape

logger = logging.getLogger(__name__)


def _is_option(option):
    """A dict with an id and a list of value dicts."""
    if not isinstance(option, dict) or option.get("id") is None:
        return False
    values = option.get("values")
    return isinstance(values, list) and all(isinstance(v, dict) for v in values)


def _as_id_set(ids):
    if ids is None:
        return set()
    if isinstance(ids, (list, tuple, set, frozenset)):
        return set(ids)
    return {ids}


class OptionStore:
    def __init__(self, loaded_options=None):
        self.options = []
        self._loaded = None
        if loaded_options is not None:
            self.sync(loaded_options)

    def sync(self, loaded_options):
        """Replace local state when the server list is a new object."""
        if loaded_options is self._loaded:
            return False
        self._loaded = loaded_options
        self.options = to_ui_shape(loaded_options or [])
        return True

    def get(self, option_id):
        for option in self.options:
            if option["id"] == option_id:
                return option
        return None

    def index_of(self, option_id):
        for index, option in enumerate(self.options):
            if option["id"] == option_id:
                return index
        return -1

    @property
    def ids(self):
        return [o["id"] for o in self.options]

    def toggle_value_checked(self, option_id, value_name):
        """Flip ``checked`` on one value of one option."""
        if option_id is None:
            logger.warning("toggle_value_checked called without an option id")
            return
        self.options = [
            {
                **option,
                "values": [
                    {**v, "checked": not v.get("checked")} if v.get("name") == value_name else v
                    for v in option["values"]
                ],
            }
            if option["id"] == option_id
            else option
            for option in self.options
        ]

    def toggle_all_values(self, option_id):
        """Select all values, or deselect all when every value is checked."""
        if option_id is None:
            logger.warning("toggle_all_values called without an option id")
            return
        updated = []
        for option in self.options:
            if option["id"] == option_id:
                all_checked = all(v.get("checked") for v in option["values"])
                option = {
                    **option,
                    "values": [{**v, "checked": not all_checked} for v in option["values"]],
                }
            updated.append(option)
        self.options = updated

    def add_option(self, new_option):
        """Insert an option, replacing any entry that already has its id."""
        if not _is_option(new_option):
            logger.warning("add_option called with a malformed option: %r", new_option)
            return
        index = self.index_of(new_option["id"])
        if index >= 0:
            logger.warning("Option %s already present, replacing it", new_option["id"])
            self.options = [*self.options[:index], new_option, *self.options[index + 1:]]
        else:
            self.options = [*self.options, new_option]

    def update_option(self, updated):
        """Replace the entry with ``updated['id']``, appending it if absent."""
        if not _is_option(updated):
            logger.warning("update_option called with a malformed option: %r", updated)
            return
        index = self.index_of(updated["id"])
        if index < 0:
            logger.warning("Option %s not in store, appending it", updated["id"])
            self.options = [*self.options, updated]
        else:
            self.options = [*self.options[:index], updated, *self.options[index + 1:]]

    def replace_option(self, old_id, option):
        """Swap the entry ``old_id`` for ``option`` in place (id may change)."""
        if not _is_option(option):
            logger.warning("replace_option called with a malformed option: %r", option)
            return
        index = self.index_of(old_id)
        if index < 0:
            self.add_option(option)
            return
        # Drop any other entry already carrying the new id.
        kept = [o for o in self.options if o["id"] == old_id or o["id"] != option["id"]]
        index = next(i for i, o in enumerate(kept) if o["id"] == old_id)
        self.options = [*kept[:index], option, *kept[index + 1:]]

    def insert_option(self, index, option):
        """Put ``option`` back at ``index`` (clamped), replacing a same-id entry."""
        if not _is_option(option):
            logger.warning("insert_option called with a malformed option: %r", option)
            return
        remaining = [o for o in self.options if o["id"] != option["id"]]
        index = max(0, min(index, len(remaining)))
        self.options = [*remaining[:index], option, *remaining[index:]]

    def remove_options(self, ids):
        """Drop every entry whose id is in ``ids`` (a single id or a list)."""
        id_set = _as_id_set(ids)
        if not id_set:
            logger.warning("remove_options called without ids")
            return
        self.options = [o for o in self.options if o["id"] not in id_set]
