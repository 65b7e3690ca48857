"""Which dialog the options screen is showing.

A single mode replaces per-dialog flags, so at most one dialog is ever open.
"""
import enum


class ModalMode(enum.Enum):
    CLOSED = "closed"
    ADDING = "adding"
    EDITING = "editing"
    SELECTING_PRODUCTS = "selectingProducts"


class ModalState:
    def __init__(self):
        self.mode = ModalMode.CLOSED
        self.editing_option_id = None

    def _set(self, mode, option_id=None):
        self.mode = mode
        self.editing_option_id = option_id

    def open_add(self):
        self._set(ModalMode.ADDING)

    def open_edit(self, option_id):
        if option_id is None:
            raise ValueError("open_edit requires an option id")
        self._set(ModalMode.EDITING, option_id)

    def open_product_selection(self):
        self._set(ModalMode.SELECTING_PRODUCTS)

    def close(self):
        self._set(ModalMode.CLOSED)

    @property
    def is_open(self):
        return self.mode is not ModalMode.CLOSED

    @property
    def is_adding(self):
        return self.mode is ModalMode.ADDING

    @property
    def is_editing(self):
        return self.mode is ModalMode.EDITING

    @property
    def is_selecting_products(self):
        return self.mode is ModalMode.SELECTING_PRODUCTS

    def __repr__(self):
        if self.is_editing:
            return f"<ModalState editing({self.editing_option_id})>"
        return f"<ModalState {self.mode.value}>"
