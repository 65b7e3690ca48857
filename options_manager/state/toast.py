from collections import deque

HISTORY_SIZE = 20


class Toast:
    """Transient notification shown to the merchant.

    ``history`` keeps only the most recent messages.
    """

    def __init__(self):
        self.active = False
        self.message = ""
        self.history = deque(maxlen=HISTORY_SIZE)

    def show(self, message):
        self.message = message
        self.active = True
        self.history.append(message)

    def hide(self):
        self.active = False

    def __repr__(self):
        return f"<Toast {'on' if self.active else 'off'}: {self.message}>"
