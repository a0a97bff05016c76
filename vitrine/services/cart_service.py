"""The visitor's bag and the WhatsApp order message built from it."""

from vitrine.services.whatsapp_service import build_whatsapp_link

GREETING = "Olá Lali!! Tenho interesse nos seguintes produtos:\n\n"
CLOSING = "\nAguardo o contato!"


class Cart:
    """Ordered, in-memory selection. ``add`` does not de-duplicate; callers
    check :meth:`is_in_cart` first."""

    def __init__(self, items=()):
        self._items = list(items)

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    @property
    def items(self):
        return list(self._items)

    def add(self, item):
        self._items.append(item)

    def remove(self, item_id):
        self._items = [item for item in self._items if item.id != item_id]

    def is_in_cart(self, item_id):
        return any(item.id == item_id for item in self._items)

    def clear(self):
        self._items = []


def build_handoff_message(items):
    lines = ["- {} ({})\n".format(item.name, item.price) for item in items]
    return GREETING + "".join(lines) + CLOSING


def build_handoff_link(items, phone=None):
    message = build_handoff_message(items)
    return message, build_whatsapp_link(message, phone=phone)


__all__ = ["Cart", "CLOSING", "GREETING", "build_handoff_link", "build_handoff_message"]
