"""Exception types raised by the shopping list core."""


class ShoplistError(Exception):
    pass


class ValidationError(ShoplistError, ValueError):
    """A list or task name was empty or too long."""


class ListNotFoundError(ShoplistError, LookupError):
    def __init__(self, list_id: str):
        super().__init__(f"No list with id {list_id!r}")
        self.list_id = list_id


class NoCurrentListError(ShoplistError):
    def __init__(self):
        super().__init__("No list is currently selected")


class PersistenceDecodeError(ShoplistError):
    """Stored bytes could not be turned back into lists.

    Raised by the codec; ListStore.load() catches it and falls back to
    empty state.
    """

    def __init__(self, key: str, reason: str):
        super().__init__(f"Cannot decode {key!r}: {reason}")
        self.key = key
        self.reason = reason
