from quill import QuillValue


class ReturnSignal:
    """Result of executing a `return`: carried upward until a function body or `do` block absorbs it."""

    __slots__ = ("value", "where")

    def __init__(self, value: QuillValue, where=None):
        self.value = value
        self.where = where

    def __repr__(self):
        return f"ReturnSignal({self.value!r})"
