from __future__ import annotations


class NilType:
    """Type of Quill's `nil`, the value of an uninitialized `let` binding and
    of any function or `do` block that finishes without `return`.

    Use the `Nil` instance below; it is falsy and equal to nothing but
    itself.
    """

    def __repr__(self):
        return "nil"

    def __bool__(self):
        return False

    def __eq__(self, other):
        return isinstance(other, NilType)

    def __hash__(self):
        return hash(NilType)


Nil = NilType()
