from __future__ import annotations


class NilType:
    """The absence value. There is exactly one instance, `Nil`."""

    __slots__ = ()

    def __repr__(self): return "nil"
    def __bool__(self): return False

    # Nil is equal only to Nil
    def __eq__(self, other):
        return isinstance(other, NilType)

    def __hash__(self):
        return hash(NilType)


Nil = NilType()
