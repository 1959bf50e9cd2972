"""Variable scope used while parsing. A Scope is immutable: bind returns a new Scope that shares its tail with the old
one, so a binding made in one branch of the tree is never visible to a sibling branch, and an outer scope is never
changed by what happens inside a nested let.
"""


class Scope:
    """Persistent association list of variable name -> operand that computes the variable's value."""
    __slots__ = ("_name", "_operand", "_parent", "_size")

    def __init__(self, name=None, operand=None, parent=None):
        self._name = name
        self._operand = operand
        self._parent = parent
        self._size = len(parent) + 1 if parent is not None else 0

    @classmethod
    def empty(cls):
        return cls()

    def bind(self, name, operand):
        """Returns a new Scope with name bound to operand. self is left untouched."""
        return Scope(name, operand, self)

    def _lookup(self, name):
        node = self
        while node is not None and node._size:
            if node._name == name:
                return node
            node = node._parent
        return None

    def get(self, name, default=None):
        node = self._lookup(name)
        return node._operand if node is not None else default

    def names(self):
        """Names visible in this scope, innermost first."""
        names = []
        node = self
        while node is not None and node._size:
            if node._name not in names:
                names.append(node._name)
            node = node._parent
        return names

    def __contains__(self, name):
        return self._lookup(name) is not None

    def __getitem__(self, name):
        node = self._lookup(name)
        if node is None:
            raise KeyError(name)
        return node._operand

    def __len__(self):
        return self._size

    def __repr__(self):
        return f"Scope({', '.join(self.names())})"
