"""Allocation of local variable slots inside nested scopes."""

from dataclasses import dataclass
from types import MappingProxyType

_MAX_SLOTS = 1 << 16


@dataclass
class _ScopeFrame:
    variables: dict
    base_count: int


class ScopeManager:
    """Maps local names to frame slots; leaving a scope forgets what it declared."""

    def __init__(self):
        self._variables = {}
        self._count = 0
        self._stack = []

    def clear(self):
        self._variables.clear()
        self._count = 0
        self._stack.clear()

    def enter_scope(self):
        self._stack.append(_ScopeFrame(dict(self._variables), self._count))

    def exit_scope(self):
        """Restore the names and slot count from before the matching enter_scope."""
        if self._stack:
            frame = self._stack.pop()
            self._variables = frame.variables
            self._count = frame.base_count

    def add_local(self, name):
        """Bind `name` to the next free slot and return that slot."""
        if self._count >= _MAX_SLOTS:
            raise OverflowError("too many local variables")
        slot = self._count
        self._variables[name] = slot
        self._count += 1
        return slot

    def get_local(self, name):
        return self._variables.get(name)

    def local_count(self):
        return self._count

    def setup_parameters(self, parameters):
        for param in parameters:
            self.add_local(param.name)

    def setup_constructor(self, parameters):
        """Slot 0 holds the object under construction, parameters follow."""
        self.add_local("this")
        self.setup_parameters(parameters)

    def is_defined(self, name):
        return name in self._variables

    def scope_depth(self):
        return len(self._stack)

    def current_variables(self):
        return MappingProxyType(self._variables)