from __future__ import annotations

from .exceptions import StructureError


class Stack:
    def __init__(self):
        self.stack = []

    def __len__(self):
        return len(self.stack)

    def __bool__(self):
        return bool(self.stack)

    def top(self):
        return self.stack[-1] if self.stack else None

    def push(self, obj):
        self.stack.append(obj)

    def pop(self):
        return self.stack.pop()

    def clear(self):
        self.stack.clear()


class ProfileStack(Stack):
    """
    Profile context while reading or writing one directory.

    Tracks the profiles opened by BEGIN, and the profile last named by
    PROFILE along with whether that was the most recent profile signal.
    """

    def __init__(self):
        super().__init__()
        self.default_profile = None
        self.use_default_profile = False

    def set_profile(self, name):
        """PROFILE: make name the current profile until the next BEGIN or END."""
        self.default_profile = name
        self.use_default_profile = True

    def begin(self, name):
        self.push(name)
        self.use_default_profile = False

    def end(self, name, line_number=None):
        """Close the block opened for name, which must be the innermost one."""
        if not self:
            raise StructureError(f'Profile "{name}" END without BEGIN.', line_number)
        top = self.top()
        if name is not None and top is not None and name.lower() != top.lower():
            raise StructureError(f'Profile "{name}" END does not match BEGIN:{top}.', line_number)
        self.use_default_profile = False
        return self.pop()

    @property
    def current(self):
        """
        The profile in effect: the PROFILE name if it was the most recent
        signal, else the innermost BEGIN, else the last PROFILE name, if any.
        """
        if self.use_default_profile and self.default_profile is not None:
            return self.default_profile
        if self:
            return self.top()
        return self.default_profile

    def clear(self):
        super().clear()
        self.default_profile = None
        self.use_default_profile = False
