import threading

from typing import Generic, Optional, TypeVar

T = TypeVar("T")

class ThreadLocalStack(Generic[T]):
    """
    A stack of values private to the current thread.
    """
    # constructor

    def __init__(self):
        self.local = threading.local()

    # internal

    def _stack(self) -> list:
        if not hasattr(self.local, "stack"):
            self.local.stack = []

        return self.local.stack

    # public

    def push(self, value: T) -> None:
        self._stack().append(value)

    def pop(self) -> T:
        stack = self._stack()
        if not stack:
            raise IndexError("pop from empty ThreadLocalStack")

        return stack.pop()

    def peek(self) -> Optional[T]:
        stack = self._stack()

        return stack[-1] if stack else None

    def __len__(self):
        return len(self._stack())
