"""Sample substitutes and value types for testing.

- Inbox: the interface being mocked
- InboxMock: substitute that inherits MockInstance
- InboxDelegate: substitute that delegates to a held MockInstance
- Point: user-defined comparable value type
- Priority: enum, comparable through the built-in registration
"""

from .inbox import Inbox, InboxDelegate, InboxMock
from .values import Point, Priority

__all__ = [
    "Inbox",
    "InboxDelegate",
    "InboxMock",
    "Point",
    "Priority",
]
