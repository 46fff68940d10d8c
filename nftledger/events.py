from collections import namedtuple


class _Event:
    __slots__ = ()

    # Plain tuple equality would make Transfer(a, b, 1) == Approval(a, b, 1)
    def __eq__(self, other):
        return type(self) is type(other) and tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__, tuple(self)))

    # Field names that clash with Python keywords carry a trailing underscore
    def to_dict(self):
        d = {'event': type(self).__name__}
        for field, value in self._asdict().items():
            d[field.rstrip('_')] = value
        return d


class Transfer(_Event, namedtuple('Transfer', ['from_', 'to', 'token'])):
    """Ownership of a token moved. Mint and burn use the null principal on the empty side."""
    __slots__ = ()


class Approval(_Event, namedtuple('Approval', ['from_', 'to', 'token'])):
    __slots__ = ()


class ApprovalForAll(_Event, namedtuple('ApprovalForAll', ['owner', 'operator', 'approved'])):
    __slots__ = ()


class Mint(_Event, namedtuple('Mint', ['to', 'token', 'uri'])):
    __slots__ = ()


class EventLog:
    """Append-only sink. Anything with an emit(event) method can stand in for it."""
    def __init__(self):
        self._events = []

    def emit(self, event):
        self._events.append(event)

    @property
    def events(self):
        return list(self._events)

    def to_dicts(self):
        return [e.to_dict() for e in self._events]

    def __iter__(self):
        return iter(list(self._events))

    def __len__(self):
        return len(self._events)

    def __getitem__(self, item):
        return self._events[item]
