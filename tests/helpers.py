"""Helpers shared by test modules."""
from menukit.events import EventStream, key_events


def press(*key_ids):
    """Event stream for a sequence of key ids such as "1", "<Enter>"."""
    return EventStream(key_events(key_ids))
