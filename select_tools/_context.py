from itertools import count
from weakref import WeakValueDictionary

__all__ = [
    'Propagation',
    'unique_id',
    'with_context',
    'strip_local',
    'strip_internal',
    'is_silent',
    'registry',
    'lookup'
    ]

_counter = count(1)


def unique_id(prefix=''):
    return '%s%d' % (prefix, next(_counter))


class Propagation:
    """Guard shared by every call of one logical select operation.

    Items and hosts mark themselves here once they have processed the
    operation; a component already marked returns immediately, which
    stops item -> host -> item recursion.
    """

    __slots__ = 'processed',

    def __init__(self):
        self.processed = {}

    def __contains__(self, component):
        return component.uid in self.processed

    def add(self, component):
        self.processed[component.uid] = component

    def __repr__(self):
        return 'Propagation(%s)' % ', '.join(self.processed)


# options which must not leave the level they were set at
LOCAL_OPTIONS = ('_silent_locally', '_external_event')

# options which are never passed to handlers and listeners
INTERNAL_OPTIONS = ('_silent_locally', '_silent_reselect', '_skip_model_call',
    '_processed_by')


def with_context(options):
    """Returns copy of options carrying the operation context, creating
    fresh context at the top of the call chain.
    """
    options = dict(options)
    if options.get('_processed_by') is None:
        options['_processed_by'] = Propagation()
    return options


def _omit(options, keys):
    return {k: v for k, v in options.items() if k not in keys}


def strip_local(options):
    return _omit(options, LOCAL_OPTIONS)


def strip_internal(options):
    return _omit(options, INTERNAL_OPTIONS)


def is_silent(options):
    return bool(options.get('silent') or options.get('_silent_locally'))


# live hosts by uid; items keep host uids only
registry = WeakValueDictionary()


def lookup(uid):
    return registry.get(uid)
