from enum import Enum
import inspect
import re

from ._wizard import wizard

__all__ = [
    'Event',
    'handler_name',
    'Notifier',
    'NotifierMeta'
    ]


class Event(Enum):
    """Notification kinds emitted by items and hosts. Values are the raw
    names broadcast through the wizard.
    """

    # item
    SELECTED = 'selected'
    RESELECTED = 'reselected'
    DESELECTED = 'deselected'

    # single-pick host
    SELECT_ONE = 'select:one'
    RESELECT_ONE = 'reselect:one'
    DESELECT_ONE = 'deselect:one'

    # multi-pick host
    SELECT_ALL = 'select:all'
    SELECT_SOME = 'select:some'
    SELECT_NONE = 'select:none'
    RESELECT_ANY = 'reselect:any'

    # item to host channel, never dispatched to handlers
    ITEM_SELECTED = '_selected'
    ITEM_DESELECTED = '_deselected'

    @property
    def internal(self):
        return self.value.startswith('_')

    @property
    def handler(self):
        return handler_name(self.value)


_qualifier = re.compile(r':(one|any)$')


def handler_name(name):
    """Maps raw notification name to the name of local handler method:

        'selected'     -> 'on_select'
        'select:one'   -> 'on_select'
        'reselect:any' -> 'on_reselect'
        'select:all'   -> 'on_select_all'

    Returns None for internal notifications.
    """
    if name.endswith('ed'):
        name = name[:-2]
    else:
        name = _qualifier.sub('', name)
    if name.startswith('_'):
        return None
    return 'on_' + '_'.join(v.lower() for v in name.split(':'))


class NotifierMeta(type):

    def __new__(mcls, name, bases, namespace):
        cls = super().__new__(mcls, name, bases, namespace)

        handlers = {}
        for event in Event:
            method = event.handler
            if method and inspect.isfunction(getattr(cls, method, None)):
                handlers[event] = method
        cls.__handlers__ = handlers
        return cls


class Notifier(metaclass=NotifierMeta):
    """Base for objects emitting selection notifications.

    trigger() calls the local handler (on_select, on_deselect, ...) when
    the class defines one and then broadcasts the notification through
    the wizard, so listeners subscribed to this object receive it.
    """

    def trigger(self, event, *args, **kwargs):
        event = Event(event)
        method = self.__handlers__.get(event)
        if method:
            getattr(self, method)(*args, **kwargs)
        wizard.notify(event.value, *args, **kwargs)

    def on(self, event, callback):
        """Subscribes callback to notifications of this object.

        Callback is referenced weakly, like every wizard subscriber, so
        caller must keep it alive. A lambda or closure with no other
        reference is dropped at once and never called.

        Args:
            event (Event or str): Notification to listen to.
            callback: Function or bound method.
        """
        wizard.subscribe(Event(event).value, callback, self)

    def off(self, event, callback):
        wizard.unsubscribe(Event(event).value, callback, self)
