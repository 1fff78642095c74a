import logging

from types import MethodType, FunctionType
from weakref import ref, WeakKeyDictionary, WeakSet, WeakMethod


__all__ = ['wizard']

log = logging.getLogger(__name__)


class _Wizard:
    """Synchronous publish/subscribe hub.

    Subscribers are held weakly. A subscription is made either for a
    notification name, for a condition object, or for both:

        wizard.subscribe('select:one', listener.method)
        wizard.subscribe('select:one', listener.method, host)
        wizard.subscribe(host, items)

    A notification reaches a conditional subscriber only when the
    condition object is one of the notification's positional arguments.
    Object subscribers (not callables) get the method named after the
    notification called on them, if they define it.
    """

    class _Subscriber(ref):

        __slots__ = '__weakref__'

        def __eq__(self, other):
            if isinstance(other, _Wizard._Subscriber):
                return ref.__eq__(self, other)
            return False

        __hash__ = ref.__hash__

    def __init__(self):
        self.subs = WeakKeyDictionary()
        self.refs = WeakKeyDictionary()
        self.objs = {}
        self.methods = {}

    _undefined = object()

    def __parse(self, args, kwargs):
        subscriber, *args = args
        if type(subscriber) == str or subscriber is None:
            method = subscriber
            subscriber, *args = args
        else:
            method = _Wizard._undefined

        if args:
            item = args[0]
        else:
            item = kwargs.get('item', _Wizard._undefined)

        if isinstance(subscriber, MethodType):
            is_callable = True
            parent = subscriber.__self__
            subscriber = WeakMethod(subscriber)
        else:
            is_callable = isinstance(subscriber, FunctionType)
            parent = subscriber
            subscriber = _Wizard._Subscriber(subscriber)

        return method, subscriber, parent, is_callable, item

    def subscribe(self, *args, **kwargs):
        method, subscriber, parent, is_callable, item = self.__parse(
            args, kwargs)

        subscriber = self.subs.setdefault(parent, dict()).setdefault(
            subscriber, subscriber)

        if is_callable:
            if method is _Wizard._undefined:
                method = subscriber().__name__

        if method not in (None, _Wizard._undefined):
            subs, refs, objs = self.methods.setdefault(method,
                (WeakSet(), WeakKeyDictionary(), {}))
            if item is _Wizard._undefined:
                subs.add(subscriber)
                return
        elif item is _Wizard._undefined:
            raise ValueError(
                "Can't create subscription, 'item' argument is required")
        else:
            refs, objs = self.refs, self.objs

        try:
            refs.setdefault(item, WeakSet()).add(subscriber)
        except TypeError:
            objs.setdefault(item, WeakSet()).add(subscriber)

    def unsubscribe(self, *args, **kwargs):
        method, subscriber, parent, is_callable, item = self.__parse(
            args, kwargs)

        if parent not in self.subs:
            return

        if item is _Wizard._undefined and method is _Wizard._undefined:
            if subscriber() is parent:
                del self.subs[parent]
            elif subscriber in self.subs[parent]:
                del self.subs[parent][subscriber]
            return

        if subscriber not in self.subs[parent]:
            return

        if is_callable and method is _Wizard._undefined:
            method = subscriber().__name__

        if method not in (None, _Wizard._undefined):
            if method not in self.methods:
                return
            subs, refs, objs = self.methods[method]
            if item is _Wizard._undefined:
                subs.discard(subscriber)
                return
        else:
            refs, objs = self.refs, self.objs

        try:
            subs = refs.get(item)
        except TypeError:
            subs = objs.get(item)
        if subs:
            subs.discard(subscriber)

    def subscribers(self, name, *args):
        """Returns live subscribers for notification `name` called with
        positional `args`, without duplicates.
        """
        if name in self.methods:
            method_data = self.methods[name]
            subs = list(method_data[0])
        else:
            method_data = None
            subs = []

        def collect(v, refs, objs):
            try:
                subs.extend(objs.get(v, ()))
                subs.extend(refs.get(v, ()))
            except TypeError:
                pass

        for v in args:
            if method_data:
                collect(v, method_data[1], method_data[2])
            collect(v, self.refs, self.objs)

        result = []
        seen = set()
        for s in subs:
            if s not in seen:
                seen.add(s)
                target = s()
                if target is not None:
                    result.append(target)
        return result

    def notify(self, name, *args, **kwargs):
        for target in self.subscribers(name, *args):
            if isinstance(target, (MethodType, FunctionType)):
                handler = target
            else:
                handler = getattr(target, name, None)
            if callable(handler):
                try:
                    handler(*args, **kwargs)
                except Exception:
                    log.error("Error in handler for '%s'", name,
                              exc_info=True)
                    raise

    def __getattr__(self, method):
        if method.startswith('__'):
            raise AttributeError(method)

        def f(*args, **kwargs):
            self.notify(method, *args, **kwargs)

        return f

    def __repr__(self):
        return repr(self.info())

    def info(self):
        """Current subscriptions.

        Returns:
            dict: subscriber -> list of condition objects
        """
        info = {}
        for v, subs in self.refs.items():
            for s in subs:
                info.setdefault(s, set()).add(v)
        for _, refs, _ in self.methods.values():
            for v, subs in refs.items():
                for s in subs:
                    info.setdefault(s, set()).add(v)
        return {k: list(v) for k, v in info.items()}


wizard = _Wizard()
