import logging

from contextlib import contextmanager
from select_tools import wizard, Event, Notifier, settings
from select_tools._context import unique_id, registry
from ._elements import ItemList

__all__ = [
    'SelectionHost',
    'HostClosed'
    ]

log = logging.getLogger(__name__)


class HostClosed(RuntimeError):
    pass


class SelectionHost(Notifier):
    """Common part of selection hosts: item registration and
    reconciliation after structural changes of backing item list.

    Host registers itself with every item of its list, listens to the
    item's internal selection notifications and follows the list through
    w_item_added, w_item_removed and w_items_reset.

    Subclasses implement select(), deselect(), check_invariants() and
    _reaffirm(), which restores selection from items carrying
    selected flag after reset.
    """

    picky_type = None
    uid_prefix = 'host'

    def __init__(self, items=(), **kwargs):
        super().__init__(**kwargs)
        self.__uid = unique_id(self.uid_prefix)
        self.__closed = False
        self.__reconciling = 0
        if not isinstance(items, ItemList):
            items = ItemList(items)
        self.__items = items
        registry[self.__uid] = self
        wizard.subscribe(self, items)
        self.w_items_reset(items, [])

    def __repr__(self):
        return '<%s %s>' % (type(self).__name__, self.__uid)

    @property
    def uid(self):
        return self.__uid

    @property
    def items(self):
        """Backing item list.

        Returns:
            ItemList
        """
        return self.__items

    @property
    def total_count(self):
        return len(self.__items)

    @property
    def closed(self):
        return self.__closed

    def close(self):
        """Releases every item of this host and stops following the
        item list. Host can't be used after close.
        """
        if self.__closed:
            return
        with self._reconciling(settle=False):
            for item in self.__items:
                self._release(item, _silent_locally=True)
        wizard.unsubscribe(self, self.__items)
        registry.pop(self.__uid, None)
        self.__closed = True
        log.debug('%s: closed', self)

    def _check_open(self):
        if self.__closed:
            raise HostClosed('%r is closed' % self)

    def _settled(self):
        if (settings['check_invariants'] and not self.__reconciling
                and not self.__closed):
            self.check_invariants()

    @contextmanager
    def _reconciling(self, settle=True):
        # invariants do not hold until reconciliation is complete
        self.__reconciling += 1
        try:
            yield
        finally:
            self.__reconciling -= 1
        if settle:
            self._settled()

    def check_invariants(self):
        raise NotImplementedError

    def _reaffirm(self, selected):
        raise NotImplementedError

    # item membership

    def _register(self, item):
        if item._add_host(self.__uid):
            wizard.subscribe(Event.ITEM_SELECTED.value, self._item_selected,
                             item)
            wizard.subscribe(Event.ITEM_DESELECTED.value,
                             self._item_deselected, item)
            log.debug('%s: registered %s', self, item)

    def _unregister(self, item):
        item._remove_host(self.__uid)
        wizard.unsubscribe(Event.ITEM_SELECTED.value, self._item_selected,
                           item)
        wizard.unsubscribe(Event.ITEM_DESELECTED.value,
                           self._item_deselected, item)

    def _release(self, item, **options):
        self._unregister(item)
        if item.selected:
            if item.hosts:
                # still selected in other hosts, keep item's flag
                options = dict(options, _skip_model_call=True)
            log.debug('%s: release selected %s', self, item)
            self.deselect(item, **options)

    def _item_selected(self, item, **options):
        self.select(item, **options)

    def _item_deselected(self, item, **options):
        self.deselect(item, **options)

    # item list notifications

    def w_item_added(self, items, item, index=None, **options):
        with self._reconciling():
            self._register(item)
            if item.selected:
                self.select(item, **dict(options, _silent_reselect=True,
                                         _external_event='add'))

    def w_item_removed(self, items, item, index=None, **options):
        with self._reconciling():
            self._release(item, **dict(options, _external_event='remove'))

    def w_items_reset(self, items, previous, **options):
        with self._reconciling():
            for item in previous:
                if item.selected:
                    self._release(item, _silent_locally=True)
            for item in previous:
                self._unregister(item)
            for item in items:
                self._register(item)
            log.debug('%s: reset, %d items', self, len(items))
            self._reaffirm([item for item in items if item.selected])
