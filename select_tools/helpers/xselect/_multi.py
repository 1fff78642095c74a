import logging

from types import MappingProxyType
from select_tools import Event
from select_tools._context import (Propagation, with_context, strip_local,
    strip_internal, is_silent)
from ._reconcile import SelectionHost

__all__ = [
    'MultiSelect'
    ]

log = logging.getLogger(__name__)


class MultiSelect(SelectionHost):
    """Host holding any number of selected items.

    Every change of selection is reported by one aggregate notification
    carrying diff dict with 'added' and 'removed' item lists:

        select:all (diff, host) - all items are selected
        select:some (diff, host) - some items are selected
        select:none (diff, host) - nothing is selected
        reselect:any (items, host) - selected items selected again
    """

    picky_type = 'select_tools.MultiSelect'
    uid_prefix = 'multiSelect'

    def __init__(self, items=(), **kwargs):
        self.__selected = {}
        self.__count = 0
        super().__init__(items, **kwargs)

    @property
    def selected(self):
        """Read only snapshot of selection, item uid -> item.
        """
        return MappingProxyType(dict(self.__selected))

    @property
    def selected_count(self):
        return self.__count

    def is_selected(self, item):
        return item.uid in self.__selected

    def select(self, item, **options):
        """Adds item of this host to selection.

        Args:
            item (Selectable): Item from host's items, other items are
                ignored.
            silent (bool): Suppress all notifications.
            **options: Passed to listeners.
        """
        self._check_open()
        if item not in self.items:
            return

        top = options.get('_processed_by') is None
        previous = dict(self.__selected)
        reselected = [item] if item.uid in self.__selected else []
        options = with_context(options)
        processed = options['_processed_by']
        if reselected and self in processed:
            return

        if not reselected:
            self.__selected[item.uid] = item
            self.__count = len(self.__selected)
        processed.add(self)
        log.debug('%s: select %s, reselected=%s', self, item,
                  bool(reselected))

        if item not in processed:
            item.select(**strip_local(options))
        self.__trigger_changes(previous, options, reselected)

        if top:
            self._settled()

    def deselect(self, item, **options):
        """Removes item from selection, no-op when item is not selected.
        """
        self._check_open()
        if item.uid not in self.__selected:
            return

        top = options.get('_processed_by') is None
        previous = dict(self.__selected)
        options = with_context(options)
        del self.__selected[item.uid]
        self.__count = len(self.__selected)
        log.debug('%s: deselect %s', self, item)

        if not options.get('_skip_model_call'):
            item.deselect(**strip_local(options))
        self.__trigger_changes(previous, options)

        if top:
            self._settled()

    def select_all(self, **options):
        """Selects every item of this host, reporting the whole batch
        with one aggregate notification.
        """
        self._check_open()
        top = options.get('_processed_by') is None
        previous = dict(self.__selected)
        reselected = []

        for item in self.items:
            if item.uid in self.__selected:
                reselected.append(item)
            # every item is separate operation, so single-pick hosts
            # sharing items can follow each of them
            self.select(item, **dict(options, _silent_locally=True,
                                     _processed_by=Propagation()))

        self.__trigger_changes(previous, options, reselected)
        if top:
            self._settled()

    def deselect_all(self, **options):
        """Deselects every item of this host, reporting the whole batch
        with one aggregate notification.
        """
        self._check_open()
        if self.__count == 0:
            return

        top = options.get('_processed_by') is None
        previous = dict(self.__selected)
        for item in self.items:
            self.deselect(item, **dict(options, _silent_locally=True))

        self.__trigger_changes(previous, options)
        if top:
            self._settled()

    def select_none(self, **options):
        self.deselect_all(**options)

    def toggle_select_all(self, **options):
        """Selects all items unless all are selected already, then
        deselects all. Partial selection is toggled to all selected.
        """
        if self.__count < len(self.items):
            self.select_all(**options)
        else:
            self.deselect_all(**options)

    def check_invariants(self):
        assert self.__count == len(self.__selected), (
            self.__count, self.__selected)
        for uid, item in self.__selected.items():
            assert item.selected, item
            assert self.items.get(uid) is item, item
        for item in self.items:
            assert item.selected == (item.uid in self.__selected), item

    def _reaffirm(self, selected):
        for item in selected:
            self.select(item, silent=True)

    def __resolve(self, uid, previous):
        item = self.items.get(uid)
        if item is None:
            # removed from items meanwhile
            item = previous.get(uid, self.__selected.get(uid))
        return item

    def __trigger_changes(self, previous, options, reselected=()):
        if is_silent(options):
            return

        public = strip_internal(options)
        added = [uid for uid in self.__selected if uid not in previous]
        removed = [uid for uid in previous if uid not in self.__selected]

        if reselected and not options.get('_silent_reselect'):
            self.trigger(Event.RESELECT_ANY, list(reselected), self, **public)

        if self.__count == len(previous) and not added and not removed:
            return

        diff = dict(
            added=[self.__resolve(uid, previous) for uid in added],
            removed=[self.__resolve(uid, previous) for uid in removed])

        if self.__count == len(self.items):
            event = Event.SELECT_ALL
        elif self.__count == 0:
            event = Event.SELECT_NONE
        else:
            event = Event.SELECT_SOME
        log.debug('%s: %s +%d -%d', self, event.value, len(added),
                  len(removed))
        self.trigger(event, diff, self, **public)
