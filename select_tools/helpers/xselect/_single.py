import logging

from select_tools import Event
from select_tools._context import (with_context, strip_local, strip_internal,
    is_silent)
from ._reconcile import SelectionHost

__all__ = [
    'SingleSelect'
    ]

log = logging.getLogger(__name__)


class SingleSelect(SelectionHost):
    """Host holding at most one selected item. Selecting other item
    deselects the current one.

    Notifications:
        select:one (item, host) - new item selected
        reselect:one (item, host) - selected item selected again
        deselect:one (item, host) - item deselected
    """

    picky_type = 'select_tools.SingleSelect'
    uid_prefix = 'singleSelect'

    def __init__(self, items=(), **kwargs):
        self.__selected = None
        super().__init__(items, **kwargs)

    @property
    def selected(self):
        """Selected item or None.
        """
        return self.__selected

    def select(self, item, **options):
        """Selects item of this host.

        Args:
            item (Selectable): Item from host's items, other items are
                ignored.
            silent (bool): Suppress all notifications.
            **options: Passed to listeners.
        """
        self._check_open()
        if item is None or item not in self.items:
            return

        top = options.get('_processed_by') is None
        reselected = item is self.__selected
        options = with_context(options)
        processed = options['_processed_by']
        if self in processed:
            return

        if not reselected:
            self.deselect(None, **{k: v for k, v in options.items()
                                   if k != '_silent_locally'})
            self.__selected = item
        processed.add(self)
        log.debug('%s: select %s, reselected=%s', self, item, reselected)

        if item not in processed:
            item.select(**strip_local(options))

        if not is_silent(options):
            if reselected:
                if not options.get('_silent_reselect'):
                    self.trigger(Event.RESELECT_ONE, item, self,
                                 **strip_internal(options))
            else:
                self.trigger(Event.SELECT_ONE, item, self,
                             **strip_internal(options))

        if top:
            self._settled()

    def deselect(self, item=None, **options):
        """Deselects item, or currently selected item if item is None.
        No-op when item is not selected in this host.
        """
        self._check_open()
        if self.__selected is None:
            return
        if item is None:
            item = self.__selected
        if item is not self.__selected:
            return

        top = options.get('_processed_by') is None
        options = with_context(options)
        self.__selected = None
        log.debug('%s: deselect %s', self, item)

        if not options.get('_skip_model_call'):
            item.deselect(**strip_local(options))

        if not is_silent(options):
            self.trigger(Event.DESELECT_ONE, item, self,
                         **strip_internal(options))

        if top:
            self._settled()

    def check_invariants(self):
        selected = [item for item in self.items if item.selected]
        if self.__selected is None:
            assert not selected, (self, selected)
        else:
            assert self.__selected.selected, self.__selected
            assert selected == [self.__selected], (self, selected)

    def _reaffirm(self, selected):
        # keep the last one, stale flags of others are cleared
        for item in selected[:-1]:
            item.deselect()
        if selected:
            self.select(selected[-1], silent=True)
