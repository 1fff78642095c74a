import logging

from select_tools import Event, Notifier, settings
from select_tools._context import (unique_id, with_context, strip_local,
    strip_internal, is_silent, lookup)

__all__ = [
    'Selectable'
    ]

log = logging.getLogger(__name__)


class Selectable(Notifier):
    """Base class for items which can be selected on their own or
    inside SingleSelect and MultiSelect hosts.

    Item keeps uids of hosts which have it in their items. When item is
    selected or deselected directly, every such host follows.

    Handlers on_select, on_reselect and on_deselect are called when
    subclass defines them.
    """

    picky_type = 'select_tools.Selectable'

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.__uid = unique_id('item')
        self.__selected = False
        self.__hosts = set()

    def __repr__(self):
        return '<%s %s%s>' % (type(self).__name__, self.__uid,
                              ' selected' if self.__selected else '')

    @property
    def uid(self):
        return self.__uid

    @property
    def selected(self):
        return self.__selected

    @property
    def hosts(self):
        """Uids of live hosts this item is registered with. Uids of hosts
        collected without close() are dropped.

        Returns:
            frozenset
        """
        return frozenset(self.__live_hosts())

    def select(self, **options):
        """Selects item. Selecting already selected item is reselection,
        which is propagated to hosts again and notified as 'reselected'.

        Args:
            silent (bool): Suppress all notifications.
            **options: Passed to listeners.
        """
        top = options.get('_processed_by') is None
        reselected = self.__selected
        options = with_context(options)
        processed = options['_processed_by']
        if self in processed:
            return

        self.__selected = True
        processed.add(self)
        log.debug('%s: select, reselected=%s', self, reselected)

        if self.__live_hosts():
            self.trigger(Event.ITEM_SELECTED, self, **strip_local(options))

        if not is_silent(options):
            if reselected:
                if not options.get('_silent_reselect'):
                    self.trigger(Event.RESELECTED, self,
                                 **strip_internal(options))
            else:
                self.trigger(Event.SELECTED, self, **strip_internal(options))

        if top:
            self.__settled()

    def deselect(self, **options):
        """Deselects item, no-op if item is not selected.
        """
        if not self.__selected:
            return

        top = options.get('_processed_by') is None
        options = with_context(options)
        self.__selected = False
        log.debug('%s: deselect', self)

        if self.__live_hosts():
            self.trigger(Event.ITEM_DESELECTED, self, **strip_local(options))

        if not is_silent(options):
            self.trigger(Event.DESELECTED, self, **strip_internal(options))

        if top:
            self.__settled()

    def toggle_selected(self, **options):
        if self.__selected:
            self.deselect(**options)
        else:
            self.select(**options)

    # membership, maintained by hosts

    def _add_host(self, host_uid):
        if host_uid in self.__hosts:
            return False
        self.__hosts.add(host_uid)
        return True

    def _remove_host(self, host_uid):
        self.__hosts.discard(host_uid)

    def __live_hosts(self):
        dead = [uid for uid in self.__hosts if lookup(uid) is None]
        self.__hosts.difference_update(dead)
        return self.__hosts

    def __settled(self):
        if settings['check_invariants']:
            for uid in list(self.__live_hosts()):
                host = lookup(uid)
                if host is not None:
                    host._settled()
