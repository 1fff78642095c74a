import logging

from collections.abc import MutableSequence
from select_tools import wizard
from ._item import Selectable

__all__ = [
    'ItemList'
    ]

log = logging.getLogger(__name__)


class ItemList(MutableSequence):
    """
    Ordered collection of selectable items backing a selection host.

    Every structural change is reported through the wizard:
        w_item_added(items, item, index, **options)
        w_item_removed(items, item, index, **options)
        w_items_reset(items, previous, **options)
        w_items_moved(items, **options)

    An item is stored at most once, inserting an item which is already
    in the list does nothing.
    """

    def __init__(self, items=()):
        self.__fill(items)

    def __fill(self, items):
        items = [self.__check(v) for v in items]
        self.__items = []
        self.__index = {}
        for item in items:
            if item.uid not in self.__index:
                self.__items.append(item)
                self.__index[item.uid] = item

    def __check(self, item):
        if not isinstance(item, Selectable):
            raise TypeError('expected Selectable, got %s'
                            % type(item).__name__)
        return item

    @property
    def total_count(self):
        return len(self.__items)

    def get(self, uid, default=None):
        """Returns item by uid.
        """
        return self.__index.get(uid, default)

    def __contains__(self, item):
        if isinstance(item, Selectable):
            return self.__index.get(item.uid) is item
        return item in self.__index

    def __iter__(self):
        return iter(list(self.__items))

    def __len__(self):
        return len(self.__items)

    def __getitem__(self, i):
        return self.__items[i]

    def __setitem__(self, i, item):
        self.__check(item)
        if i < 0:
            i = len(self.__items) + i
        if self.__items[i] is item:
            return
        if item.uid in self.__index:
            raise ValueError('%r is in list already' % (item,))
        del self[i]
        self.insert(i, item)

    def __delitem__(self, i):
        if isinstance(i, slice):
            for item in self.__items[i]:
                self.remove(item)
            return
        if i < 0:
            i = len(self.__items) + i
        self.__delete(i)

    def __delete(self, i, **options):
        item = self.__items.pop(i)
        del self.__index[item.uid]
        log.debug('removed %s at %d', item, i)
        wizard.w_item_removed(self, item, i, **options)

    def insert(self, i, item, **options):
        self.__check(item)
        if item.uid in self.__index:
            return
        if i < 0:
            i = max(0, len(self.__items) + i)
        i = min(i, len(self.__items))
        self.__items.insert(i, item)
        self.__index[item.uid] = item
        log.debug('added %s at %d', item, i)
        wizard.w_item_added(self, item, i, **options)

    def add(self, item, **options):
        self.insert(len(self.__items), item, **options)

    def remove(self, item, **options):
        if item not in self:
            raise ValueError('%r is not in list' % (item,))
        self.__delete(self.__items.index(item), **options)

    def reverse(self, **options):
        """Reverses order of items in place. Membership does not change,
        so selection is kept and only w_items_moved is reported.
        """
        self.__items.reverse()
        log.debug('reversed %d items', len(self.__items))
        wizard.w_items_moved(self, **options)

    def reset(self, items=(), **options):
        """Replaces all items.

        Args:
            items: New items.
            **options: Passed to reset subscribers.

        Returns:
            list: previous items
        """
        previous = self.__items
        self.__fill(items)
        log.debug('reset %d -> %d items', len(previous), len(self.__items))
        wizard.w_items_reset(self, list(previous), **options)
        return previous
