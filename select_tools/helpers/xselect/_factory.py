from ._elements import ItemList
from ._single import SingleSelect
from ._multi import MultiSelect

__all__ = [
    'single_select',
    'multi_select'
    ]


def single_select(*items):
    """Creates single-pick host over new item list.

    Args:
        *items: Initial items. When several of them are selected
            already, only the last one stays selected.

    Returns:
        SingleSelect
    """
    return SingleSelect(ItemList(items))


def multi_select(*items):
    """Creates multi-pick host over new item list.

    Args:
        *items: Initial items. Items selected already are added to
            host's selection without notifications.

    Returns:
        MultiSelect
    """
    return MultiSelect(ItemList(items))
