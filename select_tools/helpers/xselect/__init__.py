from ._item import Selectable
from ._elements import ItemList
from ._reconcile import SelectionHost, HostClosed
from ._single import SingleSelect
from ._multi import MultiSelect
from ._factory import single_select, multi_select
