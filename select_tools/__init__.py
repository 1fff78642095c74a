__VERSION__ = '0.1.0'

from ._wizard import wizard
from ._events import Event, Notifier, NotifierMeta, handler_name
from ._config import settings, configure, load_settings
