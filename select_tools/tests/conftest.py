import pytest

from select_tools import wizard, settings, configure


class Listener:
    """Records notifications which mention any of targets, in order.
    Internal and item list notifications are skipped.
    """

    def __init__(self, *targets):
        self.events = []
        for target in targets:
            wizard.subscribe(self, target)

    def __getattr__(self, name):
        if name.startswith('_') or name.startswith('w_'):
            raise AttributeError(name)

        def record(*args, **kwargs):
            self.events.append((name, args, kwargs))

        return record

    @property
    def names(self):
        return [name for name, args, kwargs in self.events]

    def of(self, name):
        return [(args, kwargs) for n, args, kwargs in self.events
                if n == name]

    def clear(self):
        del self.events[:]


@pytest.fixture
def listen():
    return Listener


@pytest.fixture(autouse=True)
def check_invariants():
    old = dict(settings)
    configure(check_invariants=True)
    yield
    configure(**old)
