from select_tools import wizard
from unittest.mock import Mock
import pytest
import gc
import logging
import weakref


class SomeClass(object):
    def __init__(self):
        self.mock = Mock()

    def method(self, *args, **kwargs):
        self.mock(*args, **kwargs)


class Broken(object):
    def method(self, *args, **kwargs):
        raise RuntimeError('broken handler')


def test_subscribe():
    sub = SomeClass()
    wizard.subscribe('method', sub)
    wizard.method()
    sub.mock.assert_called_with()


def test_notify():
    sub = SomeClass()
    wizard.subscribe('method', sub)
    wizard.notify('method', 1, key='value')
    sub.mock.assert_called_with(1, key='value')


def test_unsubscribe():
    sub = SomeClass()
    wizard.subscribe('method', sub)
    wizard.unsubscribe('method', sub)
    wizard.method()
    assert sub.mock.called == False


def test_unsubscribe_all():
    sub = SomeClass()
    wizard.subscribe('method', sub)
    wizard.unsubscribe(sub)
    wizard.method()
    assert sub.mock.called == False


def test_subscribe_method():
    sub = SomeClass()
    wizard.subscribe('othermethod', sub.method)
    wizard.othermethod()
    sub.mock.assert_called_with()


def test_subscribe_colon_name():
    sub = SomeClass()
    wizard.subscribe('select:one', sub.method)
    wizard.notify('select:one', 1)
    sub.mock.assert_called_once_with(1)


def test_subscribe_method_multi():
    sub = SomeClass()
    wizard.subscribe('othermethod1', sub.method)
    wizard.subscribe('othermethod2', sub.method)
    wizard.othermethod1()
    sub.mock.assert_called_with()
    sub.mock.reset_mock()
    wizard.othermethod2()
    sub.mock.assert_called_with()


def test_unsubscribe_method():
    sub = SomeClass()
    wizard.subscribe('othermethod', sub.method)
    wizard.unsubscribe('othermethod', sub.method)
    wizard.othermethod()
    assert sub.mock.called == False


def test_unsubscribe_all_method_self():
    sub = SomeClass()
    wizard.subscribe('othermethod1', sub.method)
    wizard.subscribe('othermethod2', sub.method)
    wizard.unsubscribe(sub)
    wizard.othermethod1()
    wizard.othermethod2()
    assert sub.mock.called == False


def test_parameters():
    sub = SomeClass()
    wizard.subscribe('method', sub)
    wizard.method(1, 2, 3, test='wow')
    sub.mock.assert_called_with(1, 2, 3, test='wow')


def test_condition():
    sub = SomeClass()
    wizard.subscribe('method', sub, 'red')
    wizard.method(1, 2, 3, test='wow')
    wizard.method(1, 2, 3, 'blue', test='wow')
    wizard.method(1, 2, 3, 'red', test='wow')
    sub.mock.assert_called_once_with(1, 2, 3, 'red', test='wow')


def test_condition_object():
    sub = SomeClass()
    target = SomeClass()
    other = SomeClass()
    wizard.subscribe(sub, target)
    wizard.method(other)
    wizard.method(1, target)
    sub.mock.assert_called_once_with(1, target)


def test_condition_unsubscribe():
    sub = SomeClass()
    wizard.subscribe('method', sub, 'red')
    wizard.unsubscribe('method', sub, 'red')
    wizard.method(1, 2, 3, 'red', test='wow')
    assert sub.mock.called == False


def test_condition_method():
    sub = SomeClass()
    wizard.subscribe('othermethod', sub.method, 'red')
    wizard.othermethod(1, 2, 3, test='wow')
    wizard.othermethod(1, 2, 3, 'blue', test='wow')
    wizard.othermethod(1, 2, 3, 'red', test='wow')
    sub.mock.assert_called_once_with(1, 2, 3, 'red', test='wow')


def test_condition_method_unsubscribe():
    sub = SomeClass()
    wizard.subscribe('othermethod', sub.method, 'red')
    wizard.unsubscribe('othermethod', sub.method, 'red')
    wizard.othermethod('red')
    assert sub.mock.called == False


def test_condition_method_unsubscribe_all_self():
    sub = SomeClass()
    wizard.subscribe('othermethod', sub.method, 'red')
    wizard.subscribe('othermethod', sub.method, 'blue')
    wizard.unsubscribe(sub)
    wizard.othermethod('red')
    wizard.othermethod('blue')
    assert sub.mock.called == False


def test_condition_twice_called_once():
    sub = SomeClass()
    first = SomeClass()
    second = SomeClass()
    wizard.subscribe('method', sub.method, first)
    wizard.subscribe('method', sub.method, second)
    wizard.method(first, second)
    sub.mock.assert_called_once_with(first, second)


def test_condition_replace_method():
    sub = SomeClass()
    wizard.subscribe('othermethod', sub.method, 'red')
    wizard.othermethod('red')
    wizard.othermethod(1, 2, 3, 'red', test='wow')
    wizard.othermethod('red', 1, 2, 3, test='wow')
    sub.mock.assert_any_call('red')
    sub.mock.assert_any_call(1, 2, 3, 'red', test='wow')
    sub.mock.assert_any_call('red', 1, 2, 3, test='wow')


def test_subscription_required_item():
    sub = SomeClass()
    with pytest.raises(ValueError):
        wizard.subscribe(None, sub)


def test_gc_subscriber():
    sub = SomeClass()
    target = SomeClass()
    wizard.subscribe(sub, target)
    assert wizard.subscribers('method', target) == [sub]
    ref = weakref.ref(sub)
    del sub
    gc.collect()
    assert ref() is None
    assert wizard.subscribers('method', target) == []


def test_handler_error(caplog):
    sub = Broken()
    wizard.subscribe('method', sub)
    with caplog.at_level(logging.ERROR, logger='select_tools._wizard'):
        with pytest.raises(RuntimeError):
            wizard.method()
    assert "Error in handler for 'method'" in caplog.text


def test_unhashable():
    sub = SomeClass()
    wizard.subscribe(sub, 'method')
    wizard.method({})
