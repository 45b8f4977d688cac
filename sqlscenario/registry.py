"""
Registration of tests and groups of tests with pytest.

pytest collects test_* functions and Test* classes from test modules, so a
registered test becomes a function in the namespace of the module calling the
helper, and a group becomes a class whose setup_class/teardown_class run the
group's hooks. Tests and groups registered while a group body runs end up
inside that group's class.
"""

import re
import sys
from contextlib import contextmanager

import pytest

_PACKAGE = __name__.split('.')[0]

# Open groups (classes) and explicit namespaces (dicts), innermost last.
_targets = []


def _is_internal(frame) -> bool:
    name = frame.f_globals.get('__name__') or ''
    return name == _PACKAGE or name.startswith(_PACKAGE + '.')


def _caller_globals() -> dict:
    '''Returns the globals of the first calling frame outside this package.'''
    frame = sys._getframe(1)
    while frame is not None and _is_internal(frame):
        frame = frame.f_back
    if frame is None:
        raise RuntimeError("Unable to find the module registering the scenario")
    return frame.f_globals


def caller_path() -> str:
    return _caller_globals().get('__file__')


def _current_target():
    if _targets:
        return _targets[-1]
    return _caller_globals()


def _open_group():
    for target in reversed(_targets):
        if isinstance(target, type):
            return target
    return None


@contextmanager
def collect_into(namespace: dict):
    '''Registers tests and groups created within the block into namespace.'''
    _targets.append(namespace)
    try:
        yield namespace
    finally:
        _targets.pop()


def _slug(name: str) -> str:
    return re.sub(r'[^0-9A-Za-z_]+', '_', name).strip('_').lower() or 'scenario'


def _class_name(name: str) -> str:
    words = re.findall(r'[0-9A-Za-z]+', name)
    return 'Test' + ''.join(w[0].upper() + w[1:] for w in words)


def _module_name(target) -> str:
    if isinstance(target, dict):
        return target.get('__name__', __name__)
    return target.__module__


def _attach(target, base: str, obj):
    existing = target if isinstance(target, dict) else vars(target)

    attr = base
    n = 2
    while attr in existing:
        attr = f"{base}_{n}"
        n += 1

    obj.__name__ = attr
    obj.__module__ = _module_name(target)
    if isinstance(target, dict):
        obj.__qualname__ = attr
        target[attr] = obj
    else:
        obj.__qualname__ = f"{target.__qualname__}.{attr}"
        setattr(target, attr, obj)
    return obj


def _setup_class(cls):
    for hook in cls.__dict__['_before_all']:
        hook()


def _teardown_class(cls):
    for hook in cls.__dict__['_after_all']:
        hook()


class TestRegistrar:
    '''Registers a single test, e.g. register_test("name", body).'''

    __test__ = False

    def __init__(self, marks=()):
        self.marks = tuple(marks)

    def __call__(self, name: str, body):
        target = _current_target()

        if isinstance(target, type):
            def test(self):
                body()
        else:
            def test():
                body()

        test.__doc__ = name
        for mark in self.marks:
            test = mark(test)

        return _attach(target, 'test_' + _slug(name), test)


class GroupRegistrar:
    '''Registers a group of tests, e.g. register_group("name", body).

    The body is called immediately; tests and groups it registers are nested in
    the group, and hooks it adds with before_all()/after_all() run once before
    and after them.
    '''

    def __init__(self, marks=()):
        self.marks = tuple(marks)

    def __call__(self, name: str, body):
        target = _current_target()

        cls = type(_class_name(name), (), {
            '__doc__': name,
            '__module__': _module_name(target),
            '_before_all': [],
            '_after_all': [],
            'setup_class': classmethod(_setup_class),
            'teardown_class': classmethod(_teardown_class),
        })

        _targets.append(cls)
        try:
            body()
        finally:
            _targets.pop()

        for mark in self.marks:
            cls = mark(cls)

        return _attach(target, cls.__name__, cls)

    @staticmethod
    def before_all(fn):
        _hooks('_before_all').append(fn)

    @staticmethod
    def after_all(fn):
        _hooks('_after_all').append(fn)


def _hooks(kind: str) -> list:
    group = _open_group()
    if group is None:
        raise RuntimeError(f"{kind.lstrip('_')}() can only be used inside a group")
    return group.__dict__[kind]


register_test = TestRegistrar()
register_test.only = TestRegistrar([pytest.mark.only])
register_test.skip = TestRegistrar([pytest.mark.skip(reason="skipped scenario")])
register_test.failing = TestRegistrar([pytest.mark.xfail(strict=True, reason="scenario expected to fail")])

register_group = GroupRegistrar()
register_group.only = GroupRegistrar([pytest.mark.only])
register_group.skip = GroupRegistrar([pytest.mark.skip(reason="skipped scenario")])
