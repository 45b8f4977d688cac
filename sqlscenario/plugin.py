"""
pytest plugin shipped with sqlscenario, loaded through the pytest11 entry point.

It registers the "only" marker used by the .only helper variants. When a test
module contains tests marked with it, the other tests of that module are
deselected.
"""

import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "only: run only the marked tests of this module")


def _module_of(item):
    module = item.getparent(pytest.Module)
    return module.nodeid if module is not None else None


def pytest_collection_modifyitems(config, items):
    focused = {_module_of(item) for item in items if item.get_closest_marker("only")}
    if not focused:
        return

    selected = []
    deselected = []
    for item in items:
        if _module_of(item) in focused and not item.get_closest_marker("only"):
            deselected.append(item)
        else:
            selected.append(item)

    if deselected:
        config.hook.pytest_deselected(items=deselected)
        items[:] = selected
