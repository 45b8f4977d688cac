"""
Builders for the scenario helpers: tests and groups of tests wrapped with
setup and teardown SQL.
"""

from contextlib import contextmanager
from typing import Mapping, Optional

from sqlscenario.context import resolve_group_args, resolve_test_args
from sqlscenario.executor import execute_sql
from sqlscenario import registry


def _family(prefix: str, treat_as_files: bool) -> str:
    return f"{prefix}sql_{'file_' if treat_as_files else ''}scenario"


@contextmanager
def scenario_sql(context: Mapping, setup, teardown, base_path: str, treat_as_files: bool):
    '''Runs the setup SQL, then the teardown SQL once the block is left.

    Setup is executed outside the try block, so when it fails the teardown is
    not attempted. A teardown failure replaces any error raised by the block.
    '''
    execute_sql(context, setup, base_path, treat_as_files)
    try:
        yield context
    finally:
        execute_sql(context, teardown, base_path, treat_as_files)


def build_test_scenario(register, test_path: Optional[str], treat_as_files: bool):
    '''Creates a helper registering a test that executes SQL statements (or
    files) before and after it runs.

    Args:
        register: the registration primitive, called as register(name, run)
        test_path: file names are resolved relative to this path, when None
                   the file of the calling module is used
        treat_as_files: whether setup and teardown are file names or SQL
    '''
    family = _family('', treat_as_files)

    def scenario(*args):
        params = resolve_test_args(family, args)
        base_path = test_path or registry.caller_path()

        def run():
            with scenario_sql(params.context, params.setup, params.teardown, base_path, treat_as_files):
                return params.body()

        return register(params.name, run)

    scenario.__name__ = family
    return scenario


def build_group_scenario(register_group, test_path: Optional[str], treat_as_files: bool):
    '''Creates a helper registering a group of tests. The setup SQL is executed
    once before the first test of the group and the teardown SQL once after
    the last one.

    The group body is called right away with the group's context map, so the
    tests it registers can use it.
    '''
    family = _family('describe_', treat_as_files)

    def scenario(*args):
        params = resolve_group_args(family, args)
        base_path = test_path or registry.caller_path()

        def block():
            register_group.before_all(
                lambda: execute_sql(params.context, params.setup, base_path, treat_as_files))
            register_group.after_all(
                lambda: execute_sql(params.context, params.teardown, base_path, treat_as_files))
            params.body(params.context)

        return register_group(params.name, block)

    scenario.__name__ = family
    return scenario
