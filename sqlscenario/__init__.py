"""
sqlscenario - pytest tests wrapped with setup and teardown SQL.

    sql_scenario(name, [context,] setup, teardown, body)
    sql_file_scenario(name, [context,] setup_files, teardown_files, body)
    describe_sql_scenario(name, [context,] setup, teardown, group_body)
    describe_sql_file_scenario(name, [context,] setup_files, teardown_files, group_body)

Each helper also has .only and .skip variants; the test helpers have .failing.
"""

from sqlscenario.context import ArgumentShapeError, ContextMap, GroupContext, default_context
from sqlscenario.executor import execute_sql
from sqlscenario.registry import register_group, register_test
from sqlscenario.scenario import build_group_scenario, build_test_scenario

__version__ = "0.1.0"

sql_scenario = build_test_scenario(register_test, None, False)
sql_scenario.only = build_test_scenario(register_test.only, None, False)
sql_scenario.failing = build_test_scenario(register_test.failing, None, False)
sql_scenario.skip = build_test_scenario(register_test.skip, None, False)
sql_file_scenario = build_test_scenario(register_test, None, True)
sql_file_scenario.only = build_test_scenario(register_test.only, None, True)
sql_file_scenario.failing = build_test_scenario(register_test.failing, None, True)
sql_file_scenario.skip = build_test_scenario(register_test.skip, None, True)

describe_sql_scenario = build_group_scenario(register_group, None, False)
describe_sql_scenario.skip = build_group_scenario(register_group.skip, None, False)
describe_sql_scenario.only = build_group_scenario(register_group.only, None, False)
describe_sql_file_scenario = build_group_scenario(register_group, None, True)
describe_sql_file_scenario.skip = build_group_scenario(register_group.skip, None, True)
describe_sql_file_scenario.only = build_group_scenario(register_group.only, None, True)

__all__ = [
    "ArgumentShapeError",
    "ContextMap",
    "GroupContext",
    "default_context",
    "execute_sql",
    "sql_scenario",
    "sql_file_scenario",
    "describe_sql_scenario",
    "describe_sql_file_scenario",
]
