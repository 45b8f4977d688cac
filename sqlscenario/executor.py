"""
Code executing setup and teardown SQL for scenarios.

SQL is given either as literal statements or as names of files located next to
the test module. Before execution every "{KEY}" placeholder is replaced with the
value found in the context map, then the text is split into single statements
that are executed one at a time.
"""

import os
import re
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

import sqlparse
from mysql.connector import Error as MySQLError

from sqlscenario import config as sqlscenario_config
from sqlscenario import db

RAW_INPUT = 'raw input'

_PLACEHOLDER = re.compile(r'\{([A-Za-z0-9_]+)\}')


@dataclass(frozen=True)
class SqlStatementGroup:
    statements: Tuple[str, ...]
    source: str


def _to_list(variable) -> list:
    if isinstance(variable, (list, tuple)):
        return list(variable)
    return [variable]


def substitute(context: Mapping, lines: List[Optional[str]]) -> List[str]:
    """
    Goes through each line and replaces any word surrounded by curly braces with
    the value found in the context; e.g. {TEST_DATABASE_DBNAME} becomes whatever
    context['TEST_DATABASE_DBNAME'] is. Unknown keys (and empty values) leave
    the placeholder unchanged.
    """

    def replace(match):
        value = context.get(match.group(1))
        return str(value) if value else match.group(0)

    return [_PLACEHOLDER.sub(replace, line) if line else '' for line in lines]


def split_sql(text: str) -> List[str]:
    """
    Splits a string containing one or many SQL statements into individual
    statements. Comments and the trailing semicolons are removed.
    """
    normalized = sqlparse.format(text, strip_comments=True)
    statements = []
    for statement in sqlparse.split(normalized):
        statement = statement.strip().rstrip(';').strip()
        if statement:
            statements.append(statement)
    return statements


def full_filename(filename: str, base_path: str) -> str:
    return os.path.abspath(os.path.join(os.path.dirname(base_path), filename.strip()))


def fetch_sql(context: Mapping, filename: str) -> SqlStatementGroup:
    """
    Loads SQL from a file and returns the statements found in it.
    """
    with open(filename, "r", encoding="utf-8") as f:
        contents = f.read()

    contents = substitute(context, [contents])[0]
    return SqlStatementGroup(tuple(split_sql(contents)), filename)


def load_statements(context: Mapping, sources, base_path: str, treat_as_files: bool) -> List[SqlStatementGroup]:
    """
    Builds the list of statement groups to execute, without executing them.

    :param sources: SQL to execute if treat_as_files is false, file names if true
    :param base_path: path of the test module, file names are relative to its directory
    """

    # skip nulls and blanks
    entries = [e for e in _to_list(sources) if e and e.strip()]
    if not entries:
        return []

    if treat_as_files:
        return [fetch_sql(context, full_filename(e, base_path)) for e in entries]

    # with several strings each of them needs to be a complete statement
    joined = ';\n'.join(substitute(context, entries))
    return [SqlStatementGroup(tuple(split_sql(joined)), RAW_INPUT)]


def _annotate(ex: Exception, statement: str, source: str):
    prefix = f'Error executing sql "{statement}" from {source}: '

    if isinstance(ex, MySQLError):
        # the driver formats str(ex) once, in __init__
        if isinstance(ex.msg, str):
            ex.msg = prefix + ex.msg
        ex._full_msg = prefix + str(ex._full_msg)
        ex.args = (ex.errno, ex._full_msg, ex.sqlstate)
        return

    if ex.args and isinstance(ex.args[0], str):
        ex.args = (prefix + ex.args[0],) + ex.args[1:]
    else:
        ex.args = (prefix + str(ex),)


def execute_sql(context: Mapping, sources, base_path: str, treat_as_files: bool):
    """
    Executes the given SQL statements (or files) in the order in which they
    appear. Empty strings and Nones are ignored.

    Execution stops at the first failing statement; its exception is re-raised
    with the statement and its source prepended to the message. The connection
    is always closed.
    """

    groups = load_statements(context, sources, base_path, treat_as_files)

    if sum(len(g.statements) for g in groups) == 0:
        # nothing to do
        return

    debug = sqlscenario_config.debug_enabled()

    channel = db.open_channel()
    statement = None
    source = None
    try:
        for group in groups:
            source = group.source
            for statement in group.statements:
                if debug:
                    print(f"Executing {source}: {statement}")
                channel.execute(statement)
    except Exception as ex:
        _annotate(ex, statement, source)
        raise
    finally:
        channel.close()
