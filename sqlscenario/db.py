"""
An abstract interface to the test databases (PostgreSQL or MySQL).
Depending on the configuration, it uses either
sqlscenario.db_pgsql or sqlscenario.db_mysql.
"""

import sqlscenario.config as sqlscenario_config


def _backend():
    db_type = sqlscenario_config.db_type_get()

    if db_type == "pgsql":
        import sqlscenario.db_pgsql as backend
    elif db_type == "mysql":
        import sqlscenario.db_mysql as backend
    else:
        raise ValueError(f"Invalid database type specified: {db_type}, allowed are: mysql, pgsql")
    return backend


class Channel:
    """
    A single database connection, used to run statements one at a time.
    """

    def __init__(self, conn, backend):
        self.conn = conn
        self.backend = backend

    def execute(self, statement: str):
        """
        Runs one SQL statement. Driver errors are passed to the caller unchanged.
        """
        self.backend.run_statement(self.conn, statement)

    def close(self):
        self.conn.close()


def connect(cfg={}):
    """
    Opens connection to a database, returns DB connection object.
    """

    cfg = sqlscenario_config.config_db_get(cfg)

    return _backend().connect(cfg)


def open_channel(cfg={}) -> Channel:
    """
    Opens a connection to the test database and wraps it in a Channel.
    """
    return Channel(connect(cfg), _backend())
