import psycopg2


def connect(config):

    try:
        # supported parameters: user, password, database, host, port
        conn = psycopg2.connect(**config)
        conn.autocommit = True
    except BaseException as e:
        print(
            f"ERROR: Failed to connect to DB: user={config['user']}, database={config['database']}, host={config['host']}, port={config['port']}: {e}")
        raise
    return conn


def run_statement(conn, statement):
    cursor = conn.cursor()
    try:
        cursor.execute(statement)
    finally:
        cursor.close()
