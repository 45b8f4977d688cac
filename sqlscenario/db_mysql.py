import mysql.connector


def connect(config):
    try:
        # supported parameters: user, password, database, host, port
        cnx = mysql.connector.connect(**config)
        cnx.autocommit = True
    except BaseException as e:
        print(f"ERROR: Failed to connect to DB: user={config['user']}, database={config['database']}, host={config['host']}, port={config['port']}: {e}")
        raise
    return cnx


def run_statement(cnx, statement):
    cursor = cnx.cursor()
    try:
        cursor.execute(statement)
        # unread result sets would make the next statement fail
        if cursor.with_rows:
            cursor.fetchall()
    finally:
        cursor.close()
