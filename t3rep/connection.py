"""
SQL Server connections.

A system's connection string is a list of key=value pairs separated by ';':

    server=db1;port=1433;database=EVENTS;user=report;password=secret

Without user and password, Windows Authentication is used.
"""

import pymssql

from t3rep.errors import DatabaseConnectionError


KEY_ALIASES = {
    'server': 'server',
    'host': 'server',
    'data source': 'server',
    'port': 'port',
    'database': 'database',
    'db': 'database',
    'initial catalog': 'database',
    'user': 'user',
    'uid': 'user',
    'username': 'user',
    'user id': 'user',
    'password': 'password',
    'pwd': 'password',
    'timeout': 'timeout',
    'login_timeout': 'login_timeout',
    'charset': 'charset',
    'appname': 'appname',
    'tds_version': 'tds_version',
}

INT_KEYS = ('port', 'timeout', 'login_timeout')


def parse_dsn(dsn):
    """
    Parse a connection string into pymssql.connect() keyword arguments.

    Args:
        dsn: Connection string

    Returns:
        dict: Connection parameters

    Raises:
        DatabaseConnectionError: If the string is malformed
    """
    params = {}
    for part in dsn.split(';'):
        part = part.strip()
        if not part:
            continue
        key, sep, value = part.partition('=')
        if not sep:
            raise DatabaseConnectionError(f"invalid connection string element '{part}'")
        name = KEY_ALIASES.get(key.strip().lower())
        if name is None:
            raise DatabaseConnectionError(f"unknown connection string key '{key.strip()}'")
        value = value.strip()
        if name in INT_KEYS:
            try:
                value = int(value)
            except ValueError as e:
                raise DatabaseConnectionError(f"'{key.strip()}' must be an integer") from e
        params[name] = value

    if 'server' not in params:
        raise DatabaseConnectionError('connection string has no server')
    if ('user' in params) != ('password' in params):
        raise DatabaseConnectionError('both user and password are required for SQL Server authentication')
    return params


def create_connection(dsn):
    """
    Create SQL Server connection using pymssql.

    Args:
        dsn: Connection string

    Returns:
        pymssql.Connection: Database connection object

    Raises:
        DatabaseConnectionError: If the connection string is invalid or the connection fails
    """
    params = parse_dsn(dsn)
    try:
        return pymssql.connect(**params)
    except pymssql.Error as e:
        raise DatabaseConnectionError(str(e)) from e
