"""
Connection Providers Module
===========================
Connection providers hand out live database connections to the checks and
take them back afterwards. The checks never build pools or pick driver
settings; they only borrow.

Classes:
    - ConnectionProvider: Protocol every data source handle implements
    - DBAPIConnectionProvider: Any PEP 249 driver
    - SnowflakeConnectionProvider: Snowflake via snowflake-connector-python

Functions:
    - borrow_connection: Acquire a connection and always release it
"""

import importlib
import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional, Protocol

import snowflake.connector


logger = logging.getLogger(__name__)


class ConnectionProvider(Protocol):
    """Something that can yield a live connection and take it back."""

    def acquire(self) -> Any: ...

    def release(self, connection: Any) -> None: ...


@contextmanager
def borrow_connection(provider: ConnectionProvider) -> Iterator[Any]:
    """
    Acquire a connection from provider, releasing it on every exit path.

    Example:
        >>> with borrow_connection(provider) as conn:
        >>>     cursor = conn.cursor()
    """
    connection = provider.acquire()
    try:
        yield connection
    finally:
        provider.release(connection)


class DBAPIConnectionProvider:
    """
    Connection provider for any PEP 249 (DB-API 2.0) driver.

    Each acquire() opens a new connection through the connect callable;
    release() closes it.
    """

    def __init__(self, connect: Callable[[], Any], name: Optional[str] = None):
        """
        Initialize provider.

        Args:
            connect: Zero-argument callable returning a new connection
            name: Label used in log messages
        """
        self.connect = connect
        self.name = name or getattr(connect, '__name__', 'dbapi')

    @classmethod
    def from_driver(cls, driver: str, **connect_args: Any) -> 'DBAPIConnectionProvider':
        """
        Build a provider from a driver module name.

        Args:
            driver: Importable DB-API module name (e.g. 'pymysql', 'sqlite3')
            **connect_args: Keyword arguments passed to the driver's connect()

        Example:
            >>> provider = DBAPIConnectionProvider.from_driver('sqlite3', database=':memory:')
        """
        module = importlib.import_module(driver)

        def connect() -> Any:
            return module.connect(**connect_args)

        return cls(connect, name=driver)

    def acquire(self) -> Any:
        connection = self.connect()
        logger.debug(f"Connection acquired from {self.name}")
        return connection

    def release(self, connection: Any) -> None:
        connection.close()
        logger.debug(f"Connection released to {self.name}")

    def __repr__(self) -> str:
        return f"DBAPIConnectionProvider(name={self.name!r})"


class SnowflakeConnectionProvider:
    """Connection provider for Snowflake."""

    def __init__(self, connection_config: Dict[str, Any]):
        """
        Initialize provider.

        Args:
            connection_config: Snowflake credentials (user, password, account,
                warehouse, database, schema, role)
        """
        self.connection_config = connection_config

    def acquire(self) -> snowflake.connector.SnowflakeConnection:
        conn = snowflake.connector.connect(
            user=self.connection_config.get('user'),
            password=self.connection_config.get('password'),
            account=self.connection_config.get('account'),
            warehouse=self.connection_config.get('warehouse'),
            database=self.connection_config.get('database'),
            schema=self.connection_config.get('schema'),
            role=self.connection_config.get('role')
        )

        logger.info(f"Snowflake connection established to {self.connection_config.get('account')}")
        return conn

    def release(self, connection: snowflake.connector.SnowflakeConnection) -> None:
        if connection:
            connection.close()
            logger.info("Snowflake connection closed")

    def __repr__(self) -> str:
        return f"SnowflakeConnectionProvider(account={self.connection_config.get('account')!r})"
