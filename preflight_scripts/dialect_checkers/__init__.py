"""
Dialect Checkers Package
========================
Built-in privilege and variable checks, registered by database type on import.

Modules:
    - mysql_checker: MySQL (and MariaDB through its trunk) binlog replication rules
    - postgresql_checker: PostgreSQL logical replication rules
"""

from preflight_scripts.dialect_checkers import mysql_checker, postgresql_checker

__all__ = [
    'mysql_checker',
    'postgresql_checker',
]
