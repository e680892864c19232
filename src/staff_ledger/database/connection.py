from __future__ import annotations

import logging
from dataclasses import dataclass

import mysql.connector
from mysql.connector.constants import ClientFlag

from ..core.exceptions import DatabaseUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "staff_ledger")),
        )


class DatabaseConnection:
    """DB connection factory, constructed once in the container and injected.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    """

    def __init__(self, config: DBConfig):
        self._config = config

    def connect(self):
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                # rowcount reports matched rows, so an UPDATE that changes nothing still counts
                client_flags=[ClientFlag.FOUND_ROWS],
            )
        except mysql.connector.Error as e:
            logger.error(
                "Database unavailable (%s@%s:%s/%s): %s",
                self._config.user,
                self._config.host,
                self._config.port,
                self._config.database,
                e,
            )
            raise DatabaseUnavailableError("Database not available") from e
