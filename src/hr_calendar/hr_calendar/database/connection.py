from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connection_timeout: int = 10

    @classmethod
    def from_settings(cls, settings: Mapping) -> "DBConfig":
        """Build from a settings ``DB_CONFIG`` dict (port and timeout optional)."""

        return cls(
            host=str(settings["host"]),
            port=int(settings.get("port", 3306)),
            user=str(settings["user"]),
            password=str(settings["password"]),
            database=str(settings["database"]),
            connection_timeout=int(settings.get("connection_timeout", 10)),
        )


class DatabaseConnection:
    """Process-wide connection factory.

    Hands out a new short-lived connection per repository call, so the
    calendar's concurrent fetches can each run in their own worker thread.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def database(self) -> str:
        return self._config.database

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=self._config.port,
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=self._config.connection_timeout,
        )
