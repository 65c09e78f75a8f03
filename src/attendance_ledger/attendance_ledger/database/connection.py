from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

import mysql.connector

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 10

    @classmethod
    def from_settings(cls, db_config: Mapping) -> "DBConfig":
        """Build from a settings DB_CONFIG dict; missing keys fall back to local defaults."""
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "attendance_ledger")),
            connect_timeout=int(db_config.get("connect_timeout", 10)),
        )


class DatabaseConnection:
    """Process-wide connection factory for the snapshot ledger.

    Connections are short-lived: one per repository call, closed by db_cursor.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        # Một cấu hình mới (ví dụ APP_ENV khác) thay thế instance cũ.
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        cfg = self._config
        log.debug("opening connection to %s@%s:%s/%s", cfg.user, cfg.host, cfg.port, cfg.database)
        return mysql.connector.connect(
            host=cfg.host,
            port=cfg.port,
            user=cfg.user,
            password=cfg.password,
            database=cfg.database,
            connection_timeout=cfg.connect_timeout,
            autocommit=False,
        )
