from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import mysql.connector

from ..core.constants import DEFAULT_STORE_TIMEOUT_SECONDS
from ..core.exceptions import StoreUnavailable


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    timeout_seconds: int = DEFAULT_STORE_TIMEOUT_SECONDS


class DatabaseConnection:
    """DB connection factory, one shared instance per distinct DBConfig.

    Note: We create short-lived connections per operation; every request
    re-reads the full record set, so there is no pooled state to invalidate.
    """

    _instances: Dict[DBConfig, "DatabaseConnection"] = {}

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if config not in cls._instances:
            cls._instances[config] = DatabaseConnection(config)
        return cls._instances[config]

    def connect(self):
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                connection_timeout=int(self._config.timeout_seconds),
            )
        except mysql.connector.Error as exc:
            raise StoreUnavailable(f"No se pudo conectar con el almacén de registros: {exc}") from exc
