"""
Key-value store for the bakery backend.

Every collection is read and written as a whole JSON document. Reads never
raise: a missing key, a corrupt payload or a backend hiccup returns the
caller's fallback. Writes either land or raise StorageError.

Keys pattern: {prefix}_{key}  (e.g. lv_products)
"""

import json
import logging
import threading
from contextlib import contextmanager
from datetime import datetime, date
from decimal import Decimal
from typing import Any, Dict, Iterator, Mapping, Optional

import redis
from redis.exceptions import RedisError
from pydantic import BaseModel, TypeAdapter, ValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from bakery.database import create_store_engine, init_db
from bakery.exceptions import StorageError

logger = logging.getLogger(__name__)


class MemoryBackend:
    """Volatile dict backend. Used by tests and throwaway demos."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = threading.RLock()

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write_many(self, items: Mapping[str, str]) -> None:
        self._data.update(items)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str):
        return [k for k in self._data if k.startswith(prefix)]

    @contextmanager
    def lock(self) -> Iterator[None]:
        with self._lock:
            yield


class SQLBackend:
    """One row per key in the kv_entry table (SQLite file by default)."""

    def __init__(self, database_uri: str, echo: bool = False):
        self.engine = create_store_engine(database_uri, echo=echo)
        self._session_factory = init_db(self.engine)
        self._lock = threading.RLock()

    def read(self, key: str) -> Optional[str]:
        from bakery.models.kv_entry import KVEntry

        with self._session_factory() as session:
            row = session.get(KVEntry, key)
            return row.value if row else None

    def write_many(self, items: Mapping[str, str]) -> None:
        from bakery.models.kv_entry import KVEntry

        with self._session_factory() as session:
            try:
                for key, value in items.items():
                    session.merge(KVEntry(key=key, value=value))
                session.commit()
            except Exception:
                session.rollback()
                raise

    def delete(self, key: str) -> None:
        from bakery.models.kv_entry import KVEntry

        with self._session_factory() as session:
            session.execute(delete(KVEntry).where(KVEntry.key == key))
            session.commit()

    def keys(self, prefix: str):
        from bakery.models.kv_entry import KVEntry

        with self._session_factory() as session:
            rows = session.execute(select(KVEntry.key).where(KVEntry.key.startswith(prefix, autoescape=True)))
            return [row[0] for row in rows]

    @contextmanager
    def lock(self) -> Iterator[None]:
        with self._lock:
            yield


class RedisBackend:
    """Redis strings. Transactions are serialized with a Redis lock so several processes can share one store."""

    def __init__(self, client, lock_name: str = 'lv:lock', lock_timeout: int = 10):
        self.client = client
        self._lock_name = lock_name
        self._lock_timeout = lock_timeout
        # The Redis lock is not re-entrant; nested transactions reuse the held lock
        self._local = threading.local()

    @classmethod
    def from_url(cls, redis_url: str, **kwargs) -> 'RedisBackend':
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=3,
            socket_timeout=3,
            retry_on_timeout=True,
            health_check_interval=30
        )
        return cls(client, **kwargs)

    def read(self, key: str) -> Optional[str]:
        return self.client.get(key)

    def write_many(self, items: Mapping[str, str]) -> None:
        pipeline = self.client.pipeline(transaction=True)
        for key, value in items.items():
            pipeline.set(key, value)
        pipeline.execute()

    def delete(self, key: str) -> None:
        self.client.delete(key)

    def keys(self, prefix: str):
        return list(self.client.scan_iter(match=f"{prefix}*", count=100))

    @contextmanager
    def lock(self) -> Iterator[None]:
        depth = getattr(self._local, 'depth', 0)
        if depth:
            self._local.depth = depth + 1
            try:
                yield
            finally:
                self._local.depth -= 1
            return

        lock = self.client.lock(self._lock_name, timeout=self._lock_timeout, blocking_timeout=self._lock_timeout)
        try:
            acquired = lock.acquire()
        except RedisError as e:
            logger.error(f"[STORE] ✗ Lock error for {self._lock_name}: {e}")
            raise StorageError('Não foi possível bloquear a loja')
        if not acquired:
            logger.error(f"[STORE] ✗ Lock {self._lock_name} not acquired within {self._lock_timeout}s")
            raise StorageError('Não foi possível bloquear a loja')

        self._local.depth = 1
        try:
            yield
        finally:
            self._local.depth = 0
            try:
                lock.release()
            except RedisError as e:
                # Lock expired mid-transaction; whatever was written stays written
                logger.warning(f"[STORE] Lock {self._lock_name} lost before release: {e}")


class KeyValueStore:
    """
    Typed get/set over a key-value backend with JSON encoding.

    Backends must provide read, write_many, delete, keys and lock.
    """

    def __init__(self, backend, prefix: str = 'lv'):
        self.backend = backend
        self._prefix = prefix

    def _build_key(self, key: str) -> str:
        return f"{self._prefix}_{key}"

    def _serialize(self, value: Any) -> str:
        """Serialize Python object (pydantic models included) to JSON string."""
        def default_handler(obj: Any) -> Any:
            if isinstance(obj, BaseModel):
                return obj.model_dump(mode='json', by_alias=True)
            elif isinstance(obj, (datetime, date)):
                return obj.isoformat()
            elif isinstance(obj, Decimal):
                return str(obj)
            raise TypeError(f"Object of type {type(obj)} is not JSON serializable")
        return json.dumps(value, default=default_handler, ensure_ascii=False)

    def get(self, key: str, fallback: Any = None, model: Any = None) -> Any:
        """
        Read a value, or ``fallback`` when it is missing or unreadable.

        Args:
            key: Logical key (without prefix)
            fallback: Returned on any read problem
            model: Optional type (e.g. ``List[Product]``) the payload is validated into
        """
        store_key = self._build_key(key)
        try:
            raw = self.backend.read(store_key)
        except (RedisError, SQLAlchemyError) as e:
            logger.warning(f"[STORE] ✗ Read error for {store_key}: {e}")
            return fallback

        if raw is None or raw == '':
            return fallback

        try:
            value = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"[STORE] ✗ Corrupt payload for {store_key}: {e}")
            return fallback

        if model is None:
            return value

        try:
            return TypeAdapter(model).validate_python(value)
        except ValidationError as e:
            logger.warning(f"[STORE] ✗ Invalid shape for {store_key}: {e.error_count()} error(s)")
            return fallback

    def set(self, key: str, value: Any) -> None:
        """Write the whole value under ``key``."""
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, Any]) -> None:
        """Write several keys in a single backend transaction."""
        try:
            payload = {self._build_key(key): self._serialize(value) for key, value in values.items()}
        except TypeError as e:
            raise StorageError(f"Valor não serializável: {e}")

        try:
            self.backend.write_many(payload)
        except (RedisError, SQLAlchemyError) as e:
            logger.error(f"[STORE] ✗ Write error for {list(payload)}: {e}")
            raise StorageError()

    def remove(self, key: str) -> None:
        """Delete ``key``; absent keys are ignored."""
        store_key = self._build_key(key)
        try:
            self.backend.delete(store_key)
        except (RedisError, SQLAlchemyError) as e:
            logger.error(f"[STORE] ✗ Delete error for {store_key}: {e}")
            raise StorageError()

    def clear(self) -> int:
        """Delete every key under this store's prefix."""
        prefix = f"{self._prefix}_"
        try:
            keys = self.backend.keys(prefix)
            for key in keys:
                self.backend.delete(key)
        except (RedisError, SQLAlchemyError) as e:
            logger.error(f"[STORE] ✗ Clear error: {e}")
            raise StorageError()
        if keys:
            logger.info(f"[STORE] CLEAR: {prefix}* ({len(keys)} keys)")
        return len(keys)

    @contextmanager
    def transaction(self) -> Iterator['KeyValueStore']:
        """Hold the store lock across a read-snapshot, compute, write-back sequence."""
        with self.backend.lock():
            yield self


def build_store(config: Mapping[str, Any]) -> KeyValueStore:
    """Create the store described by the app config (STORE_BACKEND and friends)."""
    backend_name = config.get('STORE_BACKEND', 'sql')
    prefix = config.get('STORE_KEY_PREFIX', 'lv')

    if backend_name == 'memory':
        backend = MemoryBackend()
    elif backend_name == 'sql':
        backend = SQLBackend(
            config.get('STORE_DATABASE_URL', 'sqlite:///bakery.db'),
            echo=config.get('STORE_SQL_ECHO', False)
        )
    elif backend_name == 'redis':
        backend = RedisBackend.from_url(
            config.get('REDIS_URL', 'redis://localhost:6379/0'),
            lock_name=f"{prefix}:lock",
            lock_timeout=config.get('STORE_LOCK_TIMEOUT', 10)
        )
    else:
        raise ValueError(f"Unknown STORE_BACKEND: {backend_name}")

    logger.info(f"[STORE] ✓ Using {backend_name} backend (prefix={prefix})")
    return KeyValueStore(backend, prefix=prefix)
