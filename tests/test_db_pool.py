import os
import unittest
from contextlib import contextmanager
from unittest.mock import MagicMock, patch
import importlib

import psycopg

from _test_utils import add_src_to_path

add_src_to_path()

db_pool = importlib.import_module("mint_indexer.db.db_pool")
errors = importlib.import_module("mint_indexer.errors")

DB_URL = "postgres://example"


class FakePool:
    instances = []

    def __init__(self, url, **kwargs):
        self.url = url
        self.kwargs = kwargs
        self.conn = MagicMock()
        self.closed = False
        FakePool.instances.append(self)

    @contextmanager
    def connection(self):
        yield self.conn

    def close(self):
        self.closed = True


class TimeoutPool(FakePool):
    @contextmanager
    def connection(self):
        raise db_pool.PoolTimeout("no connection")
        yield  # pragma: no cover


class TestDbPool(unittest.TestCase):
    def setUp(self) -> None:
        self._saved = db_pool._DB_POOL
        db_pool._DB_POOL = None
        FakePool.instances = []

    def tearDown(self) -> None:
        db_pool._DB_POOL = self._saved

    def test_pool_sizes_and_timeout(self) -> None:
        with patch.dict(
            os.environ,
            {"DB_POOL_MIN": "5", "DB_POOL_MAX": "1", "DB_POOL_TIMEOUT": "0.01"},
            clear=True,
        ):
            self.assertEqual(db_pool._db_pool_sizes(), (5, 5))
            self.assertEqual(db_pool._db_pool_timeout(), 0.1)

    def test_pool_disabled(self) -> None:
        with patch.dict(os.environ, {"DB_POOL_ENABLE": "0"}, clear=True):
            self.assertIsNone(db_pool.get_db_pool(DB_URL))
        self.assertIsNone(db_pool.get_db_pool(None))

    def test_pool_built_once(self) -> None:
        with patch.dict(os.environ, {}, clear=True), \
             patch.object(db_pool, "ConnectionPool", FakePool):
            pool = db_pool.get_db_pool(DB_URL)
            self.assertIs(db_pool.get_db_pool(DB_URL), pool)
        self.assertEqual(len(FakePool.instances), 1)
        self.assertEqual(pool.url, DB_URL)
        self.assertEqual(pool.kwargs["min_size"], 2)
        self.assertEqual(pool.kwargs["max_size"], 8)
        self.assertEqual(pool.kwargs["timeout"], 3.0)

    def test_pool_init_failure_falls_back(self) -> None:
        with patch.dict(os.environ, {}, clear=True), \
             patch.object(db_pool, "ConnectionPool", side_effect=RuntimeError("boom")), \
             self.assertLogs(db_pool.logger, level="WARNING"):
            self.assertIsNone(db_pool.get_db_pool(DB_URL))

    def test_close_db_pool(self) -> None:
        pool = FakePool(DB_URL)
        db_pool._DB_POOL = pool
        db_pool.close_db_pool()
        self.assertTrue(pool.closed)
        self.assertIsNone(db_pool._DB_POOL)

    def test_db_connection_uses_pool(self) -> None:
        pool = FakePool(DB_URL)
        with patch.object(db_pool, "get_db_pool", return_value=pool):
            with db_pool.db_connection(DB_URL) as conn:
                self.assertIs(conn, pool.conn)

    def test_db_connection_pool_timeout(self) -> None:
        pool = TimeoutPool(DB_URL)
        with patch.object(db_pool, "get_db_pool", return_value=pool):
            with self.assertRaises(errors.DataUnavailable):
                with db_pool.db_connection(DB_URL):
                    pass

    def test_db_connection_direct(self) -> None:
        conn = MagicMock()
        with patch.object(db_pool, "get_db_pool") as get_pool, \
             patch.object(db_pool.psycopg, "connect", return_value=conn) as connect:
            with db_pool.db_connection(DB_URL, force_direct=True, connect_timeout=5) as got:
                self.assertIs(got, conn)
        get_pool.assert_not_called()
        connect.assert_called_once_with(DB_URL, connect_timeout=5)
        conn.close.assert_called_once()

    def test_db_connection_direct_failure(self) -> None:
        with patch.object(db_pool, "get_db_pool", return_value=None), \
             patch.object(db_pool.psycopg, "connect", side_effect=psycopg.OperationalError("x")):
            with self.assertRaises(errors.DataUnavailable):
                with db_pool.db_connection(DB_URL):
                    pass

    def test_db_connection_requires_url(self) -> None:
        with self.assertRaises(errors.DataUnavailable):
            with db_pool.db_connection(""):
                pass
