"""Tests for shared/repository.py."""

import pytest
from unittest.mock import MagicMock

from postgrest.exceptions import APIError

from shared.exceptions import ConflictError, StoreError
from shared.repository import BaseRepository


def api_error(code: str, message: str = "failed") -> APIError:
    return APIError({"message": message, "code": code, "hint": None, "details": "detail"})


class TestBaseRepository:
    def test_init_stores_db_client(self):
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    def test_execute_returns_result(self):
        repo = BaseRepository(MagicMock())
        query = MagicMock()
        query.execute.return_value.data = [{"id": "1"}]

        assert repo._execute(query).data == [{"id": "1"}]

    def test_unique_violation_becomes_conflict(self):
        repo = BaseRepository(MagicMock())
        query = MagicMock()
        query.execute.side_effect = api_error("23505", "duplicate key value")

        with pytest.raises(ConflictError) as exc_info:
            repo._execute(query)
        assert exc_info.value.code == "DUPLICATE"

    def test_other_errors_become_store_errors(self):
        repo = BaseRepository(MagicMock())
        query = MagicMock()
        query.execute.side_effect = api_error("42P01", 'relation "projects" does not exist')

        with pytest.raises(StoreError) as exc_info:
            repo._execute(query)
        assert "does not exist" in exc_info.value.message
        assert exc_info.value.details["store_code"] == "42P01"
