"""Tests for the user repository."""

from unittest.mock import MagicMock

import pytest

from src.usersync.services.database.exceptions import MissingExternalIdError, UserNotFoundError
from src.usersync.services.database.models import UserCreate, UserUpdate
from src.usersync.services.database.users import UserRepository


@pytest.fixture
def mock_db() -> MagicMock:
    """Mock query builder."""
    return MagicMock()


@pytest.fixture
def repository(mock_db: MagicMock) -> UserRepository:
    """Repository backed by the mock query builder."""
    return UserRepository(db=mock_db, table="users")


@pytest.fixture
def new_user() -> UserCreate:
    """Sample record candidate."""
    return UserCreate(clerk_id="u1", email="a@x.com", username="ada", first_name="Ada")


class TestCreateUser:
    """Tests for UserRepository.create_user."""

    def test_inserts_snake_case_columns(
        self, repository: UserRepository, mock_db: MagicMock, new_user: UserCreate
    ) -> None:
        """Test that the candidate is inserted with column names."""
        mock_db.insert_record.return_value = {"id": "db-1", "clerk_id": "u1"}

        record = repository.create_user(new_user)

        assert record == {"id": "db-1", "clerk_id": "u1"}
        mock_db.insert_record.assert_called_once_with(
            "users",
            {
                "clerk_id": "u1",
                "email": "a@x.com",
                "username": "ada",
                "first_name": "Ada",
                "last_name": "",
                "photo": "",
            },
        )

    @pytest.mark.parametrize("clerk_id", ["", "   "])
    def test_rejects_empty_clerk_id(
        self, repository: UserRepository, mock_db: MagicMock, clerk_id: str
    ) -> None:
        """Test that writes without a Clerk ID never reach the database."""
        user = UserCreate(clerk_id=clerk_id, email="a@x.com", username="ada")

        with pytest.raises(MissingExternalIdError):
            repository.create_user(user)

        mock_db.insert_record.assert_not_called()

    def test_no_returned_row_raises(
        self, repository: UserRepository, mock_db: MagicMock, new_user: UserCreate
    ) -> None:
        """Test that an insert returning nothing is treated as a failure."""
        mock_db.insert_record.return_value = None

        with pytest.raises(Exception, match="returned no record"):
            repository.create_user(new_user)


class TestUpdateUser:
    """Tests for UserRepository.update_user."""

    def test_updates_by_clerk_id(self, repository: UserRepository, mock_db: MagicMock) -> None:
        """Test that all four mutable fields are written, keyed by Clerk ID."""
        mock_db.update_by_filter.return_value = [{"id": "db-1", "first_name": ""}]

        record = repository.update_user("u1", UserUpdate(username="ada"))

        assert record == {"id": "db-1", "first_name": ""}
        mock_db.update_by_filter.assert_called_once_with(
            "users",
            {"clerk_id": "u1"},
            {"username": "ada", "first_name": "", "last_name": "", "photo": ""},
        )

    def test_not_found_raises(self, repository: UserRepository, mock_db: MagicMock) -> None:
        """Test that an update matching no rows raises UserNotFoundError."""
        mock_db.update_by_filter.return_value = []

        with pytest.raises(UserNotFoundError) as exc_info:
            repository.update_user("u404", UserUpdate(username="ada"))

        assert exc_info.value.clerk_id == "u404"

    def test_rejects_empty_clerk_id(self, repository: UserRepository, mock_db: MagicMock) -> None:
        """Test that updates without a Clerk ID are rejected."""
        with pytest.raises(MissingExternalIdError):
            repository.update_user("", UserUpdate(username="ada"))

        mock_db.update_by_filter.assert_not_called()


class TestDeleteUser:
    """Tests for UserRepository.delete_user."""

    def test_returns_deleted_record(self, repository: UserRepository, mock_db: MagicMock) -> None:
        """Test that the deleted row is returned."""
        mock_db.delete_by_filter.return_value = [{"id": "db-1", "clerk_id": "u1"}]

        assert repository.delete_user("u1") == {"id": "db-1", "clerk_id": "u1"}
        mock_db.delete_by_filter.assert_called_once_with("users", {"clerk_id": "u1"})

    def test_not_found_raises(self, repository: UserRepository, mock_db: MagicMock) -> None:
        """Test that deleting an unknown user raises UserNotFoundError."""
        mock_db.delete_by_filter.return_value = []

        with pytest.raises(UserNotFoundError):
            repository.delete_user("u404")

    def test_rejects_empty_clerk_id(self, repository: UserRepository, mock_db: MagicMock) -> None:
        """Test that deletes without a Clerk ID are rejected."""
        with pytest.raises(MissingExternalIdError):
            repository.delete_user("")

        mock_db.delete_by_filter.assert_not_called()


def test_replayed_update_writes_same_state(repository: UserRepository, mock_db: MagicMock) -> None:
    """Test that a full-replace update is idempotent at the repository boundary."""
    mock_db.update_by_filter.return_value = [{"id": "db-1"}]
    fields = UserUpdate(username="ada", first_name="Ada")

    repository.update_user("u1", fields)
    repository.update_user("u1", fields)

    first, second = mock_db.update_by_filter.call_args_list
    assert first == second
