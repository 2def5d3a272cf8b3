# =============================================================================
# tests/test_user_service.py - UserService Tests
# =============================================================================
# Unit tests for the validation and business rules:
# - Creation validates name, email and age in that order
# - Partial updates only touch present fields and never half-apply
# - Not-found errors stay distinguishable; storage errors gain context
#
# Run with: pytest tests/test_user_service.py -v
# =============================================================================

import pytest

from users_api.app.core.errors import (
    InvalidAgeError,
    InvalidEmailError,
    InvalidNameError,
    StorageError,
    UserNotFoundError,
    UserValidationError,
)
from users_api.app.repositories import InMemoryUserRepository
from users_api.app.schemas.user import User, UserCreate, UserUpdate
from users_api.app.services.user_service import UserService, is_valid_email


class BrokenRepository(InMemoryUserRepository):
    """Repository whose writes fail like a lost database connection."""

    def seed(self, user):
        super().create(user)

    def create(self, user):
        raise StorageError("disk I/O error")

    def update(self, user_id, user):
        raise StorageError("disk I/O error")

    def get_all(self):
        raise StorageError("disk I/O error")


# =============================================================================
# Create
# =============================================================================

class TestCreateUser:
    """Tests for UserService.create_user."""

    def test_valid_user_is_created(self, service, valid_create):
        """Test a valid payload is persisted and returned with an id."""
        user = service.create_user(valid_create)

        assert user.id
        assert user.name == "Juan Pérez"
        assert user.email == "juan@example.com"
        assert user.age == 30
        assert service.get_user_by_id(user.id) == user

    def test_ids_are_unique(self, service, valid_create):
        """Test every creation generates a new id."""
        ids = {service.create_user(valid_create).id for _ in range(50)}
        assert len(ids) == 50

    @pytest.mark.parametrize(
        "payload, expected",
        [
            ({"name": "", "email": "juan@example.com", "age": 30}, InvalidNameError),
            ({"name": "Juan", "email": "email-invalido", "age": 30}, InvalidEmailError),
            ({"name": "Juan", "email": "", "age": 30}, InvalidEmailError),
            ({"name": "Juan", "email": "juan@example.com", "age": 0}, InvalidAgeError),
            ({"name": "Juan", "email": "juan@example.com", "age": -1}, InvalidAgeError),
        ],
    )
    def test_single_violation(self, service, payload, expected):
        """Test each rule rejects its own field."""
        with pytest.raises(expected):
            service.create_user(UserCreate(**payload))

    @pytest.mark.parametrize(
        "payload, expected",
        [
            ({"name": "", "email": "bad", "age": 0}, InvalidNameError),
            ({"name": "", "email": "x@y.com", "age": 0}, InvalidNameError),
            ({"name": "Juan", "email": "bad", "age": 0}, InvalidEmailError),
        ],
    )
    def test_first_violation_wins(self, service, payload, expected):
        """Test name is checked before email, and email before age."""
        with pytest.raises(expected):
            service.create_user(UserCreate(**payload))

    def test_invalid_user_is_not_stored(self, service, memory_repository):
        """Test nothing is written when validation fails."""
        with pytest.raises(UserValidationError):
            service.create_user(UserCreate(name="", email="x@y.com", age=5))
        assert memory_repository.get_all() == []

    def test_storage_failure_gets_context(self, valid_create):
        """Test storage errors are re-raised with the failed operation."""
        service = UserService(BrokenRepository())

        with pytest.raises(StorageError) as exc_info:
            service.create_user(valid_create)

        assert "failed to create user" in str(exc_info.value)
        assert "disk I/O error" in str(exc_info.value)


# =============================================================================
# Read / delete
# =============================================================================

class TestReadAndDelete:
    """Tests for lookups, listing and deletion."""

    def test_unknown_id_is_not_found(self, service):
        """Test an id never returned by create_user is not found."""
        with pytest.raises(UserNotFoundError) as exc_info:
            service.get_user_by_id("does-not-exist")
        assert exc_info.value.user_id == "does-not-exist"

    def test_list_returns_newest_first(self, service):
        """Test listing order follows creation, most recent first."""
        first = service.create_user(UserCreate(name="A", email="a@x.com", age=1))
        second = service.create_user(UserCreate(name="B", email="b@x.com", age=2))

        assert [u.id for u in service.list_users()] == [second.id, first.id]

    def test_list_empty(self, service):
        assert service.list_users() == []

    def test_list_storage_failure(self):
        service = UserService(BrokenRepository())
        with pytest.raises(StorageError, match="failed to list users"):
            service.list_users()

    def test_delete_then_get_is_not_found(self, service, valid_create):
        """Test a deleted user can no longer be fetched."""
        user = service.create_user(valid_create)

        service.delete_user(user.id)

        with pytest.raises(UserNotFoundError):
            service.get_user_by_id(user.id)

    def test_delete_unknown_is_not_found(self, service):
        with pytest.raises(UserNotFoundError):
            service.delete_user("missing")


# =============================================================================
# Update
# =============================================================================

class TestUpdateUser:
    """Tests for partial updates."""

    def test_only_present_fields_change(self, service, valid_create):
        """Test age alone is updated and name/email are kept."""
        user = service.create_user(valid_create)

        updated = service.update_user(user.id, UserUpdate(age=31))

        assert updated.age == 31
        assert updated.name == user.name
        assert updated.email == user.email
        assert service.get_user_by_id(user.id) == updated

    def test_all_fields_change(self, service, valid_create):
        user = service.create_user(valid_create)

        updated = service.update_user(
            user.id, UserUpdate(name="Ana", email="ana@example.com", age=25)
        )

        assert (updated.id, updated.name, updated.email, updated.age) == (
            user.id,
            "Ana",
            "ana@example.com",
            25,
        )

    def test_empty_update_is_noop(self, service, valid_create):
        """Test an update with no fields returns the unchanged record."""
        user = service.create_user(valid_create)

        result = service.update_user(user.id, UserUpdate())

        assert result == user
        assert service.get_user_by_id(user.id) == user

    def test_null_fields_are_absent(self, service, valid_create):
        """Test explicit nulls leave fields untouched."""
        user = service.create_user(valid_create)

        result = service.update_user(
            user.id, UserUpdate.model_validate({"name": None, "email": None, "age": 40})
        )

        assert result.name == user.name
        assert result.age == 40

    @pytest.mark.parametrize("age", [0, -5])
    def test_invalid_age_leaves_record_unchanged(self, service, valid_create, age):
        """Test a non-positive age is rejected and nothing is written."""
        user = service.create_user(valid_create)

        with pytest.raises(InvalidAgeError):
            service.update_user(user.id, UserUpdate(age=age))

        assert service.get_user_by_id(user.id) == user

    def test_empty_name_rejected(self, service, valid_create):
        """Test a present but empty name is rejected like on creation."""
        user = service.create_user(valid_create)
        with pytest.raises(InvalidNameError):
            service.update_user(user.id, UserUpdate(name=""))

    def test_invalid_email_rejected(self, service, valid_create):
        user = service.create_user(valid_create)
        with pytest.raises(InvalidEmailError):
            service.update_user(user.id, UserUpdate(email="nope"))

    def test_late_violation_does_not_apply_earlier_fields(self, service, valid_create):
        """Test a valid name is not saved when the age in the same update is invalid."""
        user = service.create_user(valid_create)

        with pytest.raises(InvalidAgeError):
            service.update_user(user.id, UserUpdate(name="Ana", age=0))

        assert service.get_user_by_id(user.id).name == "Juan Pérez"

    def test_field_order_name_first(self, service, valid_create):
        user = service.create_user(valid_create)
        with pytest.raises(InvalidNameError):
            service.update_user(user.id, UserUpdate(name="", email="bad", age=0))

    def test_unknown_id_checked_before_payload(self, service):
        """Test not-found wins over an invalid payload."""
        with pytest.raises(UserNotFoundError):
            service.update_user("missing", UserUpdate(age=0))

    def test_storage_failure_gets_context(self):
        repository = BrokenRepository()
        user = User(id="u1", name="A", email="a@x.com", age=1)
        repository.seed(user)
        service = UserService(repository)

        with pytest.raises(StorageError, match="failed to update user"):
            service.update_user(user.id, UserUpdate(age=2))


# =============================================================================
# Email helper
# =============================================================================

@pytest.mark.parametrize(
    "email, valid",
    [
        ("juan@example.com", True),
        ("@", True),
        ("juan.example.com", False),
        ("", False),
    ],
)
def test_is_valid_email(email, valid):
    assert is_valid_email(email) is valid
