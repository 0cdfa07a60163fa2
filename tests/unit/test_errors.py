"""Unit tests for error classification utilities."""

import pytest

from src.core.db_client import DatabaseError, RecordNotFoundError
from src.core.errors import ErrorCategory, ErrorCode, ErrorSeverity, classify_error, classify_error_with_response


@pytest.mark.unit
class TestClassifyError:
    """Tests for classify_error function."""

    def test_permission_error(self):
        assert classify_error(PermissionError("not authorized")) == ErrorCategory.PERMISSION_DENIED

    def test_record_not_found_is_not_found(self):
        assert classify_error(RecordNotFoundError("Record not found in tasks: 9")) == ErrorCategory.NOT_FOUND

    def test_plain_key_error_is_not_found(self):
        assert classify_error(KeyError("c9")) == ErrorCategory.NOT_FOUND

    def test_already_registered_is_conflict(self):
        exception = ValueError("E-mail a@b.com is already registered")

        assert classify_error(exception) == ErrorCategory.CONFLICT

    def test_value_error_is_validation(self):
        assert classify_error(ValueError("Group visibility requires a group_id")) == ErrorCategory.VALIDATION

    def test_database_error_is_storage(self):
        assert classify_error(DatabaseError("Failed to list records from tasks")) == ErrorCategory.STORAGE_ERROR

    def test_connection_error_is_network(self):
        assert classify_error(ConnectionError("Connection refused")) == ErrorCategory.NETWORK_ERROR

    def test_timeout_is_network(self):
        assert classify_error(TimeoutError("Request timeout")) == ErrorCategory.NETWORK_ERROR

    def test_unknown(self):
        assert classify_error(RuntimeError("Something weird")) == ErrorCategory.UNKNOWN


@pytest.mark.unit
class TestClassifyErrorWithResponse:
    """Tests for classify_error_with_response function."""

    @pytest.mark.parametrize(
        ("message", "code"),
        [
            ("Record not found in tasks: 3", ErrorCode.ERR_TASK_NOT_FOUND),
            ("Record not found in contacts: 3", ErrorCode.ERR_CONTACT_NOT_FOUND),
            ("Record not found in users: 3", ErrorCode.ERR_USER_NOT_FOUND),
            ("Record not found in user_groups: 3", ErrorCode.ERR_GROUP_NOT_FOUND),
            ("Record not found in alerts: 3", ErrorCode.ERR_NOT_FOUND),
        ],
    )
    def test_not_found_codes(self, message, code):
        response = classify_error_with_response(RecordNotFoundError(message))

        assert response.code == code
        assert response.severity == ErrorSeverity.LOW

    def test_permission_denied(self):
        response = classify_error_with_response(PermissionError("User 2 is not authorized to manage members"))

        assert response.code == ErrorCode.ERR_PERMISSION_DENIED
        assert "permission" in response.message.lower()

    def test_email_conflict(self):
        response = classify_error_with_response(ValueError("E-mail x@y.com is already registered"))

        assert response.code == ErrorCode.ERR_EMAIL_ALREADY_REGISTERED

    def test_group_required(self):
        response = classify_error_with_response(ValueError("Group visibility requires a group_id"))

        assert response.code == ErrorCode.ERR_GROUP_REQUIRED

    def test_other_validation(self):
        response = classify_error_with_response(ValueError("bad input"))

        assert response.code == ErrorCode.ERR_INVALID_INPUT

    def test_storage(self):
        response = classify_error_with_response(DatabaseError("Table 'tasks' does not exist. Call init_db() first."))

        assert response.code == ErrorCode.ERR_STORAGE_ERROR
        assert response.severity == ErrorSeverity.HIGH

    def test_network(self):
        response = classify_error_with_response(ConnectionError("Network unreachable"))

        assert response.code == ErrorCode.ERR_NETWORK_ERROR
        assert "backend url" in response.suggestion.lower()

    def test_unknown(self):
        response = classify_error_with_response(RuntimeError("boom"))

        assert response.code == ErrorCode.ERR_UNKNOWN
        assert response.severity == ErrorSeverity.MEDIUM
