import pytest

from passreset.core.exceptions import (
    ConcurrentModificationError,
    PassResetError,
    PasswordResetConflictError,
    PasswordResetStoreError,
)


def test_base_error_carries_message_and_code():
    error = PassResetError("boom", "custom")

    assert error.message == "boom"
    assert error.code == "custom"
    assert str(error) == "boom"


def test_store_error_default_code():
    error = PasswordResetStoreError("store down")

    assert error.code == "store_error"
    assert isinstance(error, PassResetError)


def test_conflict_error_is_a_store_error():
    error = PasswordResetConflictError()

    assert isinstance(error, PasswordResetStoreError)
    assert error.code == "reset_request_conflict"
    assert error.message


def test_concurrent_modification_is_not_a_store_error():
    error = ConcurrentModificationError()

    assert not isinstance(error, PasswordResetStoreError)
    assert error.code == "concurrent_modification"


def test_errors_can_be_chained():
    with pytest.raises(PasswordResetStoreError) as exc_info:
        try:
            raise ConnectionError("refused")
        except ConnectionError as e:
            raise PasswordResetStoreError("unavailable") from e

    assert isinstance(exc_info.value.__cause__, ConnectionError)
