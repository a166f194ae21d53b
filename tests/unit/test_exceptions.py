"""
Unit tests for the exception hierarchy.
"""

from priority_emitter.exceptions import EmitterException, InvalidArgumentError


class TestInvalidArgumentError:
    """InvalidArgumentError fields and message."""

    def test_fields(self):
        """The error should carry field, type and code, and be a TypeError."""
        error = InvalidArgumentError("priority", "high", "a real number and not NaN")

        assert error.field == "priority"
        assert error.received_type == "str"
        assert error.error_code == "INVALID_ARGUMENT"
        assert isinstance(error, EmitterException)
        assert isinstance(error, TypeError)

    def test_message_names_field(self):
        """The message should name the field and the received type."""
        error = InvalidArgumentError("listenerToRemove", 1, "callable")

        assert 'The "listenerToRemove" argument must be callable' in str(error)
        assert "Received type int" in str(error)

    def test_to_dict(self):
        """to_dict() should serialize the error."""
        error = InvalidArgumentError("listener", None, "callable")

        assert error.to_dict() == {
            "error_type": "InvalidArgumentError",
            "error_code": "INVALID_ARGUMENT",
            "message": error.message,
            "details": {"field": "listener", "received_type": "NoneType"},
        }


class TestEmitterException:
    """Base exception defaults."""

    def test_default_code_and_str(self):
        """The class name should be the default code."""
        error = EmitterException("broken")

        assert error.error_code == "EmitterException"
        assert str(error) == "[EmitterException] broken"
