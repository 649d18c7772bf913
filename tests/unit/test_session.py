"""
Unit tests for FieldValidationSession.

Covers versioned (last-write-wins) results, predicate defects, whole-form
validation and the change/blur/submit event policy.
"""

import asyncio

import pytest

from commerce_validation.core.session import VALIDATION_FAILED_MESSAGE, FieldValidationSession
from commerce_validation.core.validators import confirmation, custom, email, min_length, required, unique


def signup_session(**initial_values) -> FieldValidationSession:
    session = FieldValidationSession({}, initial_values)
    session.field_rules = {
        "email": (required("Email is required"), email()),
        "password": (required(), min_length(8)),
        "confirmPassword": (
            required("Please confirm your password"),
            confirmation("password", session.value_getter("password"), "Passwords do not match"),
        ),
    }
    return session


class TestSessionState:
    """Tests for values, errors and touched flags"""

    def test_initial_state(self):
        """Test a new session holds its initial values and no errors"""
        session = FieldValidationSession({"email": [required()]}, {"email": "a@b.co"})

        assert session.values == {"email": "a@b.co"}
        assert session.errors == {}
        assert session.touched == {}
        assert session.is_valid

    def test_set_value_and_touch(self):
        """Test values and touched flags are tracked per field"""
        session = FieldValidationSession({"email": [required()]})
        session.set_value("email", "shopper@example.com")
        session.touch("email")

        assert session.values["email"] == "shopper@example.com"
        assert session.touched == {"email": True}

    def test_properties_return_copies(self):
        """Test callers cannot mutate session state through properties"""
        session = FieldValidationSession({}, {"email": "a@b.co"})
        session.values["email"] = "changed"
        assert session.values["email"] == "a@b.co"

    def test_set_and_clear_errors(self):
        """Test errors set from outside (e.g. a server response)"""
        session = FieldValidationSession({})
        session.set_error("email", "Email already registered")
        assert not session.is_valid

        session.clear_errors()
        assert session.errors == {}
        assert session.is_valid

    def test_reset_restores_initial_values(self):
        """Test reset drops edits, errors and touched flags"""
        session = FieldValidationSession({"email": [required()]}, {"email": "start@example.com"})
        session.set_value("email", "edited@example.com")
        session.touch("email")
        session.set_error("email", "Bad")

        session.reset()
        assert session.values == {"email": "start@example.com"}
        assert session.errors == {}
        assert session.touched == {}

        session.reset({"email": "new@example.com"})
        assert session.values == {"email": "new@example.com"}


class TestFieldValidation:
    """Tests for validate_field and validate_all"""

    async def test_validate_field_records_message(self):
        """Test a failing field stores its message and a passing one stores ''"""
        session = signup_session(email="bad")

        assert await session.validate_field("email") == "Please enter a valid email address"
        assert session.errors["email"] == "Please enter a valid email address"

        session.set_value("email", "shopper@example.com")
        assert await session.validate_field("email") == ""
        assert session.errors["email"] == ""
        assert session.is_valid

    async def test_confirmation_follows_live_value(self):
        """Test the confirmation rule reads the session's current password"""
        session = signup_session(password="secret123", confirmPassword="secret123")
        assert await session.validate_field("confirmPassword") == ""

        session.set_value("password", "changed123")
        assert await session.validate_field("confirmPassword") == "Passwords do not match"

    async def test_validate_all_touches_every_field(self):
        """Test whole-form validation marks fields touched and reports validity"""
        session = signup_session(email="shopper@example.com", password="short")

        assert await session.validate_all() is False
        assert session.touched == {"email": True, "password": True, "confirmPassword": True}
        assert session.errors == {
            "email": "",
            "password": "Must be at least 8 characters",
            "confirmPassword": "Please confirm your password",
        }

    async def test_validate_all_passes(self):
        """Test a complete form is valid"""
        session = signup_session(email="shopper@example.com", password="secret123", confirmPassword="secret123")
        assert await session.validate_all() is True

    async def test_predicate_defect_marks_field_failed(self):
        """Test a raising predicate becomes 'Validation failed'"""
        def broken(value):
            raise RuntimeError("lookup bug")

        session = FieldValidationSession({"sku": [custom(broken)]}, {"sku": "SKU-1"})
        assert await session.validate_field("sku") == VALIDATION_FAILED_MESSAGE
        assert session.errors["sku"] == VALIDATION_FAILED_MESSAGE

    async def test_field_without_rules_is_valid(self):
        """Test a field with no rules validates to ''"""
        session = FieldValidationSession({}, {"notes": "anything"})
        assert await session.validate_field("notes") == ""


class TestStaleResults:
    """Tests for last-write-wins handling of overlapping validations"""

    async def test_older_result_finishing_last_is_discarded(self):
        """Test a slow earlier lookup cannot overwrite a newer result"""
        release_first = asyncio.Event()

        async def username_available(value):
            if value == "taken":
                await release_first.wait()
                return False
            return True

        session = FieldValidationSession({"username": [unique(username_available)]})

        session.set_value("username", "taken")
        first = asyncio.create_task(session.validate_field("username"))
        await asyncio.sleep(0)

        session.set_value("username", "free")
        assert await session.validate_field("username") == ""

        release_first.set()
        assert await first == "This value is already taken"
        assert session.errors["username"] == ""

    async def test_value_change_during_validation_discards_result(self):
        """Test a result computed for an outdated value is not stored"""
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_check(value):
            started.set()
            await release.wait()
            return "Rejected"

        session = FieldValidationSession({"code": [custom(slow_check)]}, {"code": "old"})
        task = asyncio.create_task(session.validate_field("code"))
        await started.wait()

        session.set_value("code", "new")
        release.set()

        assert await task == "Rejected"
        assert "code" not in session.errors

    async def test_reset_discards_in_flight_results(self):
        """Test validations running across a reset are dropped"""
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_check(value):
            started.set()
            await release.wait()
            return "Rejected"

        session = FieldValidationSession({"code": [custom(slow_check)]}, {"code": "x"})
        task = asyncio.create_task(session.validate_field("code"))
        await started.wait()

        session.reset()
        release.set()
        await task

        assert session.errors == {}


class TestDebouncedChange:
    """Tests for change handling with validate_on_change"""

    async def test_change_without_policy_does_not_validate(self):
        """Test change only records the value by default"""
        session = FieldValidationSession({"email": [email()]})

        assert session.change("email", "bad") is None
        assert session.values["email"] == "bad"
        assert session.pending_fields == set()
        assert session.errors == {}

    async def test_change_validates_after_quiet_period(self):
        """Test a debounced validation runs once the delay has passed"""
        session = FieldValidationSession({"email": [email()]}, validate_on_change=True, debounce_seconds=0.01)

        task = session.change("email", "bad")
        assert session.pending_fields == {"email"}
        assert session.errors == {}

        assert await task == "Please enter a valid email address"
        assert session.errors["email"] == "Please enter a valid email address"
        assert session.pending_fields == set()

    async def test_rapid_changes_validate_last_value_once(self):
        """Test each change restarts the wait and only the last value is checked"""
        seen = []

        async def username_available(value):
            seen.append(value)
            return True

        session = FieldValidationSession(
            {"username": [unique(username_available)]},
            validate_on_change=True,
            debounce_seconds=0.05,
        )

        first = session.change("username", "a")
        second = session.change("username", "ad")
        last = session.change("username", "ada")

        assert await last == ""
        await asyncio.gather(first, second, return_exceptions=True)
        assert first.cancelled()
        assert second.cancelled()
        assert seen == ["ada"]

    async def test_fields_debounce_independently(self):
        """Test a change to one field does not cancel another field's wait"""
        session = FieldValidationSession(
            {"email": [email()], "password": [min_length(8)]},
            validate_on_change=True,
            debounce_seconds=0.01,
        )

        email_task = session.change("email", "bad")
        password_task = session.change("password", "short")

        assert await email_task == "Please enter a valid email address"
        assert await password_task == "Must be at least 8 characters"

    async def test_reset_cancels_pending_validations(self):
        """Test reset drops debounced validations that have not run"""
        session = FieldValidationSession({"email": [email()]}, validate_on_change=True, debounce_seconds=0.05)

        task = session.change("email", "bad")
        session.reset()

        await asyncio.gather(task, return_exceptions=True)
        assert task.cancelled()
        assert session.pending_fields == set()
        assert session.errors == {}

    def test_negative_debounce_rejected(self):
        """Test the debounce delay cannot be negative"""
        with pytest.raises(ValueError):
            FieldValidationSession({}, debounce_seconds=-1)


class TestBlur:
    """Tests for blur handling"""

    async def test_blur_touches_and_validates(self):
        """Test blur marks the field touched and validates it"""
        session = signup_session(email="bad")

        assert await session.blur("email") == "Please enter a valid email address"
        assert session.touched == {"email": True}
        assert session.errors["email"] == "Please enter a valid email address"

    async def test_blur_without_policy_only_touches(self):
        """Test blur leaves errors alone when validate_on_blur is off"""
        session = FieldValidationSession({"email": [email()]}, {"email": "bad"}, validate_on_blur=False)

        assert await session.blur("email") == ""
        assert session.touched == {"email": True}
        assert session.errors == {}


class TestSubmit:
    """Tests for submit"""

    async def test_valid_form_calls_handler_with_values(self):
        """Test on_submit receives the values of a valid form"""
        submitted = []
        session = signup_session(email="shopper@example.com", password="secret123", confirmPassword="secret123")

        async def on_submit(values):
            assert session.is_submitting
            submitted.append(values)

        assert await session.submit(on_submit) is True
        assert submitted == [session.values]
        assert not session.is_submitting

    async def test_invalid_form_skips_handler(self):
        """Test on_submit is not called while any field fails"""
        submitted = []
        session = signup_session(email="shopper@example.com")

        assert await session.submit(submitted.append) is False
        assert submitted == []
        assert session.touched == {"email": True, "password": True, "confirmPassword": True}
        assert session.errors["password"] == "This field is required"
        assert not session.is_submitting

    async def test_submit_without_validation(self):
        """Test validate_on_submit=False touches fields and submits as-is"""
        submitted = []
        session = FieldValidationSession({"email": [required()]}, validate_on_submit=False)

        assert await session.submit(submitted.append) is True
        assert submitted == [{}]
        assert session.touched == {"email": True}
        assert session.errors == {}

    async def test_handler_error_propagates_and_clears_flag(self):
        """Test a failing on_submit raises and is_submitting is reset"""
        session = FieldValidationSession({}, {"email": "shopper@example.com"})

        async def on_submit(values):
            raise ConnectionError("checkout service down")

        with pytest.raises(ConnectionError):
            await session.submit(on_submit)
        assert not session.is_submitting
