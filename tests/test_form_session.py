from __future__ import annotations

import pytest

from pyuserdesk.exceptions import (
    FieldLockedError,
    FormInputError,
    FormStateError,
    FormValidationError,
    InvalidFieldPathError,
)
from pyuserdesk.models.user import User
from pyuserdesk.state.events import Operation
from pyuserdesk.state.form import FormSession, FormState
from pyuserdesk.state.policy import derive_username


def _existing(username: str = "Bret") -> User:
    return User.model_validate(
        {
            "id": 1,
            "name": "Leanne Graham",
            "username": username,
            "email": "Sincere@april.biz",
            "phone": "1-770-736-8031",
            "website": "hildegard.org",
            "address": {"street": "Kulas Light", "suite": "Apt. 556", "city": "Gwenborough"},
            "company": {"name": "Romaguera-Crona", "catchPhrase": "Multi-layered"},
        }
    )


def _fill_valid(form: FormSession) -> None:
    form.set_field("name", "Jane Doe")
    form.set_field("email", "jane@example.com")
    form.set_field("phone", "555-0100")
    form.set_field("address.street", "1 Main St")
    form.set_field("address.city", "Boston")


def test_derive_username_strips_whitespace_and_lowercases() -> None:
    assert derive_username("Jane Doe", "USER-") == "USER-janedoe"
    assert derive_username("  A\tB  C ", "USER-") == "USER-abc"


def test_open_create_starts_with_empty_buffer() -> None:
    form = FormSession()
    form.open_create()

    assert form.state == FormState.CREATING
    assert form.editing_id is None
    assert form.buffer == {
        "name": "",
        "email": "",
        "phone": "",
        "username": "",
        "website": "",
        "address": {"street": "", "city": ""},
        "company": {"name": ""},
    }


def test_derived_username_follows_name_until_explicitly_set() -> None:
    form = FormSession()
    form.open_create()

    form.set_field("name", "Jane Doe")
    assert form.username == "USER-janedoe"
    assert form.username_derived

    form.set_username("jd1")
    form.set_field("name", "Janet Dough")
    assert form.username == "jd1"
    assert not form.username_derived


def test_username_keystrokes_rejected_in_derived_mode() -> None:
    form = FormSession()
    form.open_create()
    form.set_field("name", "Jane Doe")

    with pytest.raises(FieldLockedError):
        form.set_field("username", "typed")

    assert form.buffer["username"] == ""  # type: ignore[index]
    assert form.username == "USER-janedoe"


def test_username_editable_after_explicit_override() -> None:
    form = FormSession()
    form.open_create()
    form.set_username("jd1")

    form.set_field("username", "jd2")

    assert form.username == "jd2"


def test_clearing_explicit_username_returns_to_derived_mode() -> None:
    form = FormSession()
    form.open_create()
    form.set_field("name", "Jane Doe")
    form.set_username("jd1")

    form.set_username("")

    assert form.username_derived
    assert form.username == "USER-janedoe"


def test_open_edit_copies_record_and_keeps_existing_username() -> None:
    record = _existing()
    form = FormSession()
    form.open_edit(record)

    assert form.state == FormState.EDITING
    assert form.editing_id == 1
    assert form.username == "Bret"
    assert not form.username_derived

    form.set_field("name", "Someone Else")
    form.set_field("address.city", "Boston")

    assert form.username == "Bret"
    assert record.name == "Leanne Graham"
    assert record.address.city == "Gwenborough"
    assert form.buffer["address"]["suite"] == "Apt. 556"  # type: ignore[index]


def test_clearing_name_while_editing_keeps_explicit_username() -> None:
    form = FormSession()
    form.open_edit(_existing())
    form.set_field("name", "")
    assert form.username == "Bret"


def test_open_edit_without_username_uses_derived_mode() -> None:
    form = FormSession()
    form.open_edit(_existing(username=""))
    assert form.username == "USER-leannegraham"
    assert form.username_derived


def test_buffer_property_returns_copy() -> None:
    form = FormSession()
    form.open_create()
    copy = form.buffer
    copy["address"]["city"] = "Leaked"  # type: ignore[index]
    assert form.buffer["address"]["city"] == ""  # type: ignore[index]


@pytest.mark.parametrize("path", ["address.zipcode", "billing.city", "company.catchPhrase", "id", "nickname", "address"])
def test_unknown_paths_rejected_without_mutation(path: str) -> None:
    form = FormSession()
    form.open_edit(_existing())
    before = form.buffer

    with pytest.raises(InvalidFieldPathError) as exc_info:
        form.set_field(path, "x")

    assert exc_info.value.path == path
    assert form.buffer == before


def test_nested_update_leaves_siblings_untouched() -> None:
    form = FormSession()
    form.open_edit(_existing())

    form.set_field("address.street", "Elm")

    assert form.buffer["address"] == {"street": "Elm", "suite": "Apt. 556", "city": "Gwenborough"}  # type: ignore[index]


def test_non_string_value_rejected() -> None:
    form = FormSession()
    form.open_create()
    with pytest.raises(FormInputError):
        form.set_field("name", 42)  # type: ignore[arg-type]


def test_editing_closed_form_raises() -> None:
    form = FormSession()
    with pytest.raises(FormStateError):
        form.set_field("name", "x")
    with pytest.raises(FormStateError):
        form.prepare_submission()


def test_open_edit_requires_id() -> None:
    form = FormSession()
    with pytest.raises(FormStateError):
        form.open_edit(User(name="No Id"))
    assert form.state == FormState.CLOSED


def test_cancel_discards_buffer() -> None:
    form = FormSession()
    form.open_edit(_existing())
    form.set_field("name", "Changed")

    form.cancel()

    assert form.state == FormState.CLOSED
    assert form.buffer is None
    assert form.editing_id is None


@pytest.mark.parametrize(
    ("path", "value"),
    [
        ("name", ""),
        ("email", ""),
        ("phone", "   "),
        ("address.street", ""),
        ("address.city", ""),
    ],
)
def test_required_fields_block_submission(path: str, value: str) -> None:
    form = FormSession()
    form.open_create()
    _fill_valid(form)
    form.set_field(path, value)

    with pytest.raises(FormValidationError) as exc_info:
        form.prepare_submission()

    assert path in {issue.field for issue in exc_info.value.issues}
    assert form.state == FormState.CREATING


def test_minimum_lengths() -> None:
    form = FormSession()
    form.open_create()
    _fill_valid(form)
    form.set_field("name", "Jo")
    form.set_field("company.name", "AB")
    form.set_username("jd")

    with pytest.raises(FormValidationError) as exc_info:
        form.prepare_submission()

    rules = {(issue.field, issue.rule) for issue in exc_info.value.issues}
    assert rules == {("name", "min_length"), ("company.name", "min_length"), ("username", "min_length")}


def test_empty_company_name_is_allowed() -> None:
    form = FormSession()
    form.open_create()
    _fill_valid(form)
    assert form.validate() == []


def test_malformed_email_blocks_submission() -> None:
    form = FormSession()
    form.open_create()
    _fill_valid(form)
    form.set_field("email", "not-an-email")

    with pytest.raises(FormValidationError):
        form.prepare_submission()
    assert [issue.rule for issue in form.issues] == ["format"]


def test_create_submission_uses_derived_username_without_touching_buffer() -> None:
    form = FormSession()
    form.open_create()
    _fill_valid(form)

    submission = form.prepare_submission()

    assert submission.operation == Operation.CREATE
    assert submission.record_id is None
    assert "id" not in submission.payload
    assert submission.payload["username"] == "USER-janedoe"
    assert form.buffer["username"] == ""  # type: ignore[index]


def test_update_submission_targets_edited_id() -> None:
    form = FormSession()
    form.open_edit(_existing())
    form.set_field("address.city", "Boston")

    submission = form.prepare_submission()

    assert submission.operation == Operation.UPDATE
    assert submission.record_id == 1
    assert submission.payload["address"]["city"] == "Boston"
    assert submission.payload["company"]["catchPhrase"] == "Multi-layered"
    assert submission.payload["username"] == "Bret"


def test_finish_ignores_stale_submission() -> None:
    form = FormSession()
    form.open_edit(_existing())
    stale = form.prepare_submission()

    form.cancel()
    form.open_create()

    assert form.finish(stale) is False
    assert form.state == FormState.CREATING


def test_finish_closes_current_session() -> None:
    form = FormSession()
    form.open_edit(_existing())
    submission = form.prepare_submission()

    assert form.finish(submission) is True
    assert form.state == FormState.CLOSED
