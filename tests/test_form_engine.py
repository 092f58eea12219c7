from __future__ import annotations

import logging

import pytest

from constants.steps import StepId
from core.errors import LOAD_ERROR_MESSAGE
from core.schema_registry import DEFAULT_REGISTRY, SchemaRegistry
from utils.logging_context import configure_logging
from wizard.engine import FormEngine


@pytest.fixture
def engine(scheduler) -> FormEngine:
    return FormEngine(scheduler=scheduler, message_ttl=3.0)


def test_initial_state(engine: FormEngine) -> None:
    assert engine.get_active_step() is StepId.PERSONAL
    assert [field.name for field in engine.get_schema()] == ["firstName", "lastName", "age"]
    assert engine.get_values() == ()
    assert engine.get_progress() == 0
    assert engine.get_messages() == {}
    assert engine.get_load_error() is None
    assert engine.get_submission_flag() is False
    assert engine.get_confirmation_open() is False
    assert not engine.is_record_table_visible()


def test_personal_scenario_progress_and_advance(engine: FormEngine) -> None:
    engine.set_value("firstName", "Ann")
    assert engine.get_progress() == 33

    engine.set_value("lastName", "Lee")
    assert engine.get_progress() == 67

    assert engine.advance_step() is StepId.ADDRESS
    assert engine.get_active_step() is StepId.ADDRESS
    assert dict(engine.get_values()) == {"firstName": "Ann", "lastName": "Lee"}
    assert engine.get_progress() == 0


def test_advance_from_payment_stays_on_payment(engine: FormEngine) -> None:
    engine.select_step("payment")

    for _ in range(3):
        assert engine.advance_step() is StepId.PAYMENT
    assert engine.is_terminal_step()


def test_select_step_preserves_values(engine: FormEngine) -> None:
    engine.set_value("firstName", "Ann")
    engine.select_step("payment")
    engine.select_step("personal")

    assert engine.get_value("firstName") == "Ann"
    assert engine.get_progress() == 33


def test_progress_follows_active_schema(engine: FormEngine) -> None:
    engine.set_value("firstName", "Ann")
    engine.select_step("address")
    engine.set_value("street", "Main St")
    engine.set_value("city", "Austin")

    assert engine.get_progress() == 50
    engine.select_step("personal")
    assert engine.get_progress() == 33


def test_unknown_field_names_are_ignored(engine: FormEngine) -> None:
    engine.set_value("cardNumber", "4111")
    engine.set_value("nickname", "annie")

    assert engine.get_values() == ()
    engine.select_step("payment")
    engine.set_value("cardNumber", "4111")
    engine.select_step("personal")
    engine.set_value("cardNumber", "4242")
    assert engine.get_value("cardNumber") == "4242"


def test_save_posts_step_specific_message(engine: FormEngine, scheduler) -> None:
    assert engine.save() == "Saved Personal Data"
    assert engine.get_messages() == {"save": "Saved Personal Data"}

    engine.advance_step()
    scheduler.advance(1.0)
    assert engine.save() == "Saved Address Data"
    assert engine.get_messages() == {"save": "Saved Address Data"}

    scheduler.advance(2.5)
    assert engine.get_messages() == {"save": "Saved Address Data"}
    scheduler.advance(0.5)
    assert engine.get_messages() == {}


def test_save_does_not_change_values(engine: FormEngine) -> None:
    engine.set_value("firstName", "Ann")
    engine.save()

    assert engine.get_values() == (("firstName", "Ann"),)


def test_payment_has_no_save_action(engine: FormEngine) -> None:
    engine.select_step("payment")

    assert not engine.can_save()
    assert engine.save() is None
    assert engine.get_messages() == {}


def test_submit_and_close_confirmation(engine: FormEngine) -> None:
    engine.select_step("payment")

    engine.submit_final()
    assert engine.get_submission_flag() is True
    assert engine.get_confirmation_open() is True
    assert not engine.is_record_table_visible()

    engine.close_confirmation()
    assert engine.get_confirmation_open() is False
    assert engine.get_submission_flag() is True
    assert engine.is_record_table_visible()
    assert engine.get_active_step() is StepId.PAYMENT


def test_delete_value_after_submission(engine: FormEngine, scheduler) -> None:
    engine.set_value("firstName", "Ann")
    engine.set_value("lastName", "Lee")
    engine.submit_final()
    engine.close_confirmation()

    assert engine.delete_value("firstName") is True

    assert "firstName" not in dict(engine.get_values())
    assert engine.get_messages() == {"firstName": 'Field "firstName" has been deleted.'}
    assert engine.get_progress() == 33
    scheduler.advance(3.0)
    assert engine.get_messages() == {}


def test_delete_absent_value_is_silent(engine: FormEngine) -> None:
    engine.submit_final()

    assert engine.delete_value("firstName") is False
    assert engine.get_messages() == {}


def test_edit_field_after_submission(engine: FormEngine) -> None:
    engine.set_value("firstName", "Ann")
    engine.submit_final()

    assert engine.edit_field("firstName") is True
    engine.set_value("firstName", "Anna")

    assert engine.get_messages() == {"firstName": 'Field "firstName" is now editable.'}
    assert engine.get_value("firstName") == "Anna"


def test_delete_value_before_submission_removes_the_key(engine: FormEngine, scheduler) -> None:
    engine.set_value("firstName", "Ann")
    engine.set_value("lastName", "Lee")

    assert engine.delete_value("firstName") is True

    assert dict(engine.get_values()) == {"lastName": "Lee"}
    assert engine.get_messages() == {"firstName": 'Field "firstName" has been deleted.'}
    assert engine.get_progress() == 33
    scheduler.advance(3.0)
    assert engine.get_messages() == {}


def test_record_table_actions_before_submission_are_ignored(engine: FormEngine) -> None:
    engine.set_value("firstName", "Ann")

    assert engine.record_table.delete_field("firstName") is False
    assert engine.edit_field("firstName") is False
    assert engine.resubmit() is False
    assert engine.get_value("firstName") == "Ann"
    assert engine.get_messages() == {}


def test_record_table_delete_refreshes_progress(engine: FormEngine) -> None:
    engine.set_value("firstName", "Ann")
    engine.submit_final()

    assert engine.record_table.delete_field("firstName") is True

    assert engine.get_values() == ()
    assert engine.get_progress() == 0


def test_missing_required_fields_follow_the_active_schema(engine: FormEngine) -> None:
    assert engine.missing_required_fields() == ("firstName", "lastName")

    engine.set_value("firstName", "Ann")
    engine.set_value("lastName", "   ")
    assert engine.missing_required_fields() == ("lastName",)

    engine.select_step(StepId.PAYMENT)
    assert engine.missing_required_fields() == ("cardNumber", "expiryDate", "cvv", "cardholderName")

    engine.submit_final()
    assert engine.get_submission_flag() is True


def test_resubmit_reopens_confirmation(engine: FormEngine) -> None:
    engine.submit_final()
    engine.close_confirmation()

    assert engine.resubmit() is True

    assert engine.get_submission_flag() is True
    assert engine.get_confirmation_open() is True


def test_select_unknown_step_sets_persistent_load_error(engine: FormEngine, scheduler, caplog) -> None:
    engine.set_value("firstName", "Ann")

    with caplog.at_level(logging.WARNING):
        assert engine.select_step("billing") is StepId.PERSONAL

    assert engine.get_load_error() == LOAD_ERROR_MESSAGE
    assert engine.get_schema() == ()
    assert engine.get_progress() == 0
    assert engine.get_messages() == {}
    assert "Failed to load form structure" in caplog.text
    scheduler.advance(10.0)
    assert engine.get_load_error() == LOAD_ERROR_MESSAGE

    engine.select_step("personal")
    assert engine.get_load_error() is None
    assert engine.get_progress() == 33


def test_registry_without_step_reports_load_error(scheduler) -> None:
    registry = SchemaRegistry({"personal": DEFAULT_REGISTRY.lookup("personal")})
    engine = FormEngine(registry=registry, scheduler=scheduler)

    engine.advance_step()

    assert engine.get_active_step() is StepId.ADDRESS
    assert engine.get_load_error() == LOAD_ERROR_MESSAGE
    assert engine.get_schema() == ()


def test_cross_step_names_alias_the_same_value(scheduler) -> None:
    from core.schema import FieldDefinition

    shared = FieldDefinition(name="note", label="Note")
    registry = SchemaRegistry({"personal": (shared,), "address": (shared,), "payment": ()})
    engine = FormEngine(registry=registry, scheduler=scheduler)

    engine.set_value("note", "hello")
    engine.advance_step()

    assert engine.get_progress() == 100
    engine.advance_step()
    assert engine.get_schema() == ()
    assert engine.get_progress() == 0
    assert engine.get_load_error() is None


def test_step_changes_update_logging_context(engine: FormEngine, caplog) -> None:
    configure_logging(level=logging.INFO)
    engine.advance_step()

    with caplog.at_level(logging.INFO, logger="tests.engine"):
        logging.getLogger("tests.engine").info("after advance")

    assert caplog.records[-1].form_step == "address"


def test_step_labels() -> None:
    assert FormEngine.step_label(StepId.PERSONAL) == "Personal Info"
    assert FormEngine.step_label(StepId.PAYMENT) == "Payment Info"


def test_shutdown_cancels_pending_messages(engine: FormEngine, scheduler) -> None:
    engine.save()

    engine.shutdown()

    assert engine.get_messages() == {}
    assert scheduler.live_tasks == []
