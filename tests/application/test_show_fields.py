"""Integration tests for the ShowFields query."""

import pytest

from receipt_engine.application.show_fields import ShowFieldsHandler
from receipt_engine.domain.exceptions import EntityNotFoundError
from receipt_engine.domain.service.value_resolver import FIELD_NAMES
from tests.factories import SETTINGS, make_customer, make_order
from tests.fakes import FakeOrderRepository


def _handler() -> ShowFieldsHandler:
    order = make_order(customer=make_customer())
    return ShowFieldsHandler(FakeOrderRepository([order]), SETTINGS)


def test_lists_every_field_in_order():
    fields = _handler().handle("ORD-1001")
    assert [f.name for f in fields] == list(FIELD_NAMES)


def test_values_come_from_the_order():
    values = {f.name: f.value for f in _handler().handle("ORD-1001")}
    assert values["CUSTOMER_NAME"] == "Dana"
    assert values["TOTAL"] == "$21.70"
    assert values["TABLE_NUMBER"] == "N/A"


def test_defaults_without_order():
    values = {f.name: f.value for f in _handler().handle()}
    assert values["STORE_NAME"] == "Store Name"
    assert values["TIMESTAMP"] == "N/A"


def test_unknown_order():
    with pytest.raises(EntityNotFoundError):
        _handler().handle("missing")
