"""End-to-end tests for the receipt interpreter."""

import copy

import pytest
from structlog.testing import capture_logs

from receipt_engine.domain.model.commands import (
    Barcode,
    Cut,
    Feed,
    QRCode,
    SetAlignment,
    Text,
    error_receipt,
)
from receipt_engine.domain.model.elements import DEFAULT_DIVIDER, DesignDocument
from receipt_engine.domain.model.settings import DEFAULT_SETTINGS
from receipt_engine.domain.model.value_objects import (
    Alignment,
    BarcodeType,
    TextSize,
    TextStyle,
)
from receipt_engine.domain.service.interpreter import ReceiptInterpreter, render
from tests.factories import SETTINGS, make_item, make_order, order_payload

LEFT = SetAlignment(Alignment.LEFT)
RIGHT = SetAlignment(Alignment.RIGHT)
CENTER = SetAlignment(Alignment.CENTER)


def _events(logs: list[dict], event: str) -> list[dict]:
    return [entry for entry in logs if entry["event"] == event]


class TestBasicDocuments:

    def test_welcome_receipt(self):
        doc = [
            {"type": "align", "alignment": "CENTER"},
            {"type": "text", "content": "Welcome {{STORE_NAME}}"},
            {"type": "feedLine", "lines": 1},
            {"type": "cutPaper"},
        ]
        assert render(doc, make_order(), SETTINGS) == [
            CENTER,
            Text("Welcome Acme"),
            Feed(1),
            Cut(),
        ]

    def test_editor_export_shape(self):
        doc = {"elements": [{"type": "text", "content": "Hi"}]}
        assert render(doc, None, SETTINGS) == [Text("Hi")]

    def test_empty_document(self):
        assert render([], make_order(), SETTINGS) == []

    def test_text_style_is_carried(self):
        doc = [{"type": "text", "content": "Big", "style": {"bold": True, "size": "LARGE"}}]
        assert render(doc, None, SETTINGS) == [
            Text("Big", TextStyle(bold=True, size=TextSize.LARGE))
        ]

    def test_placeholders_default_without_order(self):
        doc = [{"type": "text", "content": "Total {{TOTAL}} at {{STORE_NAME}}"}]
        assert render(doc, None, SETTINGS) == [Text("Total $0.00 at Store Name")]

    def test_dynamic_field(self):
        doc = [{"type": "dynamic", "field": "TOTAL"}]
        assert render(doc, make_order(), SETTINGS) == [Text("$21.70")]

    def test_split_payments_prints_nothing(self):
        doc = [{"type": "split_payments"}, {"type": "text", "content": "x"}]
        assert render(doc, make_order(), SETTINGS) == [Text("x")]

    def test_cut_is_not_terminal(self):
        doc = [{"type": "cutPaper"}, {"type": "text", "content": "after"}]
        assert render(doc, None, SETTINGS) == [Cut(), Text("after")]

    def test_feed_lines_clamped(self):
        doc = [{"type": "feedLine", "lines": 0}]
        assert render(doc, None, SETTINGS) == [Feed(1)]


class TestCodes:

    def test_barcode_data_is_not_substituted(self):
        doc = [{"type": "barcode", "data": "{{ORDER_ID}}", "barcodeType": "EAN13"}]
        assert render(doc, make_order(), SETTINGS) == [
            Barcode("{{ORDER_ID}}", BarcodeType.EAN13)
        ]

    def test_barcode_defaults_to_code128(self):
        doc = [{"type": "barcode", "data": "123"}]
        assert render(doc, None, SETTINGS) == [Barcode("123", BarcodeType.CODE128)]

    def test_qr_data_is_substituted(self):
        doc = [{"type": "qrcode", "data": "https://x/{{ORDER_ID}}", "qrSize": 6}]
        assert render(doc, make_order(), SETTINGS) == [QRCode("https://x/ORD-1001", 6)]

    def test_qr_size_default(self):
        assert render([{"type": "qrcode", "data": "a"}], None, SETTINGS) == [QRCode("a", 3)]


class TestAlignmentFlow:

    def test_divider_is_centered_and_ambient_restored(self):
        doc = [
            {"type": "align", "alignment": "RIGHT"},
            {"type": "divider"},
            {"type": "text", "content": "x"},
        ]
        assert render(doc, None, SETTINGS) == [
            RIGHT,
            CENTER,
            Text(DEFAULT_DIVIDER),
            RIGHT,
            Text("x"),
        ]

    def test_divider_under_center_needs_no_resync(self):
        doc = [
            {"type": "align", "alignment": "CENTER"},
            {"type": "divider", "content": "---"},
            {"type": "text", "content": "x"},
        ]
        assert render(doc, None, SETTINGS) == [CENTER, CENTER, Text("---"), Text("x")]

    def test_items_list_alignment_does_not_leak(self):
        doc = [
            {"type": "align", "alignment": "CENTER"},
            {"type": "items_list"},
            {"type": "text", "content": "Bye"},
        ]
        assert render(doc, make_order(), SETTINGS) == [
            CENTER,
            LEFT,
            Text("Soda"),
            RIGHT,
            Text("$4.00"),
            LEFT,
            Feed(1),
            CENTER,
            Text("Bye"),
        ]

    def test_fallback_names_print_left_under_centered_document(self):
        doc = [{"type": "align", "alignment": "CENTER"}, {"type": "items_list"}]
        order = make_order(items=(make_item("Soda"), make_item("Chips", unit="2.50")))
        assert render(doc, order, SETTINGS) == [
            CENTER,
            LEFT,
            Text("Soda"),
            RIGHT,
            Text("$4.00"),
            LEFT,
            Feed(1),
            Text("Chips"),
            RIGHT,
            Text("$2.50"),
            LEFT,
            Feed(1),
        ]

    def test_left_ambient_needs_no_resync_after_items(self):
        doc = [{"type": "items_list"}, {"type": "text", "content": "Bye"}]
        commands = render(doc, make_order(), SETTINGS)
        assert commands[-2:] == [Feed(1), Text("Bye")]

    def test_unknown_alignment_value_is_left(self):
        doc = [{"type": "align", "alignment": "JUSTIFY"}]
        assert render(doc, None, SETTINGS) == [LEFT]


class TestItemsList:

    def test_skipped_without_order(self):
        assert render([{"type": "items_list"}], None, SETTINGS) == []

    def test_order_given_as_mapping(self):
        doc = [{"type": "items_list", "showSku": True}]
        commands = render(doc, order_payload(), SETTINGS)
        assert commands[:5] == [
            Text("2x Burger"),
            RIGHT,
            Text("$16.00"),
            LEFT,
            Text("  SKU: BRG-1", TextStyle(size=TextSize.SMALL)),
        ]
        assert Text("Loyalty (10.0%)") in commands


class TestUnknownElements:

    def test_renders_nothing_and_continues(self):
        doc = [{"type": "mystery"}, {"type": "text", "content": "hi"}]
        assert render(doc, None, SETTINGS) == [Text("hi")]

    def test_logs_a_warning(self):
        with capture_logs() as logs:
            render([{"type": "mystery"}], None, SETTINGS)
        assert _events(logs, "unknown_element_type") == [
            {"event": "unknown_element_type", "element_type": "mystery", "log_level": "warning"}
        ]

    def test_missing_type(self):
        assert render([{"content": "orphan"}], None, SETTINGS) == []


class TestErrorReceipt:

    @pytest.mark.parametrize(
        "doc",
        [
            [{"type": "barcode", "data": "1", "barcodeType": "BOGUS"}],
            [42],
            "not a document",
            None,
        ],
    )
    def test_bad_documents(self, doc):
        assert render(doc, None, SETTINGS) == error_receipt()

    def test_partial_output_is_dropped(self):
        doc = [
            {"type": "text", "content": "printed first"},
            {"type": "barcode", "data": "1", "barcodeType": "BOGUS"},
        ]
        assert render(doc, None, SETTINGS) == [
            Text("Error occurred", TextStyle(bold=True)),
            Feed(1),
            Cut(),
        ]

    @pytest.mark.parametrize("order", [42, {"items": "not a list"}, {"timestamp": "yesterday"}])
    def test_bad_orders(self, order):
        doc = [{"type": "text", "content": "x"}]
        assert render(doc, order, SETTINGS) == error_receipt()

    def test_failure_is_logged(self):
        with capture_logs() as logs:
            render([42], None, SETTINGS)
        failures = _events(logs, "render_failed")
        assert len(failures) == 1
        assert failures[0]["log_level"] == "error"


class TestPurity:

    def _doc(self):
        return [
            {"type": "align", "alignment": "CENTER"},
            {"type": "text", "content": "{{STORE_NAME}} {{TIMESTAMP}}"},
            {"type": "divider"},
            {"type": "items_list", "itemTemplate": "{{name}}\n{{align:right}}{{totalPrice}}"},
            {"type": "qrcode", "data": "{{ORDER_ID}}"},
            {"type": "cutPaper"},
        ]

    def test_deterministic(self):
        interpreter = ReceiptInterpreter(SETTINGS)
        first = interpreter.render(self._doc(), order_payload())
        second = interpreter.render(self._doc(), order_payload())
        assert first == second

    def test_missing_timestamp_is_stable_with_default_settings(self):
        doc = [{"type": "dynamic", "field": "TIMESTAMP"}, {"type": "text", "content": "{{TIMESTAMP}}"}]
        first = render(doc, None, DEFAULT_SETTINGS)
        second = render(doc, make_order(timestamp=None), DEFAULT_SETTINGS)
        assert first == second == [Text("N/A"), Text("N/A")]

    def test_inputs_not_mutated(self):
        doc, payload = self._doc(), order_payload()
        doc_copy, payload_copy = copy.deepcopy(doc), copy.deepcopy(payload)
        render(doc, payload, SETTINGS)
        assert doc == doc_copy
        assert payload == payload_copy

    def test_decoded_document_accepted(self):
        design = DesignDocument.from_raw(self._doc())
        assert render(design, order_payload(), SETTINGS) == render(
            self._doc(), order_payload(), SETTINGS
        )
