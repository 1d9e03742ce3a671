"""Integration tests for the ImportDesign use case."""

import pytest
from structlog.testing import capture_logs

from receipt_engine.application.import_design import ImportDesignHandler
from receipt_engine.domain.exceptions import ValidationError
from receipt_engine.domain.model.elements import TextElement
from tests.fakes import FakeDesignRepository


def _setup() -> tuple[ImportDesignHandler, FakeDesignRepository]:
    repo = FakeDesignRepository()
    return ImportDesignHandler(repo), repo


class TestImportDesign:

    def test_stores_decoded_design(self):
        handler, repo = _setup()
        summary = handler.handle("footer", {"elements": [{"type": "text", "content": "Bye"}]})
        assert summary.name == "footer"
        assert summary.element_count == 1
        assert summary.unknown_types == []
        assert repo.get_by_name("footer").elements == (TextElement("Bye"),)

    def test_bare_list_accepted(self):
        handler, repo = _setup()
        handler.handle("cut", [{"type": "cutPaper"}])
        assert len(repo.get_by_name("cut")) == 1

    def test_name_is_trimmed(self):
        handler, repo = _setup()
        handler.handle("  footer ", [])
        assert repo.list_names() == ["footer"]

    def test_unknown_types_reported_and_kept(self):
        handler, repo = _setup()
        with capture_logs() as logs:
            summary = handler.handle("odd", [{"type": "hologram"}, {"type": "cutPaper"}])
        assert summary.unknown_types == ["hologram"]
        assert summary.element_count == 2
        assert logs[0] == {
            "event": "unknown_element_type",
            "design": "odd",
            "element_type": "hologram",
            "log_level": "warning",
        }
        assert logs[1]["event"] == "design_imported"


class TestImportDesignValidation:

    @pytest.mark.parametrize("name", ["", "   "])
    def test_name_required(self, name):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="Design name is required"):
            handler.handle(name, [])

    def test_unsupported_barcode_rejected(self):
        handler, repo = _setup()
        with pytest.raises(ValidationError, match="cannot be rendered"):
            handler.handle("bad", [{"type": "barcode", "data": "1", "barcodeType": "PDF417"}])
        assert repo.list_names() == []

    def test_non_list_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError):
            handler.handle("bad", "text")
