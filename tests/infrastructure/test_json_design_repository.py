"""Tests for the file-backed and built-in design repositories."""

import json

import pytest

from receipt_engine.domain.exceptions import ValidationError
from receipt_engine.domain.model.elements import (
    CutPaperElement,
    DesignDocument,
    ItemsListElement,
    QRCodeElement,
    TextElement,
)
from receipt_engine.domain.service.interpreter import render
from receipt_engine.infrastructure.persistence.builtin_design_repository import (
    BuiltinDesignRepository,
)
from receipt_engine.infrastructure.persistence.json_design_repository import (
    JsonDesignRepository,
)
from tests.factories import SETTINGS, make_order


@pytest.fixture
def repo(tmp_path):
    return JsonDesignRepository(tmp_path / "designs", fallback=BuiltinDesignRepository())


class TestJsonDesignRepository:

    def test_save_and_load(self, repo):
        design = DesignDocument((TextElement("Hi"), QRCodeElement("x", 5)), name="mine")
        repo.save(design)
        assert repo.get_by_name("mine") == design

    def test_file_uses_editor_shape(self, repo, tmp_path):
        repo.save(DesignDocument((CutPaperElement(),), name="cut"))
        raw = json.loads((tmp_path / "designs" / "cut.json").read_text())
        assert raw == {"elements": [{"type": "cutPaper"}]}

    def test_missing_design(self, tmp_path):
        assert JsonDesignRepository(tmp_path).get_by_name("nothing") is None

    def test_fallback_used_for_presets(self, repo):
        assert repo.get_by_name("basic").name == "basic"

    def test_stored_design_shadows_preset(self, repo):
        repo.save(DesignDocument((TextElement("mine"),), name="basic"))
        assert repo.get_by_name("basic").elements == (TextElement("mine"),)

    def test_list_names_merges_presets(self, repo):
        repo.save(DesignDocument((), name="zeta"))
        assert repo.list_names() == ["basic", "detailed", "zeta"]

    @pytest.mark.parametrize("name", ["../escape", "has space", "", "-lead"])
    def test_invalid_names_rejected(self, repo, name):
        with pytest.raises(ValidationError):
            repo.get_by_name(name)

    def test_unnamed_design_rejected(self, repo):
        with pytest.raises(ValidationError):
            repo.save(DesignDocument(()))

    def test_corrupt_file(self, repo, tmp_path):
        (tmp_path / "designs" / "broken.json").write_text("{nope")
        with pytest.raises(ValidationError, match="not valid JSON"):
            repo.get_by_name("broken")


class TestBuiltinDesigns:

    def test_names(self):
        assert BuiltinDesignRepository().list_names() == ["basic", "detailed"]

    def test_read_only(self):
        with pytest.raises(ValidationError, match="read-only"):
            BuiltinDesignRepository().save(DesignDocument((), name="basic"))

    def test_basic_uses_default_item_template(self):
        design = BuiltinDesignRepository().get_by_name("basic")
        items = [e for e in design if isinstance(e, ItemsListElement)]
        assert len(items) == 1 and items[0].item_template

    @pytest.mark.parametrize("name", ["basic", "detailed"])
    def test_presets_render(self, name):
        design = BuiltinDesignRepository().get_by_name(name)
        commands = render(design, make_order(), SETTINGS)
        assert commands[-1].kind == "cut"
        assert all(c.kind != "text" or c.text != "Error occurred" for c in commands)
