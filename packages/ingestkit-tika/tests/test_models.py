"""Tests for ingestkit_tika.models."""

from __future__ import annotations

from ingestkit_tika.models import Changes, InvocationOutcome


class TestChanges:
    """The caller-owned changes record."""

    def test_defaults_are_absent(self):
        changes = Changes()
        assert changes.data.html is None
        assert changes.data.content_type is None
        assert changes.metadata.text is None
        assert changes.document_type is None

    def test_to_dict_omits_absent_fields(self):
        assert Changes().to_dict() == {"data": {}, "metadata": {}}

    def test_extra_fields_preserved(self):
        changes = Changes.model_validate(
            {
                "identifier": "doc-1",
                "data": {"thumb": "abc"},
                "metadata": {"title": "Report"},
            }
        )
        changes.metadata.text = "hello"
        result = changes.to_dict()
        assert result["identifier"] == "doc-1"
        assert result["data"] == {"thumb": "abc"}
        assert result["metadata"] == {"title": "Report", "text": "hello"}

    def test_clear_text_removes_both(self):
        changes = Changes()
        changes.data.html = "<p>x</p>"
        changes.metadata.text = "x"
        changes.data.content_type = "text/html"
        changes.clear_text()
        assert changes.data.html is None
        assert changes.metadata.text is None
        assert changes.data.content_type == "text/html"

    def test_instances_do_not_share_nested_models(self):
        first = Changes()
        second = Changes()
        first.data.html = "<p>x</p>"
        assert second.data.html is None


class TestInvocationOutcome:
    def test_defaults(self):
        outcome = InvocationOutcome()
        assert outcome.warning == ""
        assert outcome.raw_output == ""
        assert outcome.truncated is False
