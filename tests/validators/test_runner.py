"""Tests for the validation runner."""

import pytest

from flowbuilder.errors import DocumentLoadError
from flowbuilder.schema.codec import import_document
from flowbuilder.output.formatter import format_validation_result
from flowbuilder.validators.runner import run_validators, validate_document_file


class TestRunValidators:
    def test_clean_document(self, three_node_document):
        result = run_validators(three_node_document)

        assert result.is_valid
        assert result.errors == []

    def test_collects_all_problems(self):
        document = import_document(
            '{"nodes": [{"id": "a", "position": {"x": 0, "y": 0}, "data": {"label": ""}}],'
            ' "edges": [{"id": "e", "source": "a", "target": "b"}]}'
        )

        result = run_validators(document)

        assert {i.code for i in result.errors} == {"DANGLING_EDGE", "EMPTY_LABEL"}

    def test_error_dicts(self, dangling_json):
        result = run_validators(import_document(dangling_json))

        assert result.errors[0].to_error_dict() == {
            "loc": "edges.e1",
            "msg": "Edge target references undefined node 'ghost'",
            "type": "DANGLING_EDGE",
        }


class TestValidateDocumentFile:
    def test_validate_file(self, tmp_path, dangling_json):
        path = tmp_path / "flow.json"
        path.write_text(dangling_json)

        result = validate_document_file(path)

        assert result.has_errors

    def test_missing_file(self):
        with pytest.raises(DocumentLoadError):
            validate_document_file("/nonexistent/flow.json")


class TestFormatValidationResult:
    def test_text_lists_errors(self, dangling_json):
        result = run_validators(import_document(dangling_json))

        text = format_validation_result(result)

        assert "✘ DANGLING_EDGE: [edge e1]" in text
        assert text.endswith("Validation failed: 1 error(s)")

    def test_text_clean(self, three_node_document):
        text = format_validation_result(run_validators(three_node_document))

        assert "  (none)" in text
        assert text.endswith("Validation passed")
