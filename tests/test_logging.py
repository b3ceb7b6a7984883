"""Tests for logging setup."""

import io
import json
import logging

import pytest

from scip_protobuf.indexer.assembler import build_document
from scip_protobuf.indexer.type_tree import build_type_tree
from scip_protobuf.logging import JsonFormatter, get_logger, level_from_name, setup_logging


class TestSetupLogging:
    def test_single_handler(self):
        setup_logging()
        logger = setup_logging(level=logging.DEBUG)

        assert logger.name == "scip_protobuf"
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_custom_stream(self):
        stream = io.StringIO()
        setup_logging(stream=stream)

        get_logger("test").info("hello")

        assert "[INFO] scip_protobuf.test: hello" in stream.getvalue()

    def test_json_document_context(self, demo_file):
        """Per-document stats are emitted as JSON fields."""
        stream = io.StringIO()
        setup_logging(level=logging.DEBUG, json_format=True, stream=stream)

        build_document(demo_file, build_type_tree([demo_file]))

        records = [json.loads(line) for line in stream.getvalue().splitlines()]
        summary = next(r for r in records if r.get("document") == "demo.proto")
        assert summary["symbols"] == 4
        assert summary["occurrences"] == 5
        assert summary["skipped"] == 9


class TestJsonFormatter:
    def test_fields(self):
        record = logging.LogRecord(
            "scip_protobuf.assembler", logging.INFO, __file__, 1, "wrote %d", (3,), None
        )
        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "scip_protobuf.assembler"
        assert data["message"] == "wrote 3"
        assert "document" not in data


class TestHelpers:
    def test_get_logger_prefix(self):
        assert get_logger("loader").name == "scip_protobuf.loader"
        assert get_logger().name == "scip_protobuf"

    def test_level_from_name(self):
        assert level_from_name("warning") == logging.WARNING
        with pytest.raises(ValueError):
            level_from_name("nope")
