"""Tests for the layerguard exception hierarchy."""

from pathlib import Path

import pytest

from layerguard.exceptions import (
    AnalysisError,
    ConfigurationError,
    FileAccessError,
    InvalidConfigError,
    InvalidPathError,
    LayerGuardError,
    RuleEvaluationError,
    UnknownArchitectureError,
    ValidationCancelledError,
)


class TestHierarchy:
    """Every error derives from LayerGuardError."""

    @pytest.mark.parametrize(
        "error,parent",
        [
            (InvalidPathError(Path("/x"), "Directory does not exist"), ConfigurationError),
            (UnknownArchitectureError("onion", ["clean"]), ConfigurationError),
            (InvalidConfigError("workers", 0, "must be at least 1"), ConfigurationError),
            (FileAccessError(Path("/x/A.ts"), "denied"), AnalysisError),
            (RuleEvaluationError("custom/x", "/x/A.ts", "boom"), AnalysisError),
            (ValidationCancelledError("timed out"), AnalysisError),
        ],
    )
    def test_parents(self, error, parent):
        assert isinstance(error, parent)
        assert isinstance(error, LayerGuardError)


class TestFormatting:
    """Messages carry their details."""

    def test_details_rendered(self):
        error = InvalidConfigError("workers", 0, "must be at least 1")
        assert str(error) == (
            "Invalid configuration for workers: 0 (key=workers, value=0, reason=must be at least 1)"
        )

    def test_no_details(self):
        assert str(LayerGuardError("plain")) == "plain"

    def test_unknown_architecture_lists_known(self):
        error = UnknownArchitectureError("onion", ["clean", "ddd"])
        assert error.details["known"] == "clean, ddd"
        assert error.known_styles == ["clean", "ddd"]

    def test_cancel_reason(self):
        error = ValidationCancelledError("cancelled by caller")
        assert error.reason == "cancelled by caller"
        assert str(error).startswith("Validation cancelled: cancelled by caller")


class TestToDict:
    """Machine-readable form of an error."""

    def test_fields(self):
        error = UnknownArchitectureError("onion", ["clean", "ddd"])
        assert error.to_dict() == {
            "error": "UnknownArchitectureError",
            "message": "Unknown architecture style: onion",
            "details": {"style": "onion", "known": "clean, ddd"},
        }

    def test_detail_values_are_strings(self):
        error = LayerGuardError("bad", {"path": Path("/x/A.ts"), "count": 3})
        assert error.details == {"path": str(Path("/x/A.ts")), "count": "3"}
        assert error.to_dict()["details"]["count"] == "3"
