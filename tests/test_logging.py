from __future__ import annotations

import io
import logging

import pytest

from shared.utils.logging import setup_logging


def test_records_go_to_given_stream() -> None:
    stream = io.StringIO()
    setup_logging("INFO", stream=stream)

    logging.getLogger("mesh.resolver").info("resolved via alias")

    assert "INFO mesh.resolver: resolved via alias" in stream.getvalue()


def test_level_filters_records() -> None:
    stream = io.StringIO()
    setup_logging("warning", stream=stream)

    logging.getLogger("mesh").info("hidden")

    assert stream.getvalue() == ""


def test_debug_quiets_urllib3() -> None:
    setup_logging("DEBUG", stream=io.StringIO())

    assert logging.getLogger("urllib3").level == logging.WARNING


def test_unknown_level_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        setup_logging("LOUD")
