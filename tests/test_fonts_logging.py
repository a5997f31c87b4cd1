import logging

import pytest

from fontmagician.fonts.logging import FontPipelineLogger


@pytest.fixture
def records(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.DEBUG, logger="fontmagician")
    return caplog


def test_messages_reach_standard_logging(records: pytest.LogCaptureFixture) -> None:
    logger = FontPipelineLogger(verbose=False)
    logger.notice("Font loader written to %s", "dist/fonts.js")
    logger.warning("Unable to write the font cache %s: %s", "cache.json", "denied")
    logger.debug("Generated %d face rule(s) for %s", 2, "Alice")

    assert [(record.levelno, record.getMessage()) for record in records.records] == [
        (logging.INFO, "Font loader written to dist/fonts.js"),
        (logging.WARNING, "Unable to write the font cache cache.json: denied"),
        (logging.DEBUG, "Generated 2 face rule(s) for Alice"),
    ]


def test_info_is_notice() -> None:
    assert FontPipelineLogger.info is FontPipelineLogger.notice


def test_custom_logger(caplog: pytest.LogCaptureFixture) -> None:
    custom = logging.getLogger("fontmagician.tests")
    caplog.set_level(logging.DEBUG, logger="fontmagician.tests")
    FontPipelineLogger(verbose=True, logger=custom).debug("cache hit")
    assert [record.name for record in caplog.records] == ["fontmagician.tests"]
