"""공용 픽스처."""

import logging

import pytest

from price_lines import D1, D2, HEADER, make_line


@pytest.fixture
def two_day_lines() -> list[str]:
    """D1: A 10→12, B 20→19 / D2: A 12→18, B 19→21."""
    return [
        HEADER,
        make_line(D1, "A", 10, 12),
        make_line(D1, "B", 20, 19),
        make_line(D2, "A", 12, 18),
        make_line(D2, "B", 19, 21),
    ]


@pytest.fixture
def reset_package_logger():
    """setup_logger()가 붙인 핸들러를 테스트 후 제거."""
    logger = logging.getLogger("stock_simulation")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
