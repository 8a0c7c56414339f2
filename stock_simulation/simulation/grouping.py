"""
원시 가격 라인을 날짜별로 묶는 모듈.

[ 역할 ]
    라인 하나를 (날짜, PriceRecord)로 파싱하고 날짜별로 그룹화.
    헤더/깨진 라인은 조용히 버린다 (에러로 보고하지 않음).

[ 라인 형식 ]
    timestamp,open,high,low,close,adjusted_close,volume,dividend_amount,split_coefficient,symbol
        0: 날짜(YYYY-MM-DD)   1: 시가   5: 수정 종가   9: 종목 코드

[ 호출하는 곳 ]
    - simulation/engine.py::GreedyInvestmentSimulator.run()의 첫 단계
"""

import logging
import math
from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from stock_simulation.core.price_data import PriceRecord

logger = logging.getLogger("stock_simulation.simulation")

HEADER_SENTINEL = "timestamp"

DATE_FIELD = 0
OPEN_FIELD = 1
ADJUSTED_CLOSE_FIELD = 5
SYMBOL_FIELD = 9
MIN_FIELDS = SYMBOL_FIELD + 1


def parse_line(line: str) -> tuple[date, PriceRecord] | None:
    """라인 하나를 파싱. 헤더거나 파싱할 수 없으면 None."""
    if not line or HEADER_SENTINEL in line:
        return None

    contents = [c.strip() for c in line.split(",")]
    if len(contents) < MIN_FIELDS:
        return None

    try:
        trade_date = date.fromisoformat(contents[DATE_FIELD])
        opening_price = float(contents[OPEN_FIELD])
        adjusted_closing_price = float(contents[ADJUSTED_CLOSE_FIELD])
    except ValueError:
        return None

    symbol = contents[SYMBOL_FIELD]
    if not symbol or not (math.isfinite(opening_price) and math.isfinite(adjusted_closing_price)):
        return None

    return trade_date, PriceRecord(symbol, opening_price, adjusted_closing_price)


def group_by_date(lines: Iterable[str]) -> dict[date, tuple[PriceRecord, ...]]:
    """라인들을 날짜별로 그룹화.

    Returns:
        {날짜: 그날의 PriceRecord들}. 키는 최신 날짜부터 내림차순.
    """
    grouped: dict[date, list[PriceRecord]] = defaultdict(list)
    dropped = 0

    for line in lines:
        parsed = parse_line(line)
        if parsed is None:
            dropped += 1
            continue
        trade_date, record = parsed
        grouped[trade_date].append(record)

    if dropped:
        logger.debug(f"헤더/파싱 불가 라인 {dropped}개 제외")

    return {d: tuple(grouped[d]) for d in sorted(grouped, reverse=True)}
