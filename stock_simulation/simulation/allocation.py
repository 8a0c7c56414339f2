"""
탐욕적 투자 배분 모듈.

[ 역할 ]
    결정일에 상승한 종목들에게 일일 투자 한도를 상승폭 비율대로 나눠
    다음 순위 날짜(target_date)에 대한 투자 지시를 만든다.

[ 배분 규칙 ]
    change = 수정 종가 - 시가
    sum_change = change > 0 인 종목들의 change 합
    amount = change / sum_change * daily_investment_limit   (change > 0 인 종목만)
    → 상승 종목이 하나라도 있으면 amount 합 = daily_investment_limit
    → sum_change == 0 (상승 종목 없음/빈 날)이면 지시 없음 (0으로 나누지 않음)
    → 윈도우 바닥 날짜는 배분 자체를 하지 않음 (None)

[ 호출하는 곳 ]
    - simulation/engine.py에서 날짜별로 병렬 호출 (순수 함수, 공유 상태 없음)
"""

import logging
from collections.abc import Iterable
from datetime import date

from stock_simulation.core.price_data import Allocation, InvestmentInstruction, PriceRecord
from stock_simulation.simulation.indexing import TradingWindow

logger = logging.getLogger("stock_simulation.simulation")


def allocate(
    decision_date: date,
    records: Iterable[PriceRecord],
    window: TradingWindow,
    daily_investment_limit: float,
) -> Allocation | None:
    """결정일 하루치 배분.

    Args:
        decision_date: 결정일 (윈도우 안의 날짜)
        records: 결정일의 PriceRecord들
        window: 트레이딩 윈도우
        daily_investment_limit: 하루 투자 한도

    Returns:
        Allocation (상승 종목이 없으면 instructions가 빈 튜플),
        윈도우 바닥이면 None
    """
    target_date = window.target_date(decision_date)
    if target_date is None:
        return None

    gainers = [(r, r.change) for r in records if r.change > 0]
    sum_change = sum(change for _, change in gainers)

    if sum_change <= 0:
        logger.debug(f"[{decision_date}] 상승 종목 없음 → 투자 없음")
        return Allocation(decision_date, target_date)

    instructions = tuple(
        InvestmentInstruction(
            decision_date=decision_date,
            target_date=target_date,
            symbol=record.symbol,
            amount=change / sum_change * daily_investment_limit,
        )
        for record, change in gainers
    )
    logger.debug(f"[{decision_date}] {len(instructions)}개 종목에 배분 → {target_date}")
    return Allocation(decision_date, target_date, instructions)


class AllocationEngine:
    """윈도우와 한도를 묶어 두고 날짜별 배분을 수행.

    사용 예:
        engine = AllocationEngine(window, daily_investment_limit=100)
        allocation = engine.allocate(day, groups[day])
    """

    def __init__(self, window: TradingWindow, daily_investment_limit: float):
        if daily_investment_limit <= 0:
            raise ValueError(f"daily_investment_limit는 0보다 커야 합니다: {daily_investment_limit}")
        self.window = window
        self.daily_investment_limit = daily_investment_limit

    def allocate(self, decision_date: date, records: Iterable[PriceRecord]) -> Allocation | None:
        return allocate(decision_date, records, self.window, self.daily_investment_limit)

    def allocate_item(self, item: tuple) -> Allocation | None:
        """(날짜, records) 튜플 버전. executor.map()용."""
        decision_date, records = item
        return self.allocate(decision_date, records)
