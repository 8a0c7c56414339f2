"""
손익(PnL) 집계 모듈.

[ 역할 ]
    날짜별 실제 가격 데이터와 그 날짜를 목표로 한 투자 지시를 날짜 기준으로
    내부 조인(inner join)하고, 종목 코드가 같은 쌍마다 실현 금액을 더한다.

[ 계산식 ]
    실현 금액 = (1 + (수정 종가 - 시가) / 시가) * 투자 금액
    → 10% 오른 종목은 투자 금액의 1.10배를 돌려준다 (원금 + 수익)
    최종 returns = 조인된 모든 날짜의 실현 금액 합

[ 시가 0 처리 ]
    ZeroOpenPricePolicy.SKIP : 해당 항목만 제외하고 경고 로그 (기본값)
    ZeroOpenPricePolicy.FAIL : ZeroOpeningPriceError 발생

[ 호출하는 곳 ]
    - simulation/engine.py에서 날짜별 realized_return()을 병렬 호출 후 합산
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date
from enum import Enum

from stock_simulation.core.price_data import Allocation, InvestmentInstruction, PriceRecord

logger = logging.getLogger("stock_simulation.simulation")


class ZeroOpenPricePolicy(Enum):
    """시가가 0인 레코드를 만났을 때의 처리 방식."""
    SKIP = "skip"
    FAIL = "fail"


class ZeroOpeningPriceError(ValueError):
    """FAIL 정책에서 시가 0인 종목에 투자 지시가 있을 때 발생."""

    def __init__(self, target_date: date, symbol: str):
        self.target_date = target_date
        self.symbol = symbol
        super().__init__(f"[{target_date}] {symbol}: 시가가 0이라 수익률을 계산할 수 없습니다.")


def realized_return(
    target_date: date,
    records: Iterable[PriceRecord],
    instructions: Iterable[InvestmentInstruction],
    policy: ZeroOpenPricePolicy = ZeroOpenPricePolicy.SKIP,
) -> float:
    """하루치 실현 금액. 종목 코드가 정확히 일치하는 (레코드, 지시) 쌍만 계산."""
    amounts_by_symbol: dict[str, list[float]] = defaultdict(list)
    for instruction in instructions:
        amounts_by_symbol[instruction.symbol].append(instruction.amount)

    returns = 0.0
    for record in records:
        amounts = amounts_by_symbol.get(record.symbol)
        if not amounts:
            continue

        if record.opening_price == 0:
            if policy is ZeroOpenPricePolicy.FAIL:
                raise ZeroOpeningPriceError(target_date, record.symbol)
            logger.warning(f"[{target_date}] {record.symbol}: 시가 0 → 수익 계산에서 제외")
            continue

        growth = 1 + record.change / record.opening_price
        for amount in amounts:
            returns += growth * amount

    return returns


def join_by_date(
    price_groups: Mapping[date, Iterable[PriceRecord]],
    allocations: Iterable[Allocation | None],
) -> list[tuple[date, Iterable[PriceRecord], tuple[InvestmentInstruction, ...]]]:
    """target_date 기준 내부 조인. 양쪽에 모두 있는 날짜만 남긴다."""
    instructions_by_date: dict[date, list[InvestmentInstruction]] = defaultdict(list)
    for allocation in allocations:
        if allocation is None:
            continue
        instructions_by_date[allocation.target_date].extend(allocation.instructions)

    return [
        (target_date, price_groups[target_date], tuple(instructions))
        for target_date, instructions in instructions_by_date.items()
        if target_date in price_groups
    ]


def compute_pnl(
    price_groups: Mapping[date, Iterable[PriceRecord]],
    allocations: Iterable[Allocation | None],
    policy: ZeroOpenPricePolicy = ZeroOpenPricePolicy.SKIP,
) -> float:
    """조인된 모든 날짜의 실현 금액 합 (순차 버전)."""
    total = 0.0
    for target_date, records, instructions in join_by_date(price_groups, allocations):
        total += realized_return(target_date, records, instructions, policy)
    return total
