"""
탐욕적 투자 시뮬레이션 엔진 모듈.

[ 역할 ]
    원시 가격 라인을 받아 전체 시뮬레이션을 실행하고 SimulationResult를 반환.
    시스템의 핵심 실행 흐름을 담당.

[ 실행 흐름 ]
    run() 호출 시:
        1. grouping.group_by_date()      → {날짜: PriceRecord들} (최신순)
        2. indexing.build_trading_window() → 최신 K개 날짜 + 순위 (한 번 생성, 읽기 전용)
        3. 날짜별 allocation.allocate()   → 결정일마다 다음 순위 날짜에 대한 투자 지시
        4. pnl.join_by_date() + 날짜별 realized_return() → 합산하여 returns
        5. 투자 지시가 나온 결정일 수 * 한도 → total_investment_value

[ 병렬 처리 ]
    3, 4단계의 날짜별 계산은 서로 독립적인 순수 함수이므로
    ThreadPoolExecutor.map()으로 병렬 실행. max_workers=1이면 순차 실행.

[ 호출하는 곳 ]
    - run_simulation.py (진입점)에서 생성 및 실행
"""

import concurrent.futures
import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from stock_simulation.simulation.allocation import AllocationEngine
from stock_simulation.simulation.grouping import group_by_date
from stock_simulation.simulation.indexing import build_trading_window
from stock_simulation.simulation.pnl import ZeroOpenPricePolicy, join_by_date, realized_return
from stock_simulation.simulation.result import SimulationResult

logger = logging.getLogger("stock_simulation.simulation")

T = TypeVar("T")
R = TypeVar("R")


class GreedyInvestmentSimulator:
    """탐욕적 투자 시뮬레이터. run()으로 시뮬레이션 실행."""

    def __init__(
        self,
        trading_window: int = 30,
        daily_investment_limit: float = 1000.0,
        max_workers: int = 4,
        zero_open_price_policy: ZeroOpenPricePolicy | str = ZeroOpenPricePolicy.SKIP,
    ):
        if trading_window < 1:
            raise ValueError(f"trading_window는 1 이상이어야 합니다: {trading_window}")
        if daily_investment_limit <= 0:
            raise ValueError(f"daily_investment_limit는 0보다 커야 합니다: {daily_investment_limit}")
        if max_workers < 1:
            raise ValueError(f"max_workers는 1 이상이어야 합니다: {max_workers}")

        self.trading_window = trading_window
        self.daily_investment_limit = daily_investment_limit
        self.max_workers = max_workers
        self.zero_open_price_policy = ZeroOpenPricePolicy(zero_open_price_policy)

    def run(self, lines: Iterable[str]) -> SimulationResult:
        """시뮬레이션 실행.

        Args:
            lines: 원시 가격 라인 (헤더/깨진 라인 포함 가능)

        Returns:
            SimulationResult
        """
        groups = group_by_date(lines)
        window = build_trading_window(groups.keys(), self.trading_window)

        if not window:
            logger.warning("유효한 거래일이 없습니다.")
            return SimulationResult(
                daily_investment_limit=self.daily_investment_limit,
                trading_window_size=self.trading_window,
            )

        if len(window) < self.trading_window:
            logger.info(f"거래일이 {len(window)}일뿐이라 윈도우를 줄여서 실행 (설정: {self.trading_window}일)")
        logger.info(f"시뮬레이션 시작: {window.start} ~ {window.end} ({len(window)}일)")

        window_groups = {d: groups[d] for d in window}

        # 결정일별 배분
        engine = AllocationEngine(window, self.daily_investment_limit)
        allocations = tuple(
            a for a in self._map(engine.allocate_item, list(window_groups.items()))
            if a is not None
        )
        invested = [a for a in allocations if a]
        total_investment_value = len(invested) * self.daily_investment_limit
        logger.info(
            f"투자 결정 {len(invested)}/{len(allocations)}일, "
            f"투자 지시 {sum(len(a.instructions) for a in invested)}건"
        )

        # 목표일 기준 조인 후 날짜별 실현 금액 합산
        joined = join_by_date(window_groups, allocations)
        policy = self.zero_open_price_policy
        daily_returns = self._map(
            lambda item: realized_return(item[0], item[1], item[2], policy),
            joined,
        )
        returns = sum(daily_returns, 0.0)

        result = SimulationResult(
            returns=returns,
            total_investment_value=total_investment_value,
            trading_window=window,
            daily_investment_limit=self.daily_investment_limit,
            trading_window_size=self.trading_window,
            allocations=allocations,
        )
        logger.info(f"시뮬레이션 완료. 실현 금액: {returns:,.2f} / 투자 금액: {total_investment_value:,.2f}")
        return result

    def _map(self, func: Callable[[T], R], items: list[T]) -> list[R]:
        """날짜별 순수 함수 병렬 맵. 결과 순서는 입력 순서와 같다."""
        if self.max_workers == 1 or len(items) <= 1:
            return [func(item) for item in items]
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return list(pool.map(func, items))
