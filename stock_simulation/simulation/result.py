"""
시뮬레이션 결과 모듈.

[ 역할 ]
    시뮬레이션 종료 시 한 번 생성되는 불변 결과 컨테이너.
    summary()로 텍스트 리포트, instructions_frame()으로 투자 지시 표를 제공.

[ 포함 값 ]
    - returns                : 전체 윈도우에서 실현된 금액 합 (원금 + 수익)
    - total_investment_value : 투자 지시가 1개 이상 나온 결정일 수 * 일일 투자 한도
    - trading_window         : 실제 사용된 날짜들 (최신 → 과거)
    - daily_investment_limit / trading_window_size : 설정값 그대로

[ 호출하는 곳 ]
    - simulation/engine.py::GreedyInvestmentSimulator.run()이 생성하여 반환
    - run_simulation.py에서 summary() 출력, instructions_frame() CSV 저장
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

import pandas as pd

from stock_simulation.core.price_data import Allocation, InvestmentInstruction
from stock_simulation.simulation.indexing import TradingWindow

INSTRUCTION_COLUMNS = ["decision_date", "target_date", "symbol", "amount"]


@dataclass(frozen=True)
class SimulationResult:
    """탐욕적 투자 시뮬레이션 결과."""
    returns: float = 0.0                  # 실현 금액 합
    total_investment_value: float = 0.0   # 총 투자 금액
    trading_window: TradingWindow = field(default_factory=TradingWindow)
    daily_investment_limit: float = 0.0
    trading_window_size: int = 0          # 설정된 윈도우 크기 (실제 날짜 수보다 클 수 있음)
    allocations: tuple[Allocation, ...] = ()

    @property
    def net_profit(self) -> float:
        """순손익 = 실현 금액 - 투자 금액."""
        return self.returns - self.total_investment_value

    @property
    def return_rate(self) -> float:
        """투자 금액 대비 순손익 (%). 투자가 없었으면 0."""
        if self.total_investment_value <= 0:
            return 0.0
        return self.net_profit / self.total_investment_value * 100

    @property
    def window_start(self) -> date | None:
        return self.trading_window.start

    @property
    def window_end(self) -> date | None:
        return self.trading_window.end

    @property
    def instructions(self) -> list[InvestmentInstruction]:
        return [i for a in self.allocations for i in a.instructions]

    @property
    def investment_days(self) -> int:
        """투자 지시가 나온 결정일 수."""
        return sum(1 for a in self.allocations if a)

    def instructions_frame(self) -> pd.DataFrame:
        """전체 투자 지시 DataFrame (결정일 내림차순, 종목 오름차순)."""
        rows = [
            {
                "decision_date": i.decision_date,
                "target_date": i.target_date,
                "symbol": i.symbol,
                "amount": i.amount,
            }
            for i in self.instructions
        ]
        df = pd.DataFrame(rows, columns=INSTRUCTION_COLUMNS)
        if df.empty:
            return df
        return df.sort_values(["decision_date", "symbol"], ascending=[False, True]).reset_index(drop=True)

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환 (JSON 직렬화 가능한 값만)."""
        return {
            "returns": self.returns,
            "total_investment_value": self.total_investment_value,
            "net_profit": self.net_profit,
            "return_rate": self.return_rate,
            "daily_investment_limit": self.daily_investment_limit,
            "trading_window_size": self.trading_window_size,
            "trading_window": [d.isoformat() for d in self.trading_window],
            "investment_days": self.investment_days,
            "instruction_count": len(self.instructions),
        }

    def summary(self) -> str:
        """성과 요약 문자열."""
        period = (
            f"{self.window_start} ~ {self.window_end}"
            if self.trading_window.dates else "(데이터 없음)"
        )
        lines = [
            "=" * 50,
            "탐욕적 투자 시뮬레이션 리포트",
            "=" * 50,
            f"기간:            {period}",
            f"거래일 수:       {len(self.trading_window):>10d} / {self.trading_window_size}",
            f"일일 투자 한도:  {self.daily_investment_limit:>14,.2f}",
            "-" * 50,
            f"투자일 수:       {self.investment_days:>10d}",
            f"투자 지시 수:    {len(self.instructions):>10d}",
            f"총 투자 금액:    {self.total_investment_value:>14,.2f}",
            f"실현 금액:       {self.returns:>14,.2f}",
            f"순손익:          {self.net_profit:>14,.2f}",
            f"수익률:          {self.return_rate:>10.2f}%",
            "=" * 50,
        ]
        return "\n".join(lines)
