"""
트레이딩 윈도우 / 날짜 순위 모듈.

[ 역할 ]
    날짜별 그룹 중 최신 K개 날짜를 골라 트레이딩 윈도우를 만들고
    각 날짜에 순위(0 = 가장 최신)를 부여.

[ 순위 규칙 ]
    윈도우는 최신 → 과거 순서로 걷는다.
    결정일의 투자는 순위가 하나 큰 날짜(= 달력상 하루 전 거래일)에서 실현된다.
    가장 오래된 날짜(윈도우 바닥)는 다음 날짜가 없으므로 투자 결정을 내리지 않는다.

[ 호출하는 곳 ]
    - simulation/engine.py에서 build_trading_window()로 한 번 생성
    - simulation/allocation.py에서 target_date() 조회 (읽기 전용 공유)
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType


@dataclass(frozen=True)
class TradingWindow:
    """내림차순 날짜 목록 + 날짜→순위 매핑. 생성 후 변경되지 않는다."""
    dates: tuple[date, ...] = ()
    ranks: Mapping[date, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if any(a <= b for a, b in zip(self.dates, self.dates[1:])):
            raise ValueError("트레이딩 윈도우의 날짜는 중복 없이 내림차순이어야 합니다.")
        ranks = {d: i for i, d in enumerate(self.dates)}
        object.__setattr__(self, "ranks", MappingProxyType(ranks))

    def __len__(self) -> int:
        return len(self.dates)

    def __iter__(self) -> Iterator[date]:
        return iter(self.dates)

    def __contains__(self, item: object) -> bool:
        return item in self.ranks

    @property
    def floor(self) -> date | None:
        """윈도우 바닥 (가장 오래된 날짜)."""
        return self.dates[-1] if self.dates else None

    @property
    def start(self) -> date | None:
        return self.floor

    @property
    def end(self) -> date | None:
        return self.dates[0] if self.dates else None

    def rank(self, d: date) -> int:
        """날짜의 순위. 윈도우 밖의 날짜면 KeyError."""
        return self.ranks[d]

    def target_date(self, decision_date: date) -> date | None:
        """결정일의 투자가 실현되는 날짜 (rank + 1). 윈도우 바닥이면 None."""
        idx = self.ranks[decision_date] + 1
        if idx >= len(self.dates):
            return None
        return self.dates[idx]


def build_trading_window(dates: Iterable[date], size: int) -> TradingWindow:
    """최신 size개의 서로 다른 날짜로 윈도우 생성. 날짜가 부족하면 있는 만큼만."""
    if size < 1:
        raise ValueError(f"trading_window는 1 이상이어야 합니다: {size}")
    distinct = sorted(set(dates), reverse=True)
    return TradingWindow(tuple(distinct[:size]))
