"""
주가 레코드 / 투자 지시 데이터 타입 및 입력 소스 추상 클래스 정의.

[ 역할 ]
    시뮬레이션 전 단계가 공유하는 불변(frozen) 데이터 타입을 정의.
    원시 가격 라인을 공급하는 입력 소스의 인터페이스를 정의.

[ 구현체 ]
    - data/csv_source.py::CsvLineSource       (CSV 파일/디렉토리)
    - data/sample_source.py::SampleLineSource (샘플 데이터 생성)

[ 호출하는 곳 ]
    - simulation/grouping.py가 라인을 파싱하여 PriceRecord 생성
    - simulation/allocation.py가 InvestmentInstruction / Allocation 생성
    - simulation/pnl.py가 PriceRecord와 InvestmentInstruction을 조인
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PriceRecord:
    """종목 하나의 하루치 가격 정보."""
    symbol: str
    opening_price: float           # 시가
    adjusted_closing_price: float  # 수정 종가

    @property
    def change(self) -> float:
        """당일 가격 변화량 (수정 종가 - 시가)."""
        return self.adjusted_closing_price - self.opening_price


@dataclass(frozen=True)
class InvestmentInstruction:
    """투자 지시. decision_date의 상승분을 근거로 target_date에 amount만큼 투자.

    target_date는 윈도우에서 한 칸 뒤(rank + 1), 즉 달력상 더 과거의 날짜다.
    """
    decision_date: date
    target_date: date
    symbol: str
    amount: float


@dataclass(frozen=True)
class Allocation:
    """하나의 결정일에 대한 배분 결과. 상승 종목이 없으면 instructions는 비어 있다."""
    decision_date: date
    target_date: date
    instructions: tuple[InvestmentInstruction, ...] = ()

    @property
    def total_amount(self) -> float:
        return sum(i.amount for i in self.instructions)

    def __bool__(self) -> bool:
        return bool(self.instructions)


class PriceLineSource(ABC):
    """원시 가격 라인 제공 추상 클래스.

    한 줄은 헤더이거나 콤마로 구분된 레코드:
        timestamp,open,high,low,close,adjusted_close,volume,dividend_amount,split_coefficient,symbol
    """

    @abstractmethod
    def read_lines(self) -> Iterator[str]:
        """원시 라인을 순서대로 반환 (헤더 포함 가능)."""
        ...

    @abstractmethod
    def describe(self) -> str:
        """로그/리포트용 소스 설명."""
        ...
