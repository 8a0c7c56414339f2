"""
샘플 가격 라인 생성 모듈.

[ 역할 ]
    다운로드한 데이터 없이 시뮬레이션을 돌려볼 수 있도록
    영업일 기준 랜덤워크 주가를 생성하여 원시 라인 형식으로 공급.
    같은 seed + 종목이면 항상 같은 데이터가 나온다.

[ 호출하는 곳 ]
    - run_simulation.py에서 --source sample 일 때 생성
    - 테스트에서 엔드투엔드 입력으로 사용
"""

import zlib
from collections.abc import Iterator
from datetime import date

import numpy as np
import pandas as pd

from stock_simulation.core.price_data import PriceLineSource

HEADER_LINE = "timestamp,open,high,low,close,adjusted_close,volume,dividend_amount,split_coefficient,symbol"


def generate_sample_data(
    symbol: str,
    start_date: date,
    end_date: date,
    initial_price: float = 100.0,
    volatility: float = 0.02,
    seed: int = 42,
) -> pd.DataFrame:
    """샘플 일봉 데이터 생성.

    Returns:
        DataFrame with columns: [date, open, high, low, close, adjusted_close, volume]
    """
    rng = np.random.default_rng(seed + zlib.crc32(symbol.encode("utf-8")))

    dates = pd.bdate_range(start=start_date, end=end_date)
    n = len(dates)

    returns = rng.normal(0.0002, volatility, n)
    closes = initial_price * np.cumprod(1 + returns)
    opens = closes * (1 + rng.normal(0, 0.01, n))
    highs = np.maximum(opens, closes) * (1 + np.abs(rng.normal(0, 0.005, n)))
    lows = np.minimum(opens, closes) * (1 - np.abs(rng.normal(0, 0.005, n)))
    volumes = rng.lognormal(12, 1, n).astype(int)

    return pd.DataFrame({
        "date": [d.date() for d in dates],
        "open": np.round(opens, 4),
        "high": np.round(highs, 4),
        "low": np.round(lows, 4),
        "close": np.round(closes, 4),
        "adjusted_close": np.round(closes, 4),
        "volume": volumes,
    })


def to_price_lines(df: pd.DataFrame, symbol: str) -> list[str]:
    """일봉 DataFrame을 원시 라인 목록으로 변환 (헤더 제외)."""
    lines = []
    for row in df.itertuples(index=False):
        lines.append(
            f"{row.date},{row.open},{row.high},{row.low},{row.close},"
            f"{row.adjusted_close},{int(row.volume)},0.0,1.0,{symbol}"
        )
    return lines


class SampleLineSource(PriceLineSource):
    """종목별 샘플 데이터를 종목 순서대로 이어붙여 공급 (파일마다 헤더 한 줄)."""

    def __init__(
        self,
        symbols: list[str],
        start_date: date,
        end_date: date,
        seed: int = 42,
    ):
        self.symbols = symbols
        self.start_date = start_date
        self.end_date = end_date
        self.seed = seed

    def read_lines(self) -> Iterator[str]:
        for symbol in self.symbols:
            df = generate_sample_data(symbol, self.start_date, self.end_date, seed=self.seed)
            yield HEADER_LINE
            yield from to_price_lines(df, symbol)

    def describe(self) -> str:
        return f"sample:{','.join(self.symbols)} ({self.start_date} ~ {self.end_date})"
