"""
Yahoo Finance 데이터 수집 모듈

[ 역할 ]
    yfinance로 일봉을 받아 검증한 뒤 시뮬레이션 입력 라인 형식으로 CSV에 저장.
        timestamp,open,high,low,close,adjusted_close,volume,dividend_amount,split_coefficient,symbol
"""
import logging
import time
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

import pandas as pd
import yfinance as yf

from stock_simulation.data.sample_source import HEADER_LINE, to_price_lines

logger = logging.getLogger("stock_simulation.ingestion")

REQUIRED_COLUMNS = ['date', 'open', 'high', 'low', 'close', 'adjusted_close', 'volume']


def fetch_ticker_data(
    ticker: str,
    start_date: date,
    end_date: date,
    max_retries: int = 3,
    retry_delay: int = 5
) -> Optional[pd.DataFrame]:
    """
    Yahoo Finance에서 티커 데이터를 수집합니다.

    Args:
        ticker: 티커 심볼 (예: 'AAPL', '005930.KS')
        start_date: 시작 날짜
        end_date: 종료 날짜 (포함)
        max_retries: 최대 재시도 횟수
        retry_delay: 재시도 간 대기 시간 (초)

    Returns:
        DataFrame with columns: [date, open, high, low, close, adjusted_close, volume]
        또는 실패 시 None
    """
    for attempt in range(max_retries):
        try:
            logger.info(f"Fetching {ticker} from {start_date} to {end_date} (attempt {attempt + 1}/{max_retries})")

            df = yf.Ticker(ticker).history(
                start=start_date,
                end=end_date + timedelta(days=1),  # end_date 포함
                auto_adjust=False,  # Adj Close를 별도로 가져옴
                actions=False
            )

            if df.empty:
                logger.warning(f"No data found for {ticker}")
                return None

            df = normalize_columns(df)

            if validate_data(df, ticker):
                logger.info(f"Successfully fetched {len(df)} rows for {ticker}")
                return df
            logger.warning(f"Data validation failed for {ticker}")
            return None

        except Exception as e:
            logger.error(f"Error fetching {ticker} (attempt {attempt + 1}/{max_retries}): {e}")
            if attempt < max_retries - 1:
                logger.info(f"Retrying in {retry_delay} seconds...")
                time.sleep(retry_delay)
            else:
                logger.error(f"Max retries reached for {ticker}")

    return None


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """yfinance history() 결과를 표준 컬럼으로 변환 (날짜 인덱스 → date 컬럼)."""
    df = df.reset_index().rename(columns={
        'Date': 'date',
        'Open': 'open',
        'High': 'high',
        'Low': 'low',
        'Close': 'close',
        'Adj Close': 'adjusted_close',
        'Volume': 'volume'
    })
    df = df[REQUIRED_COLUMNS].copy()

    # timezone 제거 후 datetime.date로
    if pd.api.types.is_datetime64_any_dtype(df['date']):
        df['date'] = df['date'].dt.date
    return df


def validate_data(df: pd.DataFrame, ticker: str) -> bool:
    """
    수집한 데이터를 검증합니다.

    필수 컬럼이 없거나 비어 있으면 실패. 시가 0 이하 행은 경고만 남긴다
    (시뮬레이션에서 zero_open_price_policy로 처리).
    """
    if df is None or df.empty:
        logger.warning(f"Empty DataFrame for {ticker}")
        return False

    missing_columns = set(REQUIRED_COLUMNS) - set(df.columns)
    if missing_columns:
        logger.error(f"Missing columns for {ticker}: {missing_columns}")
        return False

    null_counts = df[REQUIRED_COLUMNS].isnull().sum()
    if null_counts.any():
        logger.warning(f"NULL values found in {ticker}: {null_counts[null_counts > 0].to_dict()}")

    for col in ['open', 'adjusted_close']:
        if (df[col] <= 0).any():
            invalid_count = int((df[col] <= 0).sum())
            logger.warning(f"Invalid {col} values (<=0) for {ticker}: {invalid_count} rows")

    return True


def write_price_csv(frames: dict[str, pd.DataFrame], path: str | Path) -> int:
    """종목별 DataFrame을 하나의 CSV로 저장. NULL 가격 행은 제외.

    Returns:
        저장된 레코드 수 (헤더 제외)
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(path, "w", encoding="utf-8") as f:
        f.write(HEADER_LINE + "\n")
        for symbol, df in frames.items():
            clean = df.dropna(subset=['open', 'adjusted_close'])
            for line in to_price_lines(clean.fillna({'high': 0.0, 'low': 0.0, 'close': 0.0, 'volume': 0}), symbol):
                f.write(line + "\n")
                count += 1

    logger.info(f"Wrote {count} rows for {len(frames)} tickers to {path}")
    return count
