#!/usr/bin/env python3
"""
Yahoo Finance 데이터를 시뮬레이션 입력 CSV로 수집하는 스크립트

[ 사용법 ]
    python scripts/ingest_data.py --tickers AAPL MSFT GOOG --start 2024-01-01 --end 2024-06-30
    python scripts/ingest_data.py --config config.yaml   (ingestion 섹션 사용)
"""
import argparse
import sys
from datetime import date
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from stock_simulation.ingestion.yahoo_finance import fetch_ticker_data, write_price_csv
from stock_simulation.utils.config import Config
from stock_simulation.utils.logger import setup_logger


def main():
    parser = argparse.ArgumentParser(description='Yahoo Finance 일봉 수집 → 시뮬레이션 입력 CSV')
    parser.add_argument('--config', type=str, default='config.yaml', help='설정 파일 경로')
    parser.add_argument('--tickers', nargs='+', default=None, help='수집할 티커 목록')
    parser.add_argument('--start', type=str, default=None, help='시작 날짜 (YYYY-MM-DD)')
    parser.add_argument('--end', type=str, default=None, help='종료 날짜 (YYYY-MM-DD)')
    parser.add_argument('--output', type=str, default=None, help='출력 CSV 경로')
    args = parser.parse_args()

    config_path = Path(args.config)
    config = Config.from_yaml(config_path) if config_path.exists() else Config()
    ingestion = config.ingestion

    logger = setup_logger(name='stock_simulation', level=config.log_level, log_dir=config.log_dir)

    tickers = args.tickers or ingestion.tickers
    if not tickers:
        logger.error('수집할 티커가 없습니다. --tickers 또는 config.yaml의 ingestion.tickers를 지정하세요.')
        sys.exit(1)

    start_date = date.fromisoformat(args.start or ingestion.start_date)
    end_date = date.fromisoformat(args.end or ingestion.end_date)
    output_path = args.output or ingestion.output_path

    frames = {}
    for ticker in tickers:
        df = fetch_ticker_data(
            ticker,
            start_date,
            end_date,
            max_retries=ingestion.max_retries,
            retry_delay=ingestion.retry_delay,
        )
        if df is None:
            logger.error(f'[SKIP] {ticker}: 수집 실패')
            continue
        frames[ticker] = df

    if not frames:
        logger.error('수집된 데이터가 없습니다.')
        sys.exit(1)

    write_price_csv(frames, output_path)
    logger.info(f'성공: {len(frames)}/{len(tickers)} 티커 → {output_path}')


if __name__ == '__main__':
    main()
