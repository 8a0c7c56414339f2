"""
탐욕적 투자 시뮬레이션 실행 스크립트 (시스템 진입점).

[ 사용법 ]
    # 기본 실행 (config.yaml의 data 섹션 사용)
    python run_simulation.py

    # CSV 파일 / 디렉토리 지정
    python run_simulation.py --input data/prices.csv
    python run_simulation.py --input data/

    # 샘플 데이터로 테스트
    python run_simulation.py --sample

    # 파라미터 오버라이드
    python run_simulation.py --trading-window 60 --daily-limit 5000 --workers 8

    # 투자 지시 내역 CSV 저장
    python run_simulation.py --sample --export instructions.csv
"""

import argparse
import sys
from datetime import date
from pathlib import Path

from stock_simulation.core.price_data import PriceLineSource
from stock_simulation.data.csv_source import CsvLineSource
from stock_simulation.data.sample_source import SampleLineSource
from stock_simulation.simulation.engine import GreedyInvestmentSimulator
from stock_simulation.simulation.pnl import ZeroOpeningPriceError
from stock_simulation.simulation.result import SimulationResult
from stock_simulation.utils.config import Config
from stock_simulation.utils.logger import setup_logger


def build_source(config: Config) -> PriceLineSource:
    """설정의 data 섹션으로 입력 소스 생성."""
    data = config.data
    if data.source == "sample":
        return SampleLineSource(
            symbols=data.symbols,
            start_date=date.fromisoformat(data.start_date),
            end_date=date.fromisoformat(data.end_date),
            seed=data.seed,
        )
    return CsvLineSource(data.path)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """CLI 인자로 설정 덮어쓰기."""
    if args.sample:
        config.data.source = "sample"
    if args.input:
        config.data.source = "csv"
        config.data.path = args.input
    if args.trading_window is not None:
        config.simulation.trading_window = args.trading_window
    if args.daily_limit is not None:
        config.simulation.daily_investment_limit = args.daily_limit
    if args.workers is not None:
        config.simulation.max_workers = args.workers
    if args.zero_open_policy is not None:
        config.simulation.zero_open_price_policy = args.zero_open_policy
    return config


def run(config: Config) -> SimulationResult:
    """설정대로 소스를 만들고 시뮬레이션 실행."""
    source = build_source(config)
    print(f"입력: {source.describe()}")

    sim = config.simulation
    simulator = GreedyInvestmentSimulator(
        trading_window=int(sim.trading_window),
        daily_investment_limit=float(sim.daily_investment_limit),
        max_workers=int(sim.max_workers),
        zero_open_price_policy=sim.zero_open_price_policy,
    )
    return simulator.run(source.read_lines())


def print_result(result: SimulationResult, top: int = 10):
    """결과 출력."""
    print()
    print(result.summary())

    frame = result.instructions_frame()
    if not frame.empty:
        print(f"\n최근 투자 지시 (최대 {top}건):")
        for row in frame.head(top).itertuples(index=False):
            print(f"  [{row.decision_date} → {row.target_date}] {row.symbol}: {row.amount:,.2f}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="탐욕적 투자 시뮬레이션 실행")
    parser.add_argument("--config", type=str, default="config.yaml", help="설정 파일 경로")
    parser.add_argument("--input", type=str, default=None, help="입력 CSV 파일 또는 디렉토리")
    parser.add_argument("--sample", action="store_true", help="샘플 데이터로 테스트")
    parser.add_argument("-w", "--trading-window", type=int, default=None, help="시뮬레이션할 최근 거래일 수")
    parser.add_argument("-l", "--daily-limit", type=float, default=None, help="일일 투자 한도")
    parser.add_argument("--workers", type=int, default=None, help="병렬 스레드 수 (1 = 순차)")
    parser.add_argument("--zero-open-policy", choices=["skip", "fail"], default=None, help="시가 0 처리 방식")
    parser.add_argument("--export", type=str, default=None, help="투자 지시 내역을 저장할 CSV 경로")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # 설정 로드
    config_path = Path(args.config)
    if config_path.exists():
        config = Config.from_yaml(config_path)
    else:
        print(f"설정 파일 없음: {config_path}, 기본값 사용")
        config = Config()

    config = apply_overrides(config, args)
    try:
        config.validate()
    except ValueError as e:
        print(f"오류: {e}")
        return 1

    setup_logger(level=config.log_level, log_dir=config.log_dir)

    try:
        result = run(config)
    except FileNotFoundError as e:
        print(f"오류: {e}")
        print("  1. scripts/ingest_data.py로 데이터 수집")
        print("  2. --sample 옵션으로 샘플 데이터 사용")
        return 1
    except ZeroOpeningPriceError as e:
        print(f"오류: {e}")
        print("  --zero-open-policy skip 으로 시가 0 종목을 제외하고 실행할 수 있습니다.")
        return 1

    print_result(result)

    if args.export:
        export_path = Path(args.export)
        export_path.parent.mkdir(parents=True, exist_ok=True)
        result.instructions_frame().to_csv(export_path, index=False)
        print(f"\n투자 지시 {len(result.instructions)}건 저장: {export_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
