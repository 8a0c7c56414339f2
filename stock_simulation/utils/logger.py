"""
로깅 모듈.

[ 역할 ]
    파일 + 콘솔 로거를 설정. 시뮬레이션 단계별 진행, 경고 등을 기록.

[ 로그 파일 위치 ]
    {log_dir}/{name}_{YYYYMMDD}.log (예: logs/stock_simulation_20240601.log)
    log_dir가 None이면 파일 핸들러 없이 콘솔만.

[ 호출하는 곳 ]
    - run_simulation.py, scripts/ingest_data.py에서 setup_logger() 호출
    - 각 모듈은 logging.getLogger("stock_simulation.<영역>") 사용
      (simulation / data / ingestion) → 부모 로거의 핸들러로 전파됨
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

# yfinance 수집 시 요청마다 DEBUG 로그를 남기는 라이브러리들
NOISY_LOGGERS = ("yfinance", "urllib3", "peewee")


def setup_logger(
    name: str = "stock_simulation",
    level: str = "INFO",
    log_dir: str | None = "logs",
    console: bool = True,
    quiet_loggers: tuple[str, ...] = NOISY_LOGGERS,
) -> logging.Logger:
    """로거 설정. 파일 핸들러(일별) + 콘솔 핸들러 등록. 여러 번 불러도 핸들러는 한 번만.

    quiet_loggers의 외부 라이브러리 로거는 WARNING 이상만 남긴다.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
    for noisy in quiet_loggers:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        today = datetime.now().strftime("%Y%m%d")
        file_handler = logging.FileHandler(
            log_path / f"{name}_{today}.log",
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
