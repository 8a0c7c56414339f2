"""
CSV 파일 기반 가격 라인 소스.

[ 역할 ]
    파일 하나 또는 디렉토리 안의 모든 *.csv 파일을 한 줄씩 읽어 공급.
    파싱/검증은 하지 않음 (simulation/grouping.py가 담당).

[ 호출하는 곳 ]
    - run_simulation.py에서 --source csv 일 때 생성
"""

import logging
from collections.abc import Iterator
from pathlib import Path

from stock_simulation.core.price_data import PriceLineSource

logger = logging.getLogger("stock_simulation.data")


class CsvLineSource(PriceLineSource):
    """CSV 파일(또는 디렉토리) 라인 소스.

    사용 예:
        source = CsvLineSource("data/prices.csv")
        for line in source.read_lines():
            ...
    """

    def __init__(self, path: str | Path, pattern: str = "*.csv"):
        self.path = Path(path)
        self.pattern = pattern

    def files(self) -> list[Path]:
        """읽을 파일 목록. 디렉토리면 pattern에 맞는 파일을 이름순으로."""
        if self.path.is_dir():
            return sorted(p for p in self.path.glob(self.pattern) if p.is_file())
        if not self.path.exists():
            raise FileNotFoundError(f"입력 파일 없음: {self.path}")
        return [self.path]

    def read_lines(self) -> Iterator[str]:
        for file_path in self.files():
            logger.debug(f"읽는 중: {file_path}")
            with open(file_path, "r", encoding="utf-8") as f:
                for line in f:
                    yield line.rstrip("\r\n")

    def describe(self) -> str:
        return f"csv:{self.path}"
