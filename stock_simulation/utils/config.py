"""
설정 관리 모듈.

[ 역할 ]
    config.yaml (또는 .json) 파일을 파싱하여 Config 객체로 변환.
    시뮬레이션 파라미터, 입력 데이터 소스, 데이터 수집, 로깅 설정을 통합 관리.

[ 설정 파일 구조 (config.yaml) ]
    simulation:       → SimulationConfig (윈도우 크기, 일일 투자 한도 등)
    data:             → DataConfig (csv / sample 입력 소스)
    ingestion:        → IngestionConfig (Yahoo Finance 수집 파라미터)
    log_level:        → "INFO" / "DEBUG"
    log_dir:          → 로그 디렉토리 경로

    키 이름의 하이픈은 밑줄로 바꿔 읽는다 (trading-window == trading_window).

[ 호출하는 곳 ]
    - run_simulation.py에서 Config.from_yaml()로 로드
    - scripts/ingest_data.py에서 config.ingestion 사용
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

ZERO_OPEN_PRICE_POLICIES = ("skip", "fail")
DATA_SOURCES = ("csv", "sample")


@dataclass
class SimulationConfig:
    """시뮬레이션 설정. config.yaml의 simulation 섹션에 대응."""
    trading_window: int = 30               # 최근 몇 거래일을 시뮬레이션할지
    daily_investment_limit: float = 1000.0  # 결정일 하루 투자 한도
    max_workers: int = 4                   # 날짜별 병렬 계산 스레드 수 (1 = 순차)
    zero_open_price_policy: str = "skip"   # 시가 0 처리: skip / fail


@dataclass
class DataConfig:
    """입력 데이터 설정. config.yaml의 data 섹션에 대응."""
    source: str = "csv"
    path: str = "data/prices.csv"
    # sample 소스 전용
    symbols: list[str] = field(default_factory=lambda: ["AAPL", "MSFT", "GOOG", "AMZN"])
    start_date: str = "2024-01-01"
    end_date: str = "2024-03-31"
    seed: int = 42


@dataclass
class IngestionConfig:
    """데이터 수집 설정. config.yaml의 ingestion 섹션에 대응."""
    tickers: list[str] = field(default_factory=list)
    start_date: str = "2024-01-01"
    end_date: str = "2024-12-31"
    output_path: str = "data/prices.csv"
    max_retries: int = 3
    retry_delay: int = 5


def _section(data: dict[str, Any], name: str, cls: type) -> Any:
    """섹션 dict에서 cls 필드에 해당하는 키만 골라 인스턴스 생성."""
    section = data.get(name) or {}
    normalized = {str(k).replace("-", "_"): v for k, v in section.items()}
    return cls(**{
        k: v for k, v in normalized.items()
        if k in cls.__dataclass_fields__
    })


@dataclass
class Config:
    """전체 설정. from_yaml() 또는 from_json()으로 파일에서 로드."""
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    data: DataConfig = field(default_factory=DataConfig)
    ingestion: IngestionConfig = field(default_factory=IngestionConfig)
    log_level: str = "INFO"
    log_dir: str = "logs"

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """YAML 파일에서 설정 로드."""
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls._from_dict(data or {})

    @classmethod
    def from_json(cls, path: str | Path) -> "Config":
        """JSON 파일에서 설정 로드."""
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """딕셔너리에서 Config 생성. 섹션에 없는 키는 무시."""
        data = {str(k).replace("-", "_"): v for k, v in data.items()}
        return cls(
            simulation=_section(data, "simulation", SimulationConfig),
            data=_section(data, "data", DataConfig),
            ingestion=_section(data, "ingestion", IngestionConfig),
            log_level=data.get("log_level", "INFO"),
            log_dir=data.get("log_dir", "logs"),
        )

    def validate(self) -> None:
        """값 검증.

        Raises:
            ValueError: 범위를 벗어나거나 알 수 없는 값
        """
        sim = self.simulation
        if int(sim.trading_window) < 1:
            raise ValueError(f"trading_window는 1 이상이어야 합니다: {sim.trading_window}")
        if float(sim.daily_investment_limit) <= 0:
            raise ValueError(f"daily_investment_limit는 0보다 커야 합니다: {sim.daily_investment_limit}")
        if int(sim.max_workers) < 1:
            raise ValueError(f"max_workers는 1 이상이어야 합니다: {sim.max_workers}")
        if sim.zero_open_price_policy not in ZERO_OPEN_PRICE_POLICIES:
            available = ", ".join(ZERO_OPEN_PRICE_POLICIES)
            raise ValueError(f"알 수 없는 zero_open_price_policy: '{sim.zero_open_price_policy}'. 사용 가능: {available}")
        if self.data.source not in DATA_SOURCES:
            available = ", ".join(DATA_SOURCES)
            raise ValueError(f"알 수 없는 데이터 소스: '{self.data.source}'. 사용 가능: {available}")

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환."""
        return asdict(self)

    def save_yaml(self, path: str | Path) -> None:
        """YAML 파일로 저장."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, allow_unicode=True, default_flow_style=False)
