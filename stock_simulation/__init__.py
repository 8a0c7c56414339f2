"""
=============================================================================
탐욕적 주식 투자 시뮬레이션 (Stock Simulation)
=============================================================================

[ 시스템 전체 구조 ]

    run_simulation.py (진입점)
         │
         ├── utils/config.py        ← config.yaml 설정 로드
         ├── utils/logger.py        ← 로깅
         │
         ├── data/                  ← 원시 가격 라인 소스
         │     ├── csv_source.py
         │     └── sample_source.py
         │
         └── simulation/engine.py   ← 시뮬레이션 실행 엔진
               │
               ├── simulation/grouping.py    ← 라인 파싱 + 날짜별 그룹화
               ├── simulation/indexing.py    ← 트레이딩 윈도우 + 날짜 순위
               ├── simulation/allocation.py  ← 상승폭 비례 투자 배분
               ├── simulation/pnl.py         ← 목표일 조인 + 실현 금액 합산
               └── simulation/result.py      ← 결과 컨테이너 / 리포트

    scripts/ingest_data.py → ingestion/yahoo_finance.py (입력 CSV 수집)


[ 데이터 흐름 ]

    1. config.yaml에서 윈도우 크기 / 일일 투자 한도 로드
    2. PriceLineSource가 원시 라인 제공 (헤더/깨진 라인 포함 가능)
    3. 날짜별로 묶고 최신 K개 날짜로 윈도우 구성 (순위 0 = 최신)
    4. 윈도우 바닥을 제외한 각 날짜에서 상승 종목에 한도를 비례 배분,
       투자는 순위 + 1 날짜(하루 전 거래일)에서 실현
    5. 목표일의 실제 가격과 조인하여 실현 금액 합산 → SimulationResult
"""
