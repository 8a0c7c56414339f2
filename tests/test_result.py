"""Tests for stock_simulation.simulation.result and run_simulation CLI."""

from datetime import date

import pytest

from price_lines import D1 as LINE_D1, D2 as LINE_D2, make_line

import run_simulation
from stock_simulation.core.price_data import Allocation, InvestmentInstruction
from stock_simulation.simulation.indexing import build_trading_window
from stock_simulation.simulation.result import INSTRUCTION_COLUMNS, SimulationResult

D1 = date(2024, 1, 2)
D2 = date(2024, 1, 3)
D3 = date(2024, 1, 4)


@pytest.fixture
def result() -> SimulationResult:
    allocations = (
        Allocation(D3, D2),
        Allocation(D2, D1, (
            InvestmentInstruction(D2, D1, "B", 25.0),
            InvestmentInstruction(D2, D1, "A", 75.0),
        )),
    )
    return SimulationResult(
        returns=113.75,
        total_investment_value=100.0,
        trading_window=build_trading_window([D1, D2, D3], 3),
        daily_investment_limit=100.0,
        trading_window_size=5,
        allocations=allocations,
    )


class TestSimulationResult:
    def test_derived_values(self, result: SimulationResult) -> None:
        assert result.net_profit == pytest.approx(13.75)
        assert result.return_rate == pytest.approx(13.75)
        assert result.window_start == D1
        assert result.window_end == D3
        assert result.investment_days == 1

    def test_empty_result(self) -> None:
        empty = SimulationResult()
        assert empty.return_rate == 0.0
        assert empty.window_start is None
        assert empty.instructions_frame().empty
        assert "데이터 없음" in empty.summary()

    def test_instructions_frame(self, result: SimulationResult) -> None:
        frame = result.instructions_frame()
        assert list(frame.columns) == INSTRUCTION_COLUMNS
        assert frame["symbol"].tolist() == ["A", "B"]
        assert frame["amount"].sum() == pytest.approx(100.0)

    def test_to_dict(self, result: SimulationResult) -> None:
        data = result.to_dict()
        assert data["trading_window"] == ["2024-01-04", "2024-01-03", "2024-01-02"]
        assert data["instruction_count"] == 2

    def test_is_immutable(self, result: SimulationResult) -> None:
        with pytest.raises(AttributeError):
            result.returns = 0.0  # type: ignore[misc]


class TestCli:
    @pytest.fixture(autouse=True)
    def _clean_logger(self, reset_package_logger, monkeypatch, tmp_path):
        """CLI 실행은 cwd에 logs/를 만들고 패키지 로거에 핸들러를 붙인다."""
        monkeypatch.chdir(tmp_path)

    def test_csv_run_with_export(self, tmp_path, two_day_lines, capsys) -> None:
        prices = tmp_path / "prices.csv"
        prices.write_text("\n".join(two_day_lines) + "\n", encoding="utf-8")
        export = tmp_path / "out" / "instructions.csv"

        code = run_simulation.main([
            "--config", str(tmp_path / "missing.yaml"),
            "--input", str(prices),
            "-w", "2",
            "-l", "100",
            "--export", str(export),
        ])

        assert code == 0
        assert "113.75" in capsys.readouterr().out
        assert export.read_text(encoding="utf-8").splitlines()[0] == ",".join(INSTRUCTION_COLUMNS)

    def test_missing_input(self, tmp_path) -> None:
        code = run_simulation.main([
            "--config", str(tmp_path / "missing.yaml"),
            "--input", str(tmp_path / "nope.csv"),
        ])
        assert code == 1

    def test_invalid_override(self, tmp_path) -> None:
        code = run_simulation.main(["--config", str(tmp_path / "missing.yaml"), "--sample", "-w", "0"])
        assert code == 1

    def test_zero_open_fail_policy_returns_error_code(self, tmp_path, capsys) -> None:
        prices = tmp_path / "prices.csv"
        prices.write_text(
            "\n".join([make_line(LINE_D1, "A", 0, 1), make_line(LINE_D2, "A", 1, 2)]) + "\n",
            encoding="utf-8",
        )

        code = run_simulation.main([
            "--config", str(tmp_path / "missing.yaml"),
            "--input", str(prices),
            "-w", "2",
            "--zero-open-policy", "fail",
        ])

        assert code == 1
        out = capsys.readouterr().out
        assert "오류:" in out
        assert "[2024-01-02] A" in out
