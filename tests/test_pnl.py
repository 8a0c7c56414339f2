"""Tests for stock_simulation.simulation.pnl."""

from datetime import date

import pytest

from stock_simulation.core.price_data import Allocation, InvestmentInstruction, PriceRecord
from stock_simulation.simulation.pnl import (
    ZeroOpenPricePolicy,
    ZeroOpeningPriceError,
    compute_pnl,
    join_by_date,
    realized_return,
)

D1 = date(2024, 1, 2)
D2 = date(2024, 1, 3)
D0 = date(2023, 12, 29)


def instruction(symbol: str, amount: float, target: date = D1, decision: date = D2) -> InvestmentInstruction:
    return InvestmentInstruction(decision, target, symbol, amount)


class TestRealizedReturn:
    def test_principal_plus_return(self) -> None:
        records = [PriceRecord("A", 10, 12), PriceRecord("B", 20, 19)]
        instructions = [instruction("A", 75), instruction("B", 25)]
        assert realized_return(D1, records, instructions) == pytest.approx(113.75)

    def test_unmatched_instruction_contributes_nothing(self) -> None:
        records = [PriceRecord("A", 10, 12)]
        instructions = [instruction("A", 50), instruction("ZZZ", 50)]
        assert realized_return(D1, records, instructions) == pytest.approx(60.0)

    def test_symbol_match_is_exact(self) -> None:
        records = [PriceRecord("a", 10, 12), PriceRecord("A ", 10, 12)]
        assert realized_return(D1, records, [instruction("A", 100)]) == 0.0

    def test_zero_open_skipped_by_default(self) -> None:
        records = [PriceRecord("A", 0, 5), PriceRecord("B", 10, 11)]
        instructions = [instruction("A", 50), instruction("B", 50)]
        assert realized_return(D1, records, instructions) == pytest.approx(55.0)

    def test_zero_open_fails_with_policy(self) -> None:
        with pytest.raises(ZeroOpeningPriceError) as exc_info:
            realized_return(D1, [PriceRecord("A", 0, 5)], [instruction("A", 50)], ZeroOpenPricePolicy.FAIL)
        assert exc_info.value.symbol == "A"
        assert exc_info.value.target_date == D1

    def test_zero_open_without_instruction_is_ignored(self) -> None:
        records = [PriceRecord("A", 0, 5)]
        assert realized_return(D1, records, [], ZeroOpenPricePolicy.FAIL) == 0.0


class TestJoinAndCompute:
    def test_inner_join_by_target_date(self) -> None:
        groups = {D2: (PriceRecord("A", 1, 2),), D1: (PriceRecord("A", 10, 11),)}
        allocations = [
            Allocation(D2, D1, (instruction("A", 100),)),
            Allocation(D1, D0, (instruction("A", 100, target=D0, decision=D1),)),
            None,
        ]
        joined = join_by_date(groups, allocations)
        assert [target for target, _, _ in joined] == [D1]

    def test_compute_pnl(self) -> None:
        groups = {D2: (PriceRecord("A", 12, 18),), D1: (PriceRecord("A", 10, 12), PriceRecord("B", 20, 19))}
        allocations = [Allocation(D2, D1, (instruction("A", 75), instruction("B", 25)))]
        assert compute_pnl(groups, allocations) == pytest.approx(113.75)

    def test_compute_pnl_without_allocations(self) -> None:
        assert compute_pnl({D1: ()}, []) == 0.0
