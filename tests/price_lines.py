"""테스트용 원시 가격 라인 헬퍼."""

from datetime import date

HEADER = "timestamp,open,high,low,close,adjusted_close,volume,dividend_amount,split_coefficient,symbol"

D1 = date(2024, 1, 2)  # 과거
D2 = date(2024, 1, 3)  # 최신


def make_line(day: date, symbol: str, open_price: float, adjusted_close: float) -> str:
    """원시 라인 한 줄 (high/low/close는 의미 없는 값)."""
    return f"{day.isoformat()},{open_price},0,0,0,{adjusted_close},1000,0.0,1.0,{symbol}"
