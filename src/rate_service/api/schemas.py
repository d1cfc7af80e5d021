# 🧾 rate_service/api/schemas.py
"""
🧾 DTO HTTP-шару: тіло запиту `/convert` та відповіді.

🔹 На дроті поля називаються `from` / `to` (зарезервовані слова Python → аліаси).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from pydantic import BaseModel, ConfigDict, Field

# 🔠 Системні імпорти
from typing import List

# 🧩 Внутрішні модулі проєкту
from rate_service.domain.currency.interfaces import ConversionResult


class ConvertRequest(BaseModel):
    """📥 Запит на конвертацію."""

    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from", min_length=1, max_length=8)
    target: str = Field(alias="to", min_length=1, max_length=8)
    amount: float = Field(allow_inf_nan=False)                       # ➕ додатність перевіряє сервіс (400)


class ConvertResponse(BaseModel):
    """📤 Результат конвертації (символи у верхньому регістрі, 4 знаки після коми)."""

    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")
    amount: float
    result: float

    @classmethod
    def from_result(cls, result: ConversionResult) -> "ConvertResponse":
        return cls(source=result.source, target=result.target, amount=result.amount, result=result.result)


class CurrenciesResponse(BaseModel):
    currencies: List[str]


class ErrorResponse(BaseModel):
    detail: str


__all__ = ["ConvertRequest", "ConvertResponse", "CurrenciesResponse", "ErrorResponse"]
