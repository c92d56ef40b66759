"""Brazilian individual taxpayer number (CPF)."""

import re
from dataclasses import dataclass

_NON_DIGITS = re.compile(r"\D")


def _check_digit(digits: str) -> int:
    weight = len(digits) + 1
    total = sum(int(d) * (weight - i) for i, d in enumerate(digits))
    rest = (total * 10) % 11
    return 0 if rest == 10 else rest


def is_valid_cpf(raw: str) -> bool:
    """Check length, repeated digits and both check digits."""
    digits = _NON_DIGITS.sub("", raw or "")
    if len(digits) != 11 or digits == digits[0] * 11:
        return False
    return _check_digit(digits[:9]) == int(digits[9]) and _check_digit(
        digits[:10]
    ) == int(digits[10])


@dataclass(frozen=True)
class Cpf:
    """CPF normalized to its 11 digits."""

    value: str

    def __post_init__(self) -> None:
        if not is_valid_cpf(self.value):
            raise ValueError("CPF inválido")
        object.__setattr__(self, "value", _NON_DIGITS.sub("", self.value))

    def formatted(self) -> str:
        v = self.value
        return f"{v[:3]}.{v[3:6]}.{v[6:9]}-{v[9:]}"
