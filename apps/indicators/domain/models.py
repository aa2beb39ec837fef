"""
Pure domain entities (POPOs).
No dependency on Django or the HTTP transport.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class IndicatorCode(Enum):
    """Series published by the SBIF API."""

    UF = 100
    UTM = 200
    DOLLAR = 300
    EURO = 400
    IPC = 500
    INSTITUTION_PROFILE = 600

    @property
    def path(self) -> str:
        return _PATHS[self]

    @property
    def response_field(self) -> str:
        return _RESPONSE_FIELDS[self]

    @property
    def is_daily(self) -> bool:
        return self in _DAILY

    @property
    def is_numeric(self) -> bool:
        return self is not IndicatorCode.INSTITUTION_PROFILE

    @classmethod
    def numeric(cls) -> list["IndicatorCode"]:
        return [code for code in cls if code.is_numeric]

    @classmethod
    def from_name(cls, name: str) -> "IndicatorCode":
        """
        Resolve an indicator from its public name (e.g. "dolar", "uf").

        Raises:
            ValueError: if the name is not a known numeric indicator
        """
        try:
            return _ALIASES[name.strip().lower()]
        except (KeyError, AttributeError):
            raise ValueError(f"Unknown indicator '{name}'")


_PATHS = {
    IndicatorCode.UF: "uf",
    IndicatorCode.UTM: "utm",
    IndicatorCode.DOLLAR: "dolar",
    IndicatorCode.EURO: "euro",
    IndicatorCode.IPC: "ipc",
    IndicatorCode.INSTITUTION_PROFILE: "perfil/instituciones",
}

_RESPONSE_FIELDS = {
    IndicatorCode.UF: "UFs",
    IndicatorCode.UTM: "UTMs",
    IndicatorCode.DOLLAR: "Dolares",
    IndicatorCode.EURO: "Euros",
    IndicatorCode.IPC: "IPCs",
    IndicatorCode.INSTITUTION_PROFILE: "Perfiles",
}

_DAILY = frozenset({IndicatorCode.UF, IndicatorCode.DOLLAR, IndicatorCode.EURO})

_ALIASES = {
    "uf": IndicatorCode.UF,
    "utm": IndicatorCode.UTM,
    "dolar": IndicatorCode.DOLLAR,
    "dollar": IndicatorCode.DOLLAR,
    "usd": IndicatorCode.DOLLAR,
    "euro": IndicatorCode.EURO,
    "eur": IndicatorCode.EURO,
    "ipc": IndicatorCode.IPC,
}


@dataclass(frozen=True)
class NumericValue:

    code: IndicatorCode
    value: float

    def __post_init__(self):
        if not self.code.is_numeric:
            raise ValueError(f"{self.code.name} is not a numeric indicator")


@dataclass(frozen=True)
class InstitutionProfile:
    """Profile record of a regulated institution, passed through as returned by the API."""

    data: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __bool__(self) -> bool:
        return bool(self.data)


IndicatorValue = Union[NumericValue, InstitutionProfile]
