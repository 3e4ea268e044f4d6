"""Structures de données partagées pour bytefmt."""

from dataclasses import dataclass

# Suffixes affichés par exposant (0 = octets … 8 = yotta).
# Le suffixe ne dépend pas de la base choisie.
UNIT_SUFFIXES = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB")
MAX_EXPONENT = len(UNIT_SUFFIXES) - 1

BASE_BINARY = 1024
BASE_DECIMAL = 1000

DEFAULT_DELIMITER = "\t"
DEFAULT_UNIT_TOKEN = "b"


@dataclass(frozen=True)
class Config:
    """Options d'une exécution, construites une seule fois depuis la CLI."""

    delimiter: str = DEFAULT_DELIMITER
    field: int = 0
    input_unit: str | None = None
    output_unit: str | None = None
    base10: bool = False
    debug: bool = False

    @property
    def base(self) -> int:
        """Base utilisée pour tous les facteurs (1000 ou 1024)."""
        return BASE_DECIMAL if self.base10 else BASE_BINARY


@dataclass(frozen=True)
class ConversionRequest:
    """Valeur brute extraite d'un champ, prête à convertir."""

    value: str
    unit: str
    base: int = BASE_BINARY


@dataclass(frozen=True)
class Magnitude:
    """Quantité associée à un exposant d'unité."""

    value: float
    exponent: int


@dataclass(frozen=True)
class Conversion:
    """Résultat de la conversion d'un champ."""

    nbytes: float
    value: float
    suffix: str
    exponent: int | None = None
