"""Converter — parsing des unités, conversion et mise à l'échelle des tailles."""

import re

from bytefmt.models import (
    BASE_BINARY,
    DEFAULT_UNIT_TOKEN,
    MAX_EXPONENT,
    UNIT_SUFFIXES,
    Config,
    Conversion,
    ConversionRequest,
    Magnitude,
)

# Alias reconnus par exposant (insensible à la casse).
# Un jeton appartient au groupe s'il commence par l'un des alias.
# L'exposant 0 n'a pas besoin d'alias : c'est le repli par défaut.
UNIT_ALIASES = {
    1: ("k", "kb", "kilo", "kbyte", "kib"),
    2: ("m", "mb", "mega", "mbyte", "mib"),
    3: ("g", "gb", "giga", "gbyte", "gib"),
    4: ("t", "tb", "tera", "tbyte", "tib"),
    5: ("p", "pb", "peta", "pbyte", "pib"),
    6: ("e", "eb", "exa", "ebyte", "eib"),
    7: ("z", "zb", "zetta", "zeta", "zib"),
    8: ("y", "yb", "yotta", "yota", "yib"),
}

_NUMBER_PATTERN = re.compile(r"[0-9.]+")
_UNIT_PATTERN = re.compile(r"[A-Za-z]+")


class BytefmtError(ValueError):
    """Erreur fatale de conversion."""


class MissingValueError(BytefmtError):
    """Aucune valeur numérique exploitable dans le champ."""


class InvalidExponentError(BytefmtError):
    """Exposant hors de la table des unités."""


def parse_unit(token: str) -> int:
    """Retourne l'exposant (0-8) d'un jeton d'unité libre.

    Ne lève jamais d'erreur : un jeton vide ou inconnu vaut 0 (octets).
    """
    token = token.lower()
    for exponent, aliases in UNIT_ALIASES.items():
        if token.startswith(aliases):
            return exponent
    return 0


def factor(exponent: int, base: int = BASE_BINARY) -> int:
    """Nombre d'octets dans une unité : base ** exposant."""
    return base ** exponent


def convert_fixed(nbytes: float, exponent: int, base: int = BASE_BINARY) -> float:
    """Convertit des octets vers l'unité demandée, sans contrainte de plage."""
    return nbytes / factor(exponent, base)


def scale_dynamic(nbytes: float, base: int = BASE_BINARY) -> Magnitude:
    """Choisit le plus petit exposant tel que 0 <= valeur < base.

    Au-delà des yotta, l'exposant reste plafonné à 8 et la valeur
    peut dépasser la base.
    """
    for exponent in range(MAX_EXPONENT + 1):
        value = convert_fixed(nbytes, exponent, base)
        if 0 <= value < base:
            return Magnitude(value, exponent)
    return Magnitude(convert_fixed(nbytes, MAX_EXPONENT, base), MAX_EXPONENT)


def unit_suffix(exponent: int) -> str:
    """Suffixe normalisé d'un exposant (B, KiB, … YiB)."""
    if not 0 <= exponent <= MAX_EXPONENT:
        raise InvalidExponentError(
            f"Exposant invalide : {exponent} (attendu entre 0 et {MAX_EXPONENT})"
        )
    return UNIT_SUFFIXES[exponent]


def format_size(value: float, suffix: str) -> str:
    """Formate une taille : 7 caractères, 2 décimales, espace, suffixe."""
    return f"{value:7.2f} {suffix}"


def parse_field(raw: str, config: Config) -> ConversionRequest:
    """Extrait la valeur numérique et le jeton d'unité d'un champ."""
    number = _NUMBER_PATTERN.search(raw)
    if number is None:
        raise MissingValueError(f"Aucune valeur numérique dans {raw!r}")

    if config.input_unit:
        unit = config.input_unit
    else:
        match = _UNIT_PATTERN.search(raw)
        unit = match.group() if match else DEFAULT_UNIT_TOKEN

    return ConversionRequest(number.group(), unit, config.base)


def convert(
    request: ConversionRequest,
    output_unit: str | None = None,
) -> Conversion:
    """Convertit une requête en octets puis vers l'unité de sortie.

    Avec une unité de sortie explicite, le suffixe est le jeton tel que
    saisi ("K" et non "KiB"). Sinon l'unité est choisie dynamiquement.
    """
    try:
        value = float(request.value)
    except ValueError:
        raise MissingValueError(
            f"Valeur numérique illisible : {request.value!r}"
        ) from None

    nbytes = value * factor(parse_unit(request.unit), request.base)

    if output_unit:
        exponent = parse_unit(output_unit)
        return Conversion(
            nbytes=nbytes,
            value=convert_fixed(nbytes, exponent, request.base),
            suffix=output_unit,
        )

    scaled = scale_dynamic(nbytes, request.base)
    return Conversion(
        nbytes=nbytes,
        value=scaled.value,
        suffix=unit_suffix(scaled.exponent),
        exponent=scaled.exponent,
    )


def convert_field(raw: str, config: Config) -> str:
    """Retourne le texte de remplacement d'un champ."""
    result = convert(parse_field(raw, config), config.output_unit)
    return format_size(result.value, result.suffix)
