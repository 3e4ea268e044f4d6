"""LineFilter — réécriture du champ de taille dans chaque ligne."""

from collections.abc import Callable, Iterable, Iterator

from bytefmt.converter import MissingValueError, convert, format_size, parse_field
from bytefmt.models import Config, Conversion

Trace = Callable[[str, Conversion], None]


def process_line(line: str, config: Config, trace: Trace | None = None) -> str:
    """Convertit le champ configuré d'une ligne et la recompose.

    La fin de ligne est retirée ; la ligne retournée n'en a pas.
    """
    fields = line.rstrip("\r\n").split(config.delimiter)
    if config.field >= len(fields):
        raise MissingValueError(
            f"Champ {config.field} absent ({len(fields)} champ(s) dans la ligne)"
        )

    raw = fields[config.field]
    result = convert(parse_field(raw, config), config.output_unit)
    if trace is not None:
        trace(raw, result)

    fields[config.field] = format_size(result.value, result.suffix)
    return config.delimiter.join(fields)


def process_lines(
    lines: Iterable[str],
    config: Config,
    trace: Trace | None = None,
) -> Iterator[str]:
    """Traite les lignes une à une, dans l'ordre d'entrée.

    La première erreur interrompt le flux : aucune ligne suivante n'est
    produite.
    """
    for line in lines:
        yield process_line(line, config, trace)
