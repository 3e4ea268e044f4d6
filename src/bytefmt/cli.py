"""Interface CLI pour bytefmt."""

import click
from rich.console import Console
from rich.markup import escape

from bytefmt import __version__
from bytefmt.converter import BytefmtError
from bytefmt.line_filter import process_lines
from bytefmt.models import DEFAULT_DELIMITER, Config, Conversion

console = Console(stderr=True)

# Les octets non UTF-8 (noms de fichiers de ``du``) traversent le filtre
# tels quels : surrogates à la lecture, mêmes octets à l'écriture.
ENCODING = "utf-8"
ERRORS = "surrogateescape"


def _decode_delimiter(ctx, param, value):
    """Décode les séquences d'échappement ("\\t", "\\x1f") du délimiteur."""
    try:
        decoded = value.encode("latin-1", "backslashreplace").decode(
            "unicode_escape",
        )
    except UnicodeError as e:
        raise click.BadParameter(f"Séquence d'échappement invalide : {e}")
    if not decoded:
        raise click.BadParameter("Le délimiteur ne peut pas être vide.")
    return decoded


def _trace(raw: str, result: Conversion) -> None:
    """Affiche le détail d'une conversion sur stderr."""
    exponent = "fixe" if result.exponent is None else result.exponent
    console.print(
        f"[dim]{escape(repr(raw))} → {result.nbytes:.0f} octets"
        f" → {result.value:.2f} {escape(result.suffix)} (exposant {exponent})[/dim]"
    )


@click.command()
@click.version_option(version=__version__)
@click.argument(
    "files", nargs=-1,
    type=click.File("r", encoding=ENCODING, errors=ERRORS),
)
@click.option(
    "--delimiter", "-d",
    default=DEFAULT_DELIMITER,
    show_default="TAB",
    callback=_decode_delimiter,
    help="Séparateur de champs (échappements acceptés : \\t, \\x1f…).",
)
@click.option(
    "--field", "-f",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Index (à partir de 0) du champ contenant la taille.",
)
@click.option(
    "--input-unit", "-i",
    default=None,
    help="Unité d'entrée forcée (b, k, MiB, giga…).",
)
@click.option(
    "--output-unit", "-o",
    default=None,
    help="Unité de sortie forcée, affichée telle quelle.",
)
@click.option(
    "--base10", "-s",
    is_flag=True, default=False,
    help="Base 1000 au lieu de 1024.",
)
@click.option(
    "--debug",
    is_flag=True, default=False,
    help="Détailler chaque conversion sur stderr.",
)
@click.pass_context
def cli(ctx, files, delimiter, field, input_unit, output_unit, base10, debug):
    """Convertir en unités lisibles les tailles en octets d'un flux de lignes.

    Lit chaque fichier de FILES (ou l'entrée standard), remplace le champ désigné par
    une taille formatée et écrit la ligne sur la sortie standard.

    \b
    Exemple :
      du -b * | sort -n | bytefmt
    """
    config = Config(
        delimiter=delimiter,
        field=field,
        input_unit=input_unit or None,
        output_unit=output_unit or None,
        base10=base10,
        debug=debug,
    )
    if not files:
        files = (click.open_file("-", "r", encoding=ENCODING, errors=ERRORS),)

    trace = _trace if config.debug else None
    for stream in files:
        name = str(getattr(stream, "name", "<stdin>"))
        lineno = 0
        try:
            for lineno, line in enumerate(
                process_lines(stream, config, trace), start=1,
            ):
                click.echo(line.encode(ENCODING, ERRORS))
        except BytefmtError as e:
            console.print(
                f"[red]Erreur ligne {lineno + 1}[/red]"
                f" ({escape(click.format_filename(name))}) : {escape(str(e))}"
            )
            click.echo(ctx.get_usage(), err=True)
            ctx.exit(1)
