"""
slc - Simplelang Compiler Command-Line Interface
================================================

This module implements the command-line interface for the simplelang
compiler. It reads one source file and writes the symbolic assembly for
the 8-bit computer.

Usage Examples
--------------
Basic compilation:
    $ slc prog.sl

With output file:
    $ slc prog.sl -o prog.asm

Print to the terminal:
    $ slc prog.sl -o -

Inspect the front end:
    $ slc --tokens prog.sl
    $ slc --ast prog.sl

Verbose mode:
    $ slc -v prog.sl
"""

import logging
from pathlib import Path
from typing import Optional

import click

from eightbit_sdk import __version__
from eightbit_sdk.simplelang import SimpleLangCompiler, CompilerOptions
from eightbit_sdk.simplelang.ast import ASTPrinter
from eightbit_sdk.cli.errors import handle_cli_exception

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
    help="Output assembly file (default: input.asm, '-' for stdout)",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print AST and exit (for debugging)",
)
@click.option(
    "--symbols",
    is_flag=True,
    help="Print the variable memory map after compiling",
)
@click.option(
    "--allow-redeclaration",
    is_flag=True,
    help="Ignore repeated 'int x;' declarations instead of failing",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="slc")
def main(
    input_file: Path,
    output: Optional[Path],
    tokens: bool,
    ast: bool,
    symbols: bool,
    allow_redeclaration: bool,
    verbose: bool,
) -> None:
    """
    Compile simplelang source code for the 8-bit computer.

    INPUT_FILE is the simplelang source file to compile.

    \b
    Examples:
        slc prog.sl                  # Outputs prog.asm
        slc prog.sl -o out.asm       # Specify output file
        slc prog.sl -o -             # Write assembly to stdout
        slc --ast prog.sl            # Dump the syntax tree
        slc -v prog.sl               # Verbose output

    \b
    Exit codes:
        0  success
        1  compile error
        2  invalid arguments or missing file
        3  internal error
    """
    setup_logging(verbose)

    if output is None:
        output = input_file.with_suffix(".asm")
    to_stdout = str(output) == "-"

    options = CompilerOptions(allow_redeclaration=allow_redeclaration)
    compiler = SimpleLangCompiler(options)

    try:
        logger.debug("Compiling %s", input_file)
        source = input_file.read_text(encoding="utf-8")

        if tokens:
            for token in compiler.tokenize(source, str(input_file)):
                click.echo(repr(token))
            return

        result = compiler.compile_source(source, str(input_file))

        if ast:
            click.echo(ASTPrinter().print(result.ast))
            return

        if to_stdout:
            click.echo(result.assembly, nl=False)
        else:
            output.write_text(result.assembly, encoding="utf-8")

        # Status lines go to stderr when the assembly itself is on stdout
        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens", err=to_stdout)
            click.echo(f"Parsed: {len(result.ast.statements)} statements", err=to_stdout)
            click.echo(f"Generated: {len(result.instructions)} lines", err=to_stdout)

        if symbols:
            click.echo("Memory map:", err=to_stdout)
            for line in result.symbols.memory_map():
                click.echo(line, err=to_stdout)

        if not to_stdout:
            click.echo(f"Compiled {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
