"""
INITLANG CLI Entrypoint.

Runs the INITLANG front end over a source file or an inline string and prints
either the token stream or the parsed AST.

Features:
    - Read source from `.il` files or inline strings.
    - Dump tokens (`--tokens`) or the AST as indented JSON (default).
    - Output to console or file.
    - Source-pointing diagnostics on stderr for lexing/parsing failures.

Example usage:
    initlang hello.il
    initlang -s "let x ==> 5" --tokens
    initlang hello.il -o hello.ast.json --pretty

Functions:
    run_initlang(source: str, is_string: bool = False, tokens: bool = False,
                 out: str | None = None, pretty: bool = False) -> int:
        Executes the front end (lex → parse → dump) and returns an exit code.

    main() -> None:
        Parses CLI arguments and invokes `run_initlang`.
"""

import argparse
import json
import sys

from initlang.initlang_ast import to_dict
from initlang.initlang_frontend import parse_source, tokenize_source
from initlang.initlang_lexer import Token

SOURCE_SUFFIX = ".il"


def format_tokens(tokens: list[Token]) -> str:
    rows = [
        f"{tok.line:>4}:{tok.column:<4} {tok.kind.value:<12} {tok.text!r}"
        for tok in tokens
    ]
    return "\n".join(rows)


def run_initlang(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    out: str | None = None,
    pretty: bool = False,
) -> int:
    """
    Run the INITLANG front end and print or write the result.

    Args:
        source (str): INITLANG source code or a path to a `.il` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        tokens (bool): If True, dumps the token stream instead of the AST.
        out (str | None): Optional path to write the output. If None, prints to stdout.
        pretty (bool): If True, prints banners around the output.

    Returns:
        int: 0 on success, 1 if lexing or parsing failed.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.il'.
    """
    if not is_string and not source.endswith(SOURCE_SUFFIX):
        raise ValueError(f"Only {SOURCE_SUFFIX} files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lex or parse
    if tokens:
        lexed = tokenize_source(source)
        if not lexed.ok:
            print(lexed.diagnostic(), file=sys.stderr, end="")
            return 1
        output = format_tokens(lexed.tokens)
        title = "Tokens"
    else:
        parsed = parse_source(source)
        if not parsed.ok:
            print(parsed.diagnostic(), file=sys.stderr, end="")
            return 1
        output = json.dumps(to_dict(parsed.unwrap()), indent=2)
        title = "AST"

    # 3. Output result
    if pretty:
        banner = "=" * 20
        print(f"{banner}\n{title}\n{banner}\n{output}\n{banner}\n")
    elif not out:
        print(output)

    # 4. Optional write to file
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        if pretty:
            print(f"(wrote to {out})")

    return 0


def main() -> None:
    """
    Entry point for the `initlang` command.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Dump tokens instead of the AST.
        - `-o`, `--out`: Write output to a file.
        - `-p`, `--pretty`: Show banners around the output.
    """
    parser = argparse.ArgumentParser(prog="initlang")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Dump the token stream instead of the AST"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )

    args = parser.parse_args()

    try:
        code = run_initlang(
            source=args.source,
            is_string=args.string,
            tokens=args.tokens,
            out=args.out,
            pretty=args.pretty,
        )
    except (ValueError, OSError) as e:
        print(f"initlang: {e}", file=sys.stderr)
        code = 2
    sys.exit(code)


if __name__ == "__main__":
    main()
