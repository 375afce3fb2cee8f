"""CLI Argument Parsing"""

import argparse
import argcomplete

from commitgen import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='commitgen',
        description='Generate a conventional commit message for staged changes and commit it',
        epilog='Example: git add . && commitgen --lang=UA'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Unvalidated here: unknown languages fall back to the default silently
    parser.add_argument('--lang', type=str, metavar='EN|UA', help='Message language (COMMIT_LANG env var takes precedence)')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Claude API model name')
    parser.add_argument('--verbose', action='store_true', help='Show debug info (prompt size, backend used)')

    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
