import sys
from typing import List, Optional

from loguru import logger

from decl_config import Config
from decl_logging import setup_console_only
from decl_parser import DeclarationParser, ParseFailure


def resolve_path(argv: List[str], default_path: Optional[str] = None) -> Optional[str]:
    """Pick the input file: the first argument, else the default if there is one."""
    if argv:
        return argv[0]
    return default_path


def run(argv: List[str], default_path: Optional[str] = None, out=None) -> int:
    """Classify the top-level declarations of one Go file and print a line per declaration."""
    out = out if out is not None else sys.stdout

    file_path = resolve_path(argv, default_path)
    if file_path is None:
        print("File required", file=out)
        return 1

    parser = DeclarationParser()
    try:
        parsed = parser.parse_file(file_path)
    except ParseFailure as e:
        logger.debug(f"Parse failed for {file_path}: {e}")
        print("error", e, file=out)
        return 1

    for declaration in parsed.declarations:
        print(declaration, file=out)
    return 0


def main():
    config = Config.from_env()
    setup_console_only(config.log_level)
    sys.exit(run(sys.argv[1:]))


def main_default():
    config = Config.from_env()
    setup_console_only(config.log_level)
    sys.exit(run(sys.argv[1:], default_path=config.default_file))


if __name__ == "__main__":
    main()
