# decl_parser.py
import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from loguru import logger

from language_build import get_parser


class DeclKind(Enum):
    """Coarse classification of a top-level declaration. The value is the printed label."""
    GENERAL = 'general'
    FUNC = 'func'
    OTHER = 'def'


GENERAL_DECLARATIONS = {
    'import_declaration',
    'const_declaration',
    'var_declaration',
    'type_declaration',
}

FUNC_DECLARATIONS = {
    'function_declaration',
    'method_declaration',
}

# Top-level nodes that are not declarations
NON_DECLARATIONS = {'package_clause', 'comment'}

GO_KEYWORDS = {
    'break', 'case', 'chan', 'const', 'continue', 'default', 'defer', 'else',
    'fallthrough', 'for', 'func', 'go', 'goto', 'if', 'import', 'interface',
    'map', 'package', 'range', 'return', 'select', 'struct', 'switch', 'type',
    'var',
}

IDENTIFIER_PATTERN = re.compile(r'[^\W\d]\w*')
TOKEN_PATTERN = re.compile(r'[^\W\d]\w*|\d[\w.]*|"(?:\\.|[^"\\\n])*"?|`[^`]*`?|\'(?:\\.|[^\'\\\n])*\'?|\S')


class ParseFailure(Exception):
    """The file could not be read or is not syntactically valid Go."""


@dataclass(frozen=True)
class Declaration:
    kind: DeclKind
    node_type: str
    rendering: str
    line: int
    column: int
    token: str = ''
    name: str = ''
    receiver: bool = False

    @property
    def label(self) -> str:
        return self.kind.value

    def __str__(self) -> str:
        return f"{self.label} {self.rendering}"


@dataclass(frozen=True)
class ParsedFile:
    file_path: str
    package: str
    declarations: Tuple[Declaration, ...]


def classify_node(node) -> DeclKind:
    """Map a top-level node onto its declaration kind."""
    if node.type in GENERAL_DECLARATIONS:
        return DeclKind.GENERAL
    if node.type in FUNC_DECLARATIONS:
        return DeclKind.FUNC
    return DeclKind.OTHER


def _position(point) -> str:
    row, column = point
    return f"{row + 1}:{column + 1}"


def _first_token(source: bytes, node) -> str:
    text = source[node.start_byte:node.end_byte].decode('utf8', errors='replace')
    match = TOKEN_PATTERN.search(text)
    return match.group(0) if match else 'EOF'


def _found(token: str) -> str:
    """Quote keywords, operators and EOF; identifiers and literals stay bare."""
    if token in GO_KEYWORDS or token == 'EOF':
        return f"'{token}'"
    if IDENTIFIER_PATTERN.fullmatch(token) or token[0].isdigit() or token[0] in '"`\'':
        return token
    return f"'{token}'"


class DeclarationParser:
    def __init__(self, language='go'):
        self.parser, self.language = get_parser(language)

    def _find_error(self, node):
        """Return the first ERROR or missing node in source order, if any."""
        if node.type == 'ERROR' or node.is_missing:
            return node
        if not node.has_error:
            return None
        for child in node.children:
            found = self._find_error(child)
            if found is not None:
                return found
        return None

    def _check_package_clause(self, root, source: bytes, filename: str) -> str:
        for child in root.named_children:
            if child.type == 'comment':
                continue
            if child.type != 'package_clause':
                raise ParseFailure(
                    f"{filename}:{_position(child.start_point)}: "
                    f"expected 'package', found {_found(_first_token(source, child))}"
                )
            for part in child.named_children:
                if part.type == 'package_identifier':
                    return source[part.start_byte:part.end_byte].decode('utf8')
            return ''
        raise ParseFailure(f"{filename}:{_position(root.end_point)}: expected 'package', found 'EOF'")

    def _check_syntax(self, root, source: bytes, filename: str) -> None:
        error = self._find_error(root)
        if error is None:
            return
        if error.is_missing:
            message = f"syntax error: missing '{error.type}'"
        else:
            message = f"syntax error: unexpected {_found(_first_token(source, error))}"
        raise ParseFailure(f"{filename}:{_position(error.start_point)}: {message}")

    def _check_top_level(self, root, filename: str) -> None:
        """Only one package clause, then declarations and comments."""
        seen_package = False
        for child in root.named_children:
            if child.type == 'comment':
                continue
            if child.type == 'package_clause':
                if seen_package:
                    raise ParseFailure(
                        f"{filename}:{_position(child.start_point)}: expected declaration, found 'package'"
                    )
                seen_package = True
            elif child.type not in GENERAL_DECLARATIONS | FUNC_DECLARATIONS:
                raise ParseFailure(
                    f"{filename}:{_position(child.start_point)}: "
                    f"syntax error: non-declaration statement outside function body"
                )

    def _build_declaration(self, node, source: bytes) -> Declaration:
        kind = classify_node(node)
        token = ''
        name = ''
        if kind is DeclKind.GENERAL and node.children:
            token = node.children[0].type
        elif kind is DeclKind.FUNC:
            name_node = node.child_by_field_name('name')
            if name_node is not None:
                name = source[name_node.start_byte:name_node.end_byte].decode('utf8')
        row, column = node.start_point
        return Declaration(
            kind=kind,
            node_type=node.type,
            rendering=str(node),
            line=row + 1,
            column=column + 1,
            token=token,
            name=name,
            receiver=node.type == 'method_declaration',
        )

    def parse_source(self, source: bytes, filename: Optional[str] = None) -> ParsedFile:
        """Parse Go source and return its top-level declarations in source order.

        Raises ParseFailure when the source has no leading package clause,
        contains a syntax error, or has anything other than declarations at
        top level. No partial result is returned in that case.
        """
        filename = filename or '<input>'
        tree = self.parser.parse(source)
        root = tree.root_node

        package = self._check_package_clause(root, source, filename)
        self._check_syntax(root, source, filename)
        self._check_top_level(root, filename)

        declarations = tuple(
            self._build_declaration(child, source)
            for child in root.named_children
            if child.type not in NON_DECLARATIONS
        )
        logger.debug(f"Found {len(declarations)} declarations in {filename}")
        return ParsedFile(file_path=filename, package=package, declarations=declarations)

    def parse_file(self, file_path: str) -> ParsedFile:
        """Read and parse a single Go source file."""
        try:
            with open(file_path, 'rb') as f:
                source = f.read()
        except OSError as e:
            reason = (e.strerror or str(e)).lower()
            raise ParseFailure(f"open {file_path}: {reason}") from e

        logger.debug(f"Read {len(source)} bytes from {os.path.abspath(file_path)}")
        return self.parse_source(source, file_path)
