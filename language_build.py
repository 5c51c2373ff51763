from tree_sitter import Language, Parser
import tree_sitter_go
from loguru import logger

# Load the languages
GOGRAMMAR = Language(tree_sitter_go.language())

PARSERS = {
    'go': GOGRAMMAR,
}

# Parser function
def get_parser(language='go'):
    if language in PARSERS:
        parser = Parser(PARSERS[language])
        logger.debug(f"Loaded {language} grammar")
        return parser, language
    else:
        raise ValueError(f"Unsupported language: {language}")
