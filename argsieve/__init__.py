__version__ = "0.1.0"

__all__ = [
    "ArgsieveError",
    "ArgsievePanel",
    "Coerced",
    "ErrorReport",
    "FLAG",
    "Help",
    "Kind",
    "Param",
    "ParseError",
    "ParseOutcome",
    "Parser",
    "Presence",
    "RawArguments",
    "SchemaError",
    "Token",
    "UNSET",
    "integer",
    "number",
    "parse",
    "split",
    "tokenize",
]

from argsieve.bind import ErrorReport, ParseOutcome
from argsieve.coercion import Coerced, integer, number
from argsieve.core import Parser, parse
from argsieve.exceptions import ArgsieveError, ParseError, SchemaError
from argsieve.help import Help
from argsieve.panel import ArgsievePanel
from argsieve.parameter import FLAG, Kind, Param, Presence
from argsieve.split import RawArguments, split
from argsieve.token import Token
from argsieve.tokenizer import tokenize
from argsieve.utils import UNSET
