from lexer import Lexer
from parser import Parser
from environment import Environment
from evaluator import Evaluator
from pretty_printer import PrettyPrinter


def lex(text: str):
    """Return a list of tokens for the given source text."""
    return Lexer(text).tokenize()


def parse_text(text: str):
    """Convenience: lex+parse a source text into an AST."""
    return Parser(Lexer(text).tokenize()).parse()


def render_text(text: str) -> str:
    """Parse `text` and return its canonical rendering."""
    return PrettyPrinter.render(parse_text(text))


def run_text(text: str, env=None, strict_arity: bool = False):
    """Lex, parse and evaluate `text` in a fresh root environment."""
    if env is None:
        env = Environment()
    return Evaluator(strict_arity=strict_arity).eval_program(parse_text(text), env)
