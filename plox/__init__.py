"""plox: tree-walking interpreter for a small dynamically-typed scripting language.

Basic program flow:
    1. Scanner (plox.core.scanner): source text -> flat list of Tokens
    2. Parser (plox.core.parser): Tokens -> list of statement nodes (plox.core.ast), 'for' desugared to 'while'
    3. Interpreter (plox.core.interpreter): walks the statements, storing variables in a chain of Environments

plox.lang wraps the pipeline for hosts: error reporting, sessions, the interactive shell and logging.
"""

__version__ = "0.1.0"
