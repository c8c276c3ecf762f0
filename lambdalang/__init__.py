"""lambdalang: an interpreter for a small dynamically-typed expression language.

Basic program flow:
    1. Character stream: source text one character at a time, tracking line/column (syntax/input.py)
    2. Token stream: classifies characters into numbers, strings, keywords, identifiers, punctuation and operators
       (syntax/tokenizer.py)
    3. Parser: recursive descent with precedence climbing, producing an immutable AST (syntax/parser.py, syntax/ast.py)
    4. Evaluator: walks the AST against a chain of lexical scopes (runtime/evaluator.py, runtime/environment.py)

The lang package wires these together for the command line: sessions, the shell and error reporting.
"""

__version__ = "0.1.0"
