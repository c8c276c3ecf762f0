"""Character stream, tokenizer, AST and parser."""
