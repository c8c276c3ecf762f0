"""Scopes and the AST-walking evaluator."""
