"""Core of calcparse: lexer, parsers, expression IR, and evaluator."""
