"""Source text to syntax tree: tokens, lexer, AST nodes and parser."""
