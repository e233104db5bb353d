"""Tree-walking evaluation and per-type operator semantics."""
