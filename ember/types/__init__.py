"""Runtime values and the scope chain they are bound in."""
