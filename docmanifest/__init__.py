"""Documentation-comment interpreter and example manifest compiler."""
