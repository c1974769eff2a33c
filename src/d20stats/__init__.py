"""d20stats - derived character statistics for d20 (3.5 edition) rules."""
