"""Award voting domain logic: voting phases, vote pricing and results."""
