"""Output layer — Rich console helpers and response formatting."""
