"""Host adapters for UI toolkits."""
