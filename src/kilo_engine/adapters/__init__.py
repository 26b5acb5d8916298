"""Host adapters embedding the engine in other UI toolkits."""
