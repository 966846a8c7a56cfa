"""Host adapters driving the editor core."""
