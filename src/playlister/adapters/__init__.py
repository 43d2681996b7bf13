"""Host adapters for the editing session."""

__all__ = ["textual"]
