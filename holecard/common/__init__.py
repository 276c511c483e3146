"""Cards, decks and the input/output contract shared by the engine."""
