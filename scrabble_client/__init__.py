"""Client for a server-authoritative Scrabble-like board game."""
