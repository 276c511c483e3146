"""Blackjack scoring, moves, table configuration and the command-line entry point."""
