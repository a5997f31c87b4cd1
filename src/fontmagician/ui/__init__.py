"""User interfaces for fontmagician."""
