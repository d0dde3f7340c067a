"""Entry points: `taskpad-server` (API) and `taskpad` (console board)."""
