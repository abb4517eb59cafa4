"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so services avoid SQL strings.
Each function takes an open connection; transactions belong to the caller.
"""
