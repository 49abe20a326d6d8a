"""
Database schema for saved games.

Tables:
    histories   - One row per saved GameHistory (JSON body plus indexed columns)
    preferences - Key-value store for player names and settings

Indexes:
    idx_hist_created - Newest-first listing
"""

SCHEMA = """
CREATE TABLE IF NOT EXISTS histories (
    game_id INTEGER PRIMARY KEY AUTOINCREMENT,
    seed INTEGER NOT NULL,
    board_size INTEGER NOT NULL,
    player1 TEXT NOT NULL,
    player2 TEXT NOT NULL,
    score1 INTEGER,
    score2 INTEGER,
    body TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE INDEX IF NOT EXISTS idx_hist_created ON histories(created_at);

CREATE TABLE IF NOT EXISTS preferences (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""
