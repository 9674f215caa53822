# User Registry Database Schema
# Schema for the relational credential store (crm.db)

USER_REGISTRY_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,                               -- Optional display name
    email TEXT UNIQUE NOT NULL,              -- Normalized (trimmed, lower-cased)
    password_hash TEXT NOT NULL,             -- bcrypt hash, cost factor embedded
    role TEXT NOT NULL DEFAULT 'user',
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_users_email ON users(email);
"""
