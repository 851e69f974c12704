"""
VaultGuard - session auto-lock and password generation core for a password vault
"""
VERSION = "1.0.0"
