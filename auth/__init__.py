"""auth/ -- Accounts, credentials, and session tokens for IdeaBoard.

Layer rule: auth/ imports only stdlib + third-party libraries + core/.
It does NOT import from api/ or projects/.
api/ and projects/ import from auth/, not the other way around.
"""
