"""Test environment: a signing secret and cheap bcrypt cost before the app is imported."""

import os

os.environ.setdefault("JWT_SECRET", "test-signing-secret-0123456789abcdefghijkl")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RAINBET_API_KEY", "test-rainbet-key")
