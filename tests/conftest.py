"""Point settings at the fake backend before the app is imported."""

import os

os.environ.setdefault("ROSTER_API_URL", "https://roster.test")
os.environ.setdefault("SESSION_SECRET_KEY", "test-secret")
os.environ.setdefault("SOUNDCLOUD_CLIENT_ID", "test-client-id")
os.environ.setdefault("SOUNDCLOUD_CLIENT_SECRET", "test-client-secret")
