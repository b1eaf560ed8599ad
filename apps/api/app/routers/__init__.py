from app.routers import accounts, health, locations, members

__all__ = [
    "health",
    "locations",
    "accounts",
    "members",
]
