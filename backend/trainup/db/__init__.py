from trainup.db.base import Base

__all__ = ["Base"]
