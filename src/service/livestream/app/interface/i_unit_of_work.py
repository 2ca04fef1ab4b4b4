"""Re-export so use cases depend on the app layer, not on platform.database"""

from src.platform.database.unit_of_work import AbstractUnitOfWork

__all__ = ['AbstractUnitOfWork']
