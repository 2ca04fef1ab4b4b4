from src.service.livestream.domain.enum.entity_kind import EntityKind

__all__ = ['EntityKind']
