"""Livestream Domain Value Objects"""

from src.service.livestream.domain.value_object.caller_identity import CallerIdentity
from src.service.livestream.domain.value_object.reservation_term import ReservationTerm

__all__ = ['CallerIdentity', 'ReservationTerm']
