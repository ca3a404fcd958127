"""
Core Module - Session, Search and Reply Components
"""
from .errors import (
    AskGeorgeError,
    AddressNotFoundError,
    AmbiguousAddressError,
    DataIntegrityError,
    DuplicateSessionError,
    MissingLocationError,
    ProviderError,
)
from .store import Store, MemoryStore, RedisStore
from .session import SenderState, SenderLocks, classify_sender
from .background import BackgroundWrites
from .enrichment import enrich_page, choose_display_hours
from .formatter import format_distance, render_point, render_page
from .orchestrator import SessionOrchestrator

__all__ = [
    # Errors
    'AskGeorgeError',
    'AddressNotFoundError',
    'AmbiguousAddressError',
    'DataIntegrityError',
    'DuplicateSessionError',
    'MissingLocationError',
    'ProviderError',

    # Stores
    'Store',
    'MemoryStore',
    'RedisStore',

    # Session
    'SenderState',
    'SenderLocks',
    'classify_sender',
    'BackgroundWrites',

    # Replies
    'enrich_page',
    'choose_display_hours',
    'format_distance',
    'render_point',
    'render_page',
    'SessionOrchestrator',
]
