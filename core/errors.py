"""
Error Types for Ask George SMS Search

User-recoverable errors are turned into friendly replies by the
orchestrator. Everything else fails the request.
"""


class AskGeorgeError(Exception):
    """Base class for all errors raised by this package"""


# ============================================
# USER-RECOVERABLE
# ============================================

class AddressNotFoundError(AskGeorgeError):
    """The geocoder found no match for the search string"""

    def __init__(self, search_str: str):
        super().__init__(f"No geocode match for '{search_str}'")
        self.search_str = search_str


class AmbiguousAddressError(AskGeorgeError):
    """The geocoder matched more than one address"""

    def __init__(self, search_str: str, match_count: int):
        super().__init__(f"{match_count} geocode matches for '{search_str}'")
        self.search_str = search_str
        self.match_count = match_count


# ============================================
# DATA INTEGRITY
# ============================================

class DataIntegrityError(AskGeorgeError):
    """Stored state violates an invariant"""


class DuplicateSessionError(DataIntegrityError):
    """More than one session row exists for a sender"""

    def __init__(self, sender: str):
        super().__init__(f"Duplicate session for {sender}")
        self.sender = sender


class MissingLocationError(DataIntegrityError):
    """A pagination request found no stored search location"""

    def __init__(self, sender: str):
        super().__init__(f"No active location stored for {sender}")
        self.sender = sender


# ============================================
# COLLABORATORS
# ============================================

class ProviderError(AskGeorgeError):
    """An external provider returned an error or unusable response"""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
