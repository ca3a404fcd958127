"""
Session Orchestrator
Turns one inbound SMS into one reply: help text, a new search, or the next page
"""

from datetime import datetime
from typing import Callable

from config import (
    HELP_TEXT,
    MULTIPLE_MATCHES_TEXT,
    NO_MORE_RESULTS_TEXT,
    NOT_FOUND_TEXT,
    PAGE_SIZE,
    get_eastern_now,
    get_logger,
)
from core.background import BackgroundWrites
from core.enrichment import enrich_page
from core.errors import (
    AddressNotFoundError,
    AmbiguousAddressError,
    DataIntegrityError,
    MissingLocationError,
)
from core.formatter import render_page
from core.session import SenderLocks, SenderState, classify_sender
from core.store import Store
from models import InboundMessage, SearchQuery
from tracing import tracer
from utils import build_search_string, clean_text, is_next_command, shorten

logger = get_logger(__name__)


class SessionOrchestrator:
    """
    Drives the store, geocoder, place-details provider and link shortener
    for each inbound message.

    Messages from one sender are handled one at a time so that two quick
    "next" texts advance the page cursor twice.
    """

    def __init__(self, store: Store, geocoder, places, shortener,
                 page_size: int = PAGE_SIZE,
                 clock: Callable[[], datetime] = get_eastern_now):
        self.store = store
        self.geocoder = geocoder
        self.places = places
        self.shortener = shortener
        self.page_size = page_size
        self.clock = clock
        self.locks = SenderLocks()
        self.writes = BackgroundWrites()

    async def handle_message(self, message: InboundMessage) -> str:
        """
        Produce the reply for one inbound message

        Raises:
            DataIntegrityError: stored session state is inconsistent
            Exception: any collaborator failure (no partial reply is produced)
        """
        sender = message.sender
        with tracer.start_as_current_span(
            "sms.handle_message", openinference_span_kind="chain",
        ) as span:
            span.set_attribute("input.value", message.body)
            try:
                async with self.locks.hold(sender):
                    reply = await self._handle_locked(message)
            except DataIntegrityError:
                logger.exception("Data integrity fault for %s", sender)
                raise
            except Exception:
                logger.exception("Failed to answer %s: '%s'", sender, shorten(message.body))
                raise
            span.set_attribute("output.value", reply)
            return reply

    async def _handle_locked(self, message: InboundMessage) -> str:
        sender, body = message.sender, message.body

        session = await self.store.find_session(sender)
        if session is None:
            logger.info("New sender %s", sender)
            await self.store.create_session(
                sender,
                city=message.from_city,
                state=message.from_state,
                country=message.from_country,
                zip_code=message.from_zip,
            )
            self._record_activity(sender, body)
            return HELP_TEXT

        # Read the age before refreshing it
        age = await self.store.get_last_active_age(sender)
        self._record_activity(sender, body)

        state = classify_sender(True, age)
        wants_next = is_next_command(body)
        logger.info("Sender %s is %s (next=%s)", sender, state.value, wants_next)

        if wants_next and state is SenderState.ACTIVE:
            return await self.continue_search(sender)
        if wants_next:
            return HELP_TEXT
        return await self.new_search(sender, body)

    def _record_activity(self, sender: str, body: str):
        self.writes.submit(self.store.record_message(sender, body),
                           f"record message from {sender}")
        self.writes.submit(self.store.touch_last_active(sender),
                           f"touch last active for {sender}")

    async def new_search(self, sender: str, body: str) -> str:
        """Geocode the message and reply with the first page of results"""
        query = SearchQuery(raw_text=body, normalized_text=build_search_string(clean_text(body)))
        logger.info("Search string for %s: %s", sender, query.normalized_text)

        try:
            location = await self.geocoder.geocode(query.normalized_text)
        except AddressNotFoundError:
            logger.info("Address not found: %s", query.normalized_text)
            return NOT_FOUND_TEXT
        except AmbiguousAddressError as e:
            logger.info("Ambiguous address (%d matches): %s", e.match_count, query.normalized_text)
            return MULTIPLE_MATCHES_TEXT

        points = await self.store.query_nearest(location.lat, location.lng, self.page_size, 0)
        reply = await self._render(points)
        # Only a delivered first page replaces the previous search
        await self.store.update_active_location(sender, location.lat, location.lng)
        await self.store.set_page_cursor(sender, 1)
        return reply

    async def continue_search(self, sender: str) -> str:
        """Reply with the next page for the sender's stored search location"""
        page_no = await self.store.get_page_cursor(sender)
        location = await self.store.get_active_location(sender)
        if location is None:
            raise MissingLocationError(sender)

        offset = page_no * self.page_size
        logger.info("Next page for %s: cursor=%d offset=%d", sender, page_no, offset)
        points = await self.store.query_nearest(location.lat, location.lng, self.page_size, offset)
        if not points:
            return NO_MORE_RESULTS_TEXT

        # A page that fails to render is served again on the next "next"
        reply = await self._render(points)
        await self.store.set_page_cursor(sender, page_no + 1)
        return reply

    async def _render(self, points) -> str:
        enriched = await enrich_page(
            points, self.places, self.shortener, self.writes, self.store, now=self.clock(),
        )
        return render_page(enriched)

    async def drain(self):
        """Wait for outstanding background writes"""
        await self.writes.drain()
