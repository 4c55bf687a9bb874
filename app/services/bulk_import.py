"""
Bulk show import.

Pasted text is classified into one ParsedShow per URL, then each entry is
resolved through its platform and submitted to the roster API as a show of
the selected artist. Entries are handled one at a time, in input order, and
a failure only ever affects the entry it happened on.
"""
import inspect
import logging
from typing import AsyncIterator, Awaitable, Callable, Optional, Union

from pydantic import ValidationError

from app.core.exceptions import NoUrlsProvidedError, PlatformError, RosterApiError
from app.schemas.bulk_import import (
    BulkImportSummary,
    BulkProgressEvent,
    ImportStatus,
    ParsedShow,
)
from app.schemas.show import Platform
from app.services.metadata import Resolvers
from app.services.metadata.mixcloud import HOST_FRAGMENT as MIXCLOUD_HOST
from app.services.metadata.soundcloud import HOST_FRAGMENT as SOUNDCLOUD_HOST
from app.services.roster_api import RosterApiClient

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "Invalid URL: must be a Mixcloud or SoundCloud link"
UNEXPECTED_ERROR_MESSAGE = "Unexpected error while importing this show"

ProgressCallback = Callable[[BulkProgressEvent], Union[None, Awaitable[None]]]


# ============= Classification =============

def classify_url(line: str) -> ParsedShow:
    """Tag a single trimmed line with its platform."""
    if MIXCLOUD_HOST in line:
        return ParsedShow(url=line, platform=Platform.MIXCLOUD)
    if SOUNDCLOUD_HOST in line:
        return ParsedShow(url=line, platform=Platform.SOUNDCLOUD)
    return ParsedShow(
        url=line,
        platform=Platform.SOUNDCLOUD,
        status=ImportStatus.ERROR,
        error=INVALID_URL_MESSAGE,
    )


def classify_urls(text: str) -> list[ParsedShow]:
    """
    Split pasted text into classified entries, one per non-blank line.

    Raises:
        NoUrlsProvidedError: nothing but whitespace was given
    """
    lines = [line.strip() for line in (text or "").split("\n")]
    lines = [line for line in lines if line]
    if not lines:
        raise NoUrlsProvidedError()
    return [classify_url(line) for line in lines]


def summarize(entries: list[ParsedShow]) -> BulkImportSummary:
    """Counts for a (possibly partial) run."""
    total = len(entries)
    finished = sum(1 for e in entries if e.is_finished)
    return BulkImportSummary(
        total=total,
        succeeded=sum(1 for e in entries if e.status == ImportStatus.SUCCESS),
        failed=sum(1 for e in entries if e.status == ImportStatus.ERROR),
        progress=(finished * 100 / total) if total else 100.0,
    )


# ============= Sequencing =============

class BulkImportRunner:
    """Resolves and submits parsed entries for one artist, strictly in order."""

    def __init__(self, resolvers: Resolvers, api: RosterApiClient):
        self.resolvers = resolvers
        self.api = api

    async def process(self, entry: ParsedShow, artist_id: str) -> None:
        """Resolve one entry and submit it. The entry is updated in place."""
        entry.status = ImportStatus.PROCESSING
        try:
            resolved = await self.resolvers[entry.platform].resolve(entry.url)
            await self.api.add_show(artist_id, resolved.to_payload())
        except (PlatformError, RosterApiError) as e:
            logger.warning(f"[BulkImport] {entry.url} failed: {e.message}")
            entry.status = ImportStatus.ERROR
            entry.error = e.message
            return
        except ValidationError as e:
            logger.warning(f"[BulkImport] {entry.url} returned unusable metadata: {e}")
            entry.status = ImportStatus.ERROR
            entry.error = "Show is missing a title"
            return
        except Exception as e:
            logger.error(f"[BulkImport] Unexpected error importing {entry.url}: {type(e).__name__}: {e}")
            entry.status = ImportStatus.ERROR
            entry.error = UNEXPECTED_ERROR_MESSAGE
            return

        entry.status = ImportStatus.SUCCESS
        entry.data = resolved
        entry.error = None

    async def iter_run(self, entries: list[ParsedShow], artist_id: str) -> AsyncIterator[BulkProgressEvent]:
        """
        Process entries one by one, yielding progress after each.

        Entries that failed classification are not resolved but still count
        towards progress.
        """
        total = len(entries)
        for index, entry in enumerate(entries):
            if entry.status != ImportStatus.ERROR:
                await self.process(entry, artist_id)
            yield BulkProgressEvent(
                index=index,
                progress=(index + 1) * 100 / total,
                entry=entry,
            )

    async def run(
        self,
        entries: list[ParsedShow],
        artist_id: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BulkImportSummary:
        """Process every entry and return the success/error counts."""
        logger.info(f"[BulkImport] Importing {len(entries)} URL(s) for artist {artist_id}")

        async for event in self.iter_run(entries, artist_id):
            if on_progress is not None:
                result = on_progress(event)
                if inspect.isawaitable(result):
                    await result

        summary = summarize(entries)
        logger.info(f"[BulkImport] Finished for artist {artist_id}: {summary.message}")
        return summary
