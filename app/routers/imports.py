"""Bulk show import router."""

from typing import AsyncIterator

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from app.dependencies import AdminOnly, PlatformResolvers, RosterApi
from app.schemas.bulk_import import (
    BulkImportRequest,
    BulkImportResponse,
    BulkParseRequest,
    ParsedShow,
)
from app.services.bulk_import import BulkImportRunner, classify_urls, summarize

router = APIRouter()


@router.post(
    "/parse",
    response_model=list[ParsedShow],
    summary="Classify pasted URLs",
)
async def parse_urls(request: BulkParseRequest, session: AdminOnly):
    """
    Split pasted text into one entry per URL.

    Mixcloud and SoundCloud links come back pending; anything else is
    marked as an error. Returns 400 when no URLs were given.
    """
    return classify_urls(request.text)


@router.post(
    "/run",
    response_model=BulkImportResponse,
    summary="Import shows from pasted URLs",
)
async def run_import(request: BulkImportRequest, api: RosterApi, resolvers: PlatformResolvers):
    """
    Resolve each URL and add it as a show of the artist, one at a time.

    Failures are reported per entry; the import never stops early.
    """
    entries = classify_urls(request.text)
    runner = BulkImportRunner(resolvers, api)
    summary = await runner.run(entries, request.artist_id)
    return BulkImportResponse(entries=entries, summary=summary, message=summary.message)


@router.post(
    "/stream",
    summary="Import shows from pasted URLs, streaming progress",
    response_class=StreamingResponse,
)
async def stream_import(request: BulkImportRequest, api: RosterApi, resolvers: PlatformResolvers):
    """
    Same as /run, but responds with newline delimited JSON: one progress
    event per entry followed by a final summary line.
    """
    entries = classify_urls(request.text)
    runner = BulkImportRunner(resolvers, api)

    async def events() -> AsyncIterator[str]:
        async for event in runner.iter_run(entries, request.artist_id):
            yield event.model_dump_json(by_alias=True) + "\n"
        summary = summarize(entries)
        yield BulkImportResponse(
            entries=entries, summary=summary, message=summary.message
        ).model_dump_json(by_alias=True) + "\n"

    return StreamingResponse(events(), media_type="application/x-ndjson")
