"""
API routes for the job crawl.

Endpoints:
- OPTIONS /jobs    CORS preflight (always 200)
- POST    /jobs    Crawl every results page for a query, return [{title, link}]

Error responses are plain text:
- 400 "Invalid request"           body is not a valid request object
- 500 "Failed to fetch starturl"  page 1 could not be fetched/parsed
- 500 "internal error"            anything else (logged with traceback)

Every /jobs response carries CORS_HEADERS itself, so preflights never depend
on the requested method or origin.

Running locally:
    cd backend
    uvicorn main:app --reload --port 8080
"""

from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from config.settings import Settings, settings as app_settings
from crawler import ConfigError, FetchError, PageFetcher, TitleFilters, crawl
from crawler.orchestrator import Fetcher
from utils.crawl_logging import CrawlLogContext, RequestLogContext

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


# =============================================================================
# Pydantic Models
# =============================================================================

class TitleFiltersModel(BaseModel):
    """Optional post-crawl title filter."""
    model_config = ConfigDict(strict=True)

    include: Optional[list[str]] = None
    exclude: list[str] = Field(default_factory=list)


class JobsRequest(BaseModel):
    """
    Crawl request body.

    `isintern` is also accepted as `isIntern` (the web client sends camelCase).
    `null` is treated like an absent key. Types are strict: `"true"` is not a
    bool and `true` or `"3"` are not filter codes.
    """
    model_config = ConfigDict(strict=True, populate_by_name=True, extra="ignore")

    query: str = ""
    is_intern: bool = Field(default=False, validation_alias=AliasChoices("isintern", "isIntern", "is_intern"))
    et: list[int] = Field(default_factory=list)
    title_filters: Optional[TitleFiltersModel] = None

    @field_validator("query", mode="before")
    @classmethod
    def none_to_blank(cls, v):
        return "" if v is None else v

    @field_validator("is_intern", mode="before")
    @classmethod
    def none_to_false(cls, v):
        return False if v is None else v

    @field_validator("et", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return [] if v is None else v


class JobOut(BaseModel):
    """One job in the response array."""
    title: str
    link: str


# =============================================================================
# Dependencies
# =============================================================================

def get_settings() -> Settings:
    return app_settings


async def get_fetcher(settings: Settings = Depends(get_settings)) -> AsyncIterator[Fetcher]:
    """Per-request PageFetcher (closed after the response)."""
    async with PageFetcher(timeout=settings.FETCH_TIMEOUT_SECONDS) as fetcher:
        yield fetcher


# =============================================================================
# Endpoints
# =============================================================================

@router.options("/jobs")
async def jobs_preflight():
    """Answer every CORS preflight with 200 and permissive headers."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post(
    "/jobs",
    response_model=list[JobOut],
    responses={400: {"description": "Invalid request"}, 500: {"description": "Crawl failed"}},
)
async def crawl_jobs(
    request: Request,
    fetcher: Fetcher = Depends(get_fetcher),
    settings: Settings = Depends(get_settings),
):
    """
    Crawl every results page for a query and return the deduplicated jobs.

    Example:
        POST /jobs
        {
            "query": "golang",
            "isintern": false,
            "et": [1, 3]
        }

        Response:
        [
            {"title": "Go Developer", "link": "https://www.pracuj.pl/praca/..."},
            ...
        ]
    """
    log = RequestLogContext()

    try:
        body = JobsRequest.model_validate_json(await request.body())
    except ValidationError as e:
        log.log_warning(f"Bad request body: {e.error_count()} error(s): {e.errors()[0]['msg']}")
        return PlainTextResponse("Invalid request", status_code=400, headers=CORS_HEADERS)

    log.log_info(f"Request: query={body.query!r} isintern={body.is_intern} et={body.et}")

    try:
        result = await crawl(
            body.query,
            body.et,
            body.is_intern,
            fetcher=fetcher,
            sink=CrawlLogContext(body.query, request_id=log.request_id),
            settings=settings,
        )
    except FetchError as e:
        log.log_error(f"Start URL fetch failed: {e}")
        return PlainTextResponse("Failed to fetch starturl", status_code=500, headers=CORS_HEADERS)
    except ConfigError as e:
        log.log_error(f"Invalid crawl configuration: {e}")
        return PlainTextResponse("internal error", status_code=500, headers=CORS_HEADERS)
    except Exception:
        log.log_exception("Unhandled error in crawl_jobs")
        return PlainTextResponse("internal error", status_code=500, headers=CORS_HEADERS)

    filters = None
    if body.title_filters is not None:
        filters = TitleFilters.from_dict(body.title_filters.model_dump())
    jobs = result.to_list(filters)
    if filters is not None and not filters.is_empty:
        log.log_info(f"Title filters {filters.to_dict()} kept {len(jobs)}/{result.total_jobs} jobs")

    if result.is_partial:
        log.log_warning(f"Partial result: pages {result.failed_pages} failed")
    log.log_info(f"Responding with {len(jobs)} jobs")

    return JSONResponse(content=jobs, headers=CORS_HEADERS)
