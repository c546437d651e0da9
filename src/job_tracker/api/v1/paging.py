# job-tracker-backend\src\job_tracker\api\v1\paging.py

from fastapi import Query, Response

from job_tracker.core.config import settings


class PageParams:
    """Query parameters shared by every list endpoint (1-based pages)."""

    def __init__(
        self,
        page: int = Query(1, ge=1),
        page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    ):
        self.page = page
        self.page_size = page_size


def set_pagination_headers(response: Response, total: int, params: PageParams) -> None:
    response.headers["X-Total-Count"] = str(total)
    response.headers["X-Page"] = str(params.page)
    response.headers["X-Page-Size"] = str(params.page_size)
