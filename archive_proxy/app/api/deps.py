from __future__ import annotations

import httpx
from fastapi import Depends, Request

from archive_proxy.app.domain.ports import FetchPort
from archive_proxy.app.domain.query import QueryTranslator
from archive_proxy.app.domain.services.search_service import SearchService
from archive_proxy.app.domain.services.work_service import WorkService
from archive_proxy.app.domain.services.tag_service import TagService
from archive_proxy.app.domain.services.autocomplete_service import AutocompleteService
from archive_proxy.app.adapters.fetchers.http_fetcher import ResilientFetcher
from archive_proxy.app.adapters.parsers.listing_parser import ListingParser
from archive_proxy.app.adapters.parsers.work_parser import WorkParser
from archive_proxy.app.adapters.parsers.tag_parser import TagCloudParser
from archive_proxy.app.platform.config import settings


# ---- 클라이언트 ----
def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    앱 시작 시 main.py의 lifespan에서 만들어 넣어둔 공유 httpx 클라이언트를 꺼낸다.
    생성/종료는 lifespan 만 담당한다. lifespan 없이 띄운 앱(테스트 등)은 get_fetcher 를 오버라이드해야 한다.
    """
    client = getattr(request.app.state, "http_client", None)
    if client is None:
        raise RuntimeError("shared HTTP client is not initialised; run the app with its lifespan")
    return client


def get_fetcher(client: httpx.AsyncClient = Depends(get_http_client)) -> FetchPort:
    return ResilientFetcher(client, settings.transport_config(), settings.retry_policy())


# ---- 서비스 ----
def get_search_service(fetcher: FetchPort = Depends(get_fetcher)) -> SearchService:
    return SearchService(
        translator=QueryTranslator(),
        fetcher=fetcher,
        parser=ListingParser(freeform_tag_limit=settings.FREEFORM_TAG_LIMIT),
        transport=settings.transport_config(),
    )


def get_work_service(fetcher: FetchPort = Depends(get_fetcher)) -> WorkService:
    return WorkService(fetcher=fetcher, parser=WorkParser(), transport=settings.transport_config())


def get_tag_service(fetcher: FetchPort = Depends(get_fetcher)) -> TagService:
    return TagService(
        fetcher=fetcher,
        parser=TagCloudParser(limit=settings.POPULAR_TAG_LIMIT),
        transport=settings.transport_config(),
    )


def get_autocomplete_service(fetcher: FetchPort = Depends(get_fetcher)) -> AutocompleteService:
    return AutocompleteService(
        fetcher=fetcher,
        transport=settings.transport_config(),
        min_length=settings.AUTOCOMPLETE_MIN_LENGTH,
    )
