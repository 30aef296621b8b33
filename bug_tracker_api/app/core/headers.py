"""
Response header helpers.

Two families of headers are produced here:

* alert headers (``X-<app>-alert``, ``X-<app>-error`` and
  ``X-<app>-params``) describing what happened to which entity, and
* pagination headers (``X-Total-Count`` and an RFC 5988 ``Link``
  header with ``next``, ``prev``, ``last`` and ``first`` relations).

The application name prefix comes from ``settings.application_name``.
"""

import math
from typing import Dict, List

from starlette.datastructures import URL

from .config import settings


def create_alert(message: str, param: str) -> Dict[str, str]:
    app_name = settings.application_name
    return {
        f"X-{app_name}-alert": message,
        f"X-{app_name}-params": param,
    }


def create_entity_creation_alert(entity_name: str, entity_id: str) -> Dict[str, str]:
    return create_alert(f"{settings.application_name}.{entity_name}.created", entity_id)


def create_entity_update_alert(entity_name: str, entity_id: str) -> Dict[str, str]:
    return create_alert(f"{settings.application_name}.{entity_name}.updated", entity_id)


def create_entity_deletion_alert(entity_name: str, entity_id: str) -> Dict[str, str]:
    return create_alert(f"{settings.application_name}.{entity_name}.deleted", entity_id)


def create_failure_alert(entity_name: str, error_key: str) -> Dict[str, str]:
    app_name = settings.application_name
    return {
        f"X-{app_name}-error": f"error.{error_key}",
        f"X-{app_name}-params": entity_name,
    }


def generate_pagination_headers(url: URL, page: int, size: int, total: int) -> Dict[str, str]:
    """Build ``X-Total-Count`` and ``Link`` headers for one page of results.

    Parameters
    ----------
    url : URL
        The request URL; its other query parameters (e.g. ``sort``) are
        preserved in the generated links.
    page : int
        Zero‑based index of the returned page.
    size : int
        Page size used for the query.
    total : int
        Total number of elements across all pages.
    """
    total_pages = math.ceil(total / size) if size > 0 else 0
    links: List[str] = []

    def _link(target_page: int, rel: str) -> str:
        target = url.include_query_params(page=target_page, size=size)
        return f'<{target}>; rel="{rel}"'

    if page < total_pages - 1:
        links.append(_link(page + 1, "next"))
    if page > 0:
        links.append(_link(page - 1, "prev"))
    links.append(_link(max(total_pages - 1, 0), "last"))
    links.append(_link(0, "first"))
    return {
        "X-Total-Count": str(total),
        "Link": ",".join(links),
    }
