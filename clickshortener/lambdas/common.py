"""Response payload helpers shared by the Lambda handlers."""

from typing import Any

from clickshortener.models import UrlRecordModel
from clickshortener.types import LambdaEvent
from clickshortener.utils.helpers import get_short_url


def path_shortcode(event: LambdaEvent) -> str | None:
    return (event.get('pathParameters') or {}).get('shortcode')


def record_body(record: UrlRecordModel, event: LambdaEvent) -> dict[str, Any]:
    return {
        'shortcode': record.code,
        'short_url': get_short_url(record.code, event),
        'target_url': record.target,
        'click_count': record.click_count,
        'created_at': record.created_at.isoformat(),
        'last_accessed_at': record.last_accessed_at.isoformat() if record.last_accessed_at else None,
    }
