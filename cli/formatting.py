"""Plain-text rendering of API results.

Each function turns one typed result into the lines printed by a command.
"""

from datetime import datetime

from core.config import Settings
from core.constants import DISPLAY_DATE_FORMAT
from core.models import (
    DeleteResult,
    KeyResult,
    ListResult,
    PasteListItem,
    ShortenResult,
    UploadResult,
    UrlListItem,
    UrlStats,
)
from core.utils import format_bytes, mask_secret


def format_key_value(key: str, value: object) -> str:
    return f"{key}: {value}"


def format_date(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime(DISPLAY_DATE_FORMAT)


def format_upload_result(result: UploadResult) -> str:
    lines = [
        result.filename or result.id,
        result.url,
        format_key_value("Created", format_date(result.created_at)),
    ]
    if result.expires_at is not None:
        lines.append(format_key_value("Expires", format_date(result.expires_at)))
    lines += [
        format_key_value("Size", format_bytes(result.size)),
        format_key_value("ID", result.id),
    ]
    if result.private:
        lines.append(format_key_value("Private", "yes"))
    lines += [
        "",
        format_key_value("Raw", result.raw_url),
        format_key_value("Download", result.download_url),
        format_key_value("Delete", result.delete_url),
    ]
    return "\n".join(lines)


def format_shorten_result(result: ShortenResult) -> str:
    lines = [result.short_url, f"→ {result.url}"]
    if result.title:
        lines.append(format_key_value("Title", result.title))
    lines += [
        format_key_value("Created", format_date(result.created_at)),
        format_key_value("Clicks", result.clicks),
        format_key_value("ID", result.id),
        "",
        format_key_value("Delete", result.delete_url),
    ]
    if result.expires_at is not None:
        lines += ["", format_key_value("Expires", format_date(result.expires_at))]
    return "\n".join(lines)


def format_url_stats(stats: UrlStats) -> str:
    return "\n".join(
        [
            stats.short_url or stats.id,
            f"→ {stats.url}",
            format_key_value("Clicks", stats.clicks),
            format_key_value("Last click", format_date(stats.last_click)),
            format_key_value("Created", format_date(stats.created_at)),
            format_key_value("Expires", format_date(stats.expires_at)),
        ]
    )


def format_paste_item(item: PasteListItem) -> str:
    size = format_bytes(item.size) if item.size > 0 else "-"
    return "\n".join(
        [
            item.filename or item.id,
            item.url,
            f"Created: {format_date(item.created_at)} • "
            f"Expires: {format_date(item.expires_at)} • "
            f"Size: {size} • ID: {item.id}",
        ]
    )


def format_url_item(item: UrlListItem) -> str:
    lines = [item.short_url or item.id, f"→ {item.url}"]
    if item.title:
        lines.append(format_key_value("Title", item.title))
    lines.append(
        f"Created: {format_date(item.created_at)} • "
        f"Expires: {format_date(item.expires_at)} • "
        f"Clicks: {item.clicks} • ID: {item.id}"
    )
    return "\n".join(lines)


def format_list_result(
    result: ListResult[PasteListItem] | ListResult[UrlListItem],
) -> str:
    """Render every entry followed by a pagination footer."""
    if not result.items:
        return "No items found."

    entries = []
    for item in result.items:
        if isinstance(item, PasteListItem):
            entries.append(format_paste_item(item))
        else:
            entries.append(format_url_item(item))

    footer = (
        f"Page {result.page} of {result.page_count} "
        f"(showing {len(result.items)} of {result.total} total)"
    )
    return "\n\n".join(entries + [footer])


def format_delete_result(result: DeleteResult) -> str:
    if result.success:
        return result.message or "Content deleted successfully!"
    return result.error or result.message or "Delete failed"


def format_key_result(result: KeyResult) -> str:
    return result.message or "API key requested. Check your email for next steps."


def format_key_status(settings: Settings) -> str:
    """Describe the locally configured API key without contacting the service."""
    if not settings.api_key:
        return "\n".join(
            [
                "No API key configured",
                "",
                'Run 0x45 key request --email you@example.com --name "Your Name" '
                "to request a key",
                format_key_value("Max Expiry", f"{settings.max_expiry_days} days"),
                format_key_value("Private Pastes", "Disabled"),
            ]
        )

    return "\n".join(
        [
            "API Key Configuration",
            "",
            format_key_value("API Key", mask_secret(settings.api_key)),
            format_key_value("Max Expiry", f"{settings.max_expiry_days} days"),
            format_key_value("Private Pastes", "Enabled"),
        ]
    )


def format_settings(values: dict[str, str]) -> str:
    if not values:
        return "No configuration values set."
    return "\n".join(format_key_value(key, value) for key, value in values.items())
