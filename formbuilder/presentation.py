"""
Display-only fields derived from a form and its owner.

Every "active" value takes both records explicitly: the form's own setting
wins when present, otherwise the owner's default is used.
"""
from datetime import datetime, timezone
from typing import Optional

from .config import API_BASE_URL, ASSET_URL

DEFAULT_BRAND_COLOR = '#000000'
BLACK = '#000000'
WHITE = '#ffffff'


def brand_color(form) -> str:
    return form.brand_color or DEFAULT_BRAND_COLOR


def contrast_color(form) -> str:
    # binary rule: white on black, black on anything else
    return WHITE if brand_color(form).lower() == BLACK else BLACK


def active_privacy_link(form, user) -> Optional[str]:
    if form.privacy_link is not None:
        return form.privacy_link
    return user.privacy_link if user is not None else None


def active_legal_notice_link(form, user) -> Optional[str]:
    if form.legal_notice_link is not None:
        return form.legal_notice_link
    return user.legal_notice_link if user is not None else None


def legal_attributes(form, user) -> dict:
    return {
        'company_name': getattr(user, 'company_name', None),
        'company_description': getattr(user, 'company_description', None),
        'active_privacy_link': active_privacy_link(form, user),
        'active_legal_notice_link': active_legal_notice_link(form, user),
        'privacy_contact_person': getattr(user, 'privacy_contact_person', None),
        'privacy_contact_email': getattr(user, 'privacy_contact_email', None),
    }


def avatar(form, storage):
    """Public URL of the form avatar, or False when no file is stored."""
    if not form.avatar_path or not storage.exists(form.avatar_path):
        return False
    return f"{ASSET_URL.rstrip('/')}/images/{form.avatar_path}"


def is_published(form, now: Optional[datetime] = None) -> bool:
    if form.published_at is None:
        return False
    return _as_utc(form.published_at) <= _as_utc(now or datetime.now(timezone.utc))


def _as_utc(value: datetime) -> datetime:
    # naive timestamps are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def route(form) -> str:
    return f"{API_BASE_URL.rstrip('/')}/{form.id}"


def form_to_dict(form, storage) -> dict:
    data = {
        'id': form.id,
        'name': form.name,
        'description': form.description,
        'published_at': form.published_at,
        'is_published': is_published(form),
        'route': route(form),
        'brand_color': brand_color(form),
        'contrast_color': contrast_color(form),
        'avatar': avatar(form, storage),
        'privacy_link': form.privacy_link,
        'legal_notice_link': form.legal_notice_link,
    }
    data.update(legal_attributes(form, form.user))
    return data
