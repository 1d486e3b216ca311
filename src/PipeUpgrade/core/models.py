from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional

# Release this package upgrades installations to, and the only release it
# accepts as a starting point.
VERSION: Final[str] = "1.8.5"
UPGRADE_FROM_VERSION: Final[str] = "1.8.4"

# Blog owned by the platform administrator; holds the authoritative version marker.
PLATFORM_BLOG_ID: Final[int] = 1

SETTING_CATEGORY_SYSTEM: Final[str] = "system"
SETTING_CATEGORY_AD: Final[str] = "ad"
SETTING_CATEGORY_BASIC: Final[str] = "basic"
SETTING_CATEGORY_PREFERENCE: Final[str] = "preference"

SETTING_NAME_SYSTEM_VER: Final[str] = "systemVersion"
SETTING_NAME_AD_GOOGLE_ADSENSE_ARTICLE_EMBED: Final[str] = "adGoogleAdSenseArticleEmbed"
SETTING_NAME_BASIC_BLOG_TITLE: Final[str] = "basicBlogTitle"
SETTING_NAME_BASIC_BLOG_SUBTITLE: Final[str] = "basicBlogSubtitle"
SETTING_NAME_PREFERENCE_ARTICLE_LIST_PAGE_SIZE: Final[str] = "preferenceArticleListPageSize"


@dataclass(slots=True)
class Setting:
    """Persisted key/value configuration entry scoped to one blog.

    Attributes:
        category: Setting group, e.g. "system" or "ad".
        name: Setting key, unique per category and blog.
        value: Setting value; empty string when unset.
        blog_id: Owning blog identifier.
        id: Row identifier, None until the record is stored.
    """

    category: str
    name: str
    value: str
    blog_id: int
    id: Optional[int] = None

    def is_version_marker(self) -> bool:
        return self.name == SETTING_NAME_SYSTEM_VER
