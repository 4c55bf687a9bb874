"""Show metadata resolvers, one per supported platform."""

from typing import Optional

import httpx

from app.schemas.show import Platform
from app.services.metadata.base import ShowResolver
from app.services.metadata.mixcloud import MixcloudResolver
from app.services.metadata.soundcloud import SoundCloudService

Resolvers = dict[Platform, ShowResolver]

_RESOLVERS: dict[Platform, type[ShowResolver]] = {
    Platform.MIXCLOUD: MixcloudResolver,
    Platform.SOUNDCLOUD: SoundCloudService,
}


def build_resolvers(client: Optional[httpx.AsyncClient] = None) -> Resolvers:
    """One resolver per platform, sharing the given (or global) HTTP client."""
    return {platform: cls(client=client) for platform, cls in _RESOLVERS.items()}


__all__ = [
    "Resolvers",
    "ShowResolver",
    "MixcloudResolver",
    "SoundCloudService",
    "build_resolvers",
]
