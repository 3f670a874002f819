from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import JobSite


class JobSiteRepository(Protocol):
    def list_sites(self) -> Sequence[JobSite]:
        raise NotImplementedError

    def get_default_site(self) -> Optional[JobSite]:
        raise NotImplementedError
