"""
Resume browsing state for the "find chefs" view.
"""
import logging
from typing import Iterable, List, Optional

from chefdhundo.client.api import ApiError, ChefDhundoClient, UnauthorizedError
from chefdhundo.client.cache import ResumePageCache

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 12
PROFESSION_FIELDS = ("profession", "work_type", "job_role")


def unique_professions(resumes: Iterable[dict]) -> List[str]:
    """Distinct profession, work type and job role values, sorted."""
    values = set()
    for resume in resumes:
        for field in PROFESSION_FIELDS:
            value = (resume.get(field) or "").strip()
            if value:
                values.add(value)
    return sorted(values)


class ResumeBrowser:
    """
    Holds one page of resumes plus the active filters.

    Errors never raise: a 401 clears the data and sets ``error`` to
    "Unauthorized"; any other failure keeps the backend's detail in ``error``.
    """

    def __init__(self, client: ChefDhundoClient, cache: Optional[ResumePageCache] = None, limit: int = DEFAULT_LIMIT):
        self.client = client
        self.cache = cache or ResumePageCache()
        self.limit = limit

        self.page = 1
        self.search = ""
        self.experience = "all"
        self.profession = "all"

        self.resumes: List[dict] = []
        self.pagination: Optional[dict] = None
        self.all_resumes: List[dict] = []
        self.professions: List[str] = []
        self.error: Optional[str] = None

    def _apply(self, payload: dict) -> None:
        self.resumes = payload.get("data") or []
        self.pagination = payload.get("pagination")
        self.error = None

    def _fail(self, error: ApiError) -> None:
        if isinstance(error, UnauthorizedError):
            self.resumes = []
            self.pagination = None
            self.all_resumes = []
            self.error = "Unauthorized"
            return
        logger.warning(f"Resume fetch failed: {error.detail}")
        self.error = error.detail

    def fetch_page(
        self,
        page: int = 1,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        experience: Optional[str] = None,
        profession: Optional[str] = None,
    ) -> List[dict]:
        """Load one page; filters left as None keep their current values."""
        self.page = page
        if limit is not None:
            self.limit = limit
        if search is not None:
            self.search = search
        if experience is not None:
            self.experience = experience
        if profession is not None:
            self.profession = profession

        cached = self.cache.get(self.page, self.limit, self.search, self.experience, self.profession)
        if cached is not None:
            self._apply(cached)
            return self.resumes

        try:
            payload = self.client.list_resumes(
                page=self.page,
                limit=self.limit,
                search=self.search,
                experience=self.experience,
                profession=self.profession,
            )
        except ApiError as e:
            self._fail(e)
            return self.resumes

        self.cache.put(self.page, self.limit, self.search, self.experience, self.profession, payload)
        self._apply(payload)
        return self.resumes

    def set_filters(
        self,
        search: Optional[str] = None,
        experience: Optional[str] = None,
        profession: Optional[str] = None,
    ) -> List[dict]:
        """Change filters; any change goes back to page 1."""
        changed = (
            (search is not None and search != self.search)
            or (experience is not None and experience != self.experience)
            or (profession is not None and profession != self.profession)
        )
        if not changed:
            return self.resumes
        return self.fetch_page(1, search=search, experience=experience, profession=profession)

    @property
    def has_more(self) -> bool:
        return bool(self.pagination and self.pagination.get("hasMore"))

    def next_page(self) -> List[dict]:
        if not self.has_more:
            return self.resumes
        return self.fetch_page(self.page + 1)

    def previous_page(self) -> List[dict]:
        if self.page <= 1:
            return self.resumes
        return self.fetch_page(self.page - 1)

    def fetch_all(self) -> List[dict]:
        """Full list (cached) and the profession options derived from it."""
        cached = self.cache.get_full_list()
        if cached is None:
            try:
                cached = self.client.list_all_resumes().get("data") or []
            except ApiError as e:
                self._fail(e)
                return self.all_resumes
            self.cache.put_full_list(cached)

        self.all_resumes = cached
        self.professions = unique_professions(cached)
        return self.all_resumes

    def refresh(self) -> List[dict]:
        self.cache.clear()
        return self.fetch_page(self.page)
