"""
Tests for the client-side resume browser and its page cache.
"""
from chefdhundo.client.api import ApiError, UnauthorizedError
from chefdhundo.client.cache import ResumePageCache, CurrentUserCache
from chefdhundo.client.resumes import ResumeBrowser, unique_professions


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class FakeResumeClient:
    def __init__(self, total=30):
        self.total = total
        self.calls = []
        self.all_calls = 0
        self.error = None

    def list_resumes(self, page=1, limit=12, search="", experience="all", profession="all"):
        self.calls.append({"page": page, "limit": limit, "search": search, "experience": experience, "profession": profession})
        if self.error:
            raise self.error
        total_pages = -(-self.total // limit)
        start = (page - 1) * limit
        data = [{"id": i, "name": f"Chef {i}"} for i in range(start, min(start + limit, self.total))]
        return {
            "success": True,
            "data": data,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": self.total,
                "totalPages": total_pages,
                "hasMore": page < total_pages,
            },
        }

    def list_all_resumes(self):
        self.all_calls += 1
        if self.error:
            raise self.error
        return {
            "success": True,
            "data": [
                {"id": 1, "profession": "Head Chef", "work_type": "full", "job_role": None},
                {"id": 2, "profession": "Baker", "work_type": "part", "job_role": "Head Chef"},
                {"id": 3, "profession": " ", "work_type": None, "job_role": "Tandoor Chef"},
            ],
        }


def _browser(total=30):
    clock = FakeClock()
    client = FakeResumeClient(total)
    browser = ResumeBrowser(client, ResumePageCache(clock=clock))
    return browser, client, clock


def test_first_page_is_cached():
    browser, client, _ = _browser()

    browser.fetch_page(1)
    browser.fetch_page(1)

    assert len(client.calls) == 1
    assert len(browser.resumes) == 12


def test_cache_expires_after_ttl():
    browser, client, clock = _browser()

    browser.fetch_page(1)
    clock.now += 299
    browser.fetch_page(1)
    assert len(client.calls) == 1

    clock.now += 1
    browser.fetch_page(1)
    assert len(client.calls) == 2


def test_search_is_never_cached():
    browser, client, _ = _browser()

    browser.fetch_page(1, search="amit")
    browser.fetch_page(1, search="amit")

    assert len(client.calls) == 2


def test_later_pages_are_not_cached():
    browser, client, _ = _browser()

    browser.fetch_page(2)
    browser.fetch_page(2)

    assert len(client.calls) == 2


def test_cache_is_keyed_by_filters():
    browser, client, _ = _browser()

    browser.fetch_page(1, experience="medium", profession="Head Chef")
    browser.fetch_page(1, experience="high", profession="Head Chef")
    browser.fetch_page(1, experience="medium", profession="Baker")
    browser.fetch_page(1, experience="medium", profession="Head Chef")

    assert len(client.calls) == 3


def test_fetch_page_keeps_current_filters():
    browser, client, _ = _browser()

    browser.fetch_page(1, experience="pro")
    browser.fetch_page(2)

    assert client.calls[-1]["experience"] == "pro"
    assert client.calls[-1]["page"] == 2


def test_set_filters_returns_to_first_page():
    browser, client, _ = _browser()
    browser.fetch_page(1)
    browser.next_page()
    assert browser.page == 2

    browser.set_filters(experience="fresher")

    assert browser.page == 1
    assert client.calls[-1]["experience"] == "fresher"


def test_set_filters_without_change_does_not_fetch():
    browser, client, _ = _browser()
    browser.fetch_page(1, profession="Baker")

    browser.set_filters(profession="Baker")

    assert len(client.calls) == 1


def test_paging():
    browser, client, _ = _browser(total=30)

    browser.fetch_page(1)
    assert browser.has_more
    browser.next_page()
    browser.next_page()
    assert browser.page == 3
    assert len(browser.resumes) == 6
    assert not browser.has_more

    browser.next_page()
    assert browser.page == 3

    browser.previous_page()
    assert browser.page == 2


def test_unauthorized_clears_data():
    browser, client, _ = _browser()
    browser.fetch_page(2)
    assert browser.resumes

    client.error = UnauthorizedError()
    browser.fetch_page(3)

    assert browser.resumes == []
    assert browser.pagination is None
    assert browser.error == "Unauthorized"


def test_other_errors_keep_detail():
    browser, client, _ = _browser()
    client.error = ApiError(500, "Failed to fetch resumes")

    browser.fetch_page(2)

    assert browser.error == "Failed to fetch resumes"


def test_refresh_bypasses_cache():
    browser, client, _ = _browser()
    browser.fetch_page(1)

    browser.refresh()

    assert len(client.calls) == 2


def test_fetch_all_builds_profession_options():
    browser, client, _ = _browser()

    browser.fetch_all()
    browser.fetch_all()

    assert client.all_calls == 1
    assert browser.professions == ["Baker", "Head Chef", "Tandoor Chef", "full", "part"]


def test_unique_professions_empty():
    assert unique_professions([]) == []


def test_current_user_cache_ttl():
    clock = FakeClock()
    cache = CurrentUserCache(clock=clock)
    cache.put({"id": 1})

    clock.now += 24 * 60 * 60 - 1
    assert cache.get() == {"id": 1}

    clock.now += 1
    assert cache.get() is None


def test_cache_is_keyed_by_page_size():
    browser, client, _ = _browser()

    browser.fetch_page(1, limit=12)
    browser.fetch_page(1, limit=24)

    assert len(client.calls) == 2
    assert client.calls[-1]["limit"] == 24
    assert len(browser.resumes) == 24
    assert browser.pagination["limit"] == 24

    browser.fetch_page(1, limit=12)
    assert len(client.calls) == 2
    assert len(browser.resumes) == 12
