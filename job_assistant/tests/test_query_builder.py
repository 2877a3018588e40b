from job_assistant.catalog.base import JobQuery
from job_assistant.catalog.memory import InMemoryJobCatalog
from job_assistant.dialogue.query import JobQueryBuilder, summarize_job
from job_assistant.domain.exceptions import CatalogUnavailable
from job_assistant.tests.helpers import make_job


class BrokenCatalog:
    name = "broken"

    def __init__(self, exc):
        self.exc = exc

    def find_jobs(self, query):
        raise self.exc


class OversizedCatalog:
    name = "oversized"

    def find_jobs(self, query):
        return [make_job(str(i), f"Role {i}", "Pune") for i in range(9)]


def test_plan_job_search_uses_stripped_terms():
    builder = JobQueryBuilder(InMemoryJobCatalog())
    plan = builder.plan("job_search", "Show me jobs in Pune")
    assert plan.query == JobQuery(text="Pune")
    assert plan.subject == "Pune"

    plan = builder.plan("job_search", "show me jobs")
    assert plan.query == JobQuery(text="")
    assert plan.subject is None


def test_plan_missing_slots_means_no_query():
    builder = JobQueryBuilder(InMemoryJobCatalog())
    assert builder.plan("location_query", "remote jobs").query is None
    assert builder.plan("salary_query", "what salary").query is None
    assert builder.plan("skills_query", "any qualification").query is None
    assert builder.plan("greeting", "hello").query is None


def test_plan_slots_become_filters():
    builder = JobQueryBuilder(InMemoryJobCatalog())
    assert builder.plan("location_query", "jobs near Goa").query == JobQuery(location="Goa")
    salary_plan = builder.plan("salary_query", "salary 5 lakh")
    assert salary_plan.query == JobQuery(min_salary=500000)
    assert salary_plan.min_salary == 500000
    assert builder.plan("skills_query", "react skill").query == JobQuery(text="react")


def test_plan_fallback_content_words_and_switch():
    builder = JobQueryBuilder(InMemoryJobCatalog())
    assert builder.plan("fallback", "quantum the data").query == JobQuery(text="quantum data")
    assert builder.plan("fallback", "ok").query is None

    disabled = JobQueryBuilder(InMemoryJobCatalog(), fallback_search=False)
    assert disabled.plan("fallback", "quantum data").query is None


def test_search_degrades_to_empty_on_catalog_failure():
    assert JobQueryBuilder(BrokenCatalog(CatalogUnavailable(message="down"))).search(JobQuery()) == []
    assert JobQueryBuilder(BrokenCatalog(RuntimeError("boom"))).search(JobQuery()) == []


def test_search_caps_results():
    assert len(JobQueryBuilder(OversizedCatalog()).search(JobQuery())) == 5
    assert len(JobQueryBuilder(OversizedCatalog(), max_results=2).search(JobQuery(limit=2))) == 2


def test_summarize_job_truncates_description_and_defaults_company():
    long_job = make_job("1", "Dev", "Pune", description="x" * 200, company=None)
    summary = summarize_job(long_job)
    assert summary.description == "x" * 150 + "..."
    assert summary.company == "Company"
    assert summary.company_logo is None

    short = summarize_job(make_job("2", "Dev", "Pune", description="short text"))
    assert short.description == "short text"
    assert short.company == "Acme"
    assert short.to_dict()["companyLogo"] == "https://img.example/Acme.png"


def test_description_at_the_preview_limit_is_kept_whole():
    exact = summarize_job(make_job("3", "Dev", "Pune", description="y" * 150))
    assert exact.description == "y" * 150
    assert not exact.description.endswith("...")

    over = summarize_job(make_job("4", "Dev", "Pune", description="y" * 151))
    assert over.description == "y" * 150 + "..."
