"""检索规划模块：意图 + 槽位 -> 职位检索条件，目录职位 -> JobSummary。"""

from dataclasses import dataclass
from typing import List, Optional

from job_assistant.catalog.base import JobCatalog, JobQuery, MAX_RESULTS
from job_assistant.dialogue.slots import (
    extract_content_words,
    extract_search_terms,
    parse_location,
    parse_salary,
    parse_skill,
)
from job_assistant.domain.exceptions import CatalogUnavailable
from job_assistant.domain.models import CatalogJob, Intent, JobSummary
from job_assistant.infrastructure.logging.logger import logger

DEFAULT_COMPANY_NAME = "Company"


@dataclass(frozen=True)
class QueryPlan:
    """What to look up for one turn.

    ``query`` is None when the intent needs no catalog access, or when a
    required slot is missing and the reply must ask for it instead.
    ``subject`` is the slot text the reply talks about (search term,
    location, salary floor or skill).
    """

    query: Optional[JobQuery] = None
    subject: Optional[str] = None
    min_salary: Optional[int] = None


NO_QUERY = QueryPlan()


def summarize_job(job: CatalogJob, preview_chars: int = 150) -> JobSummary:
    description = job.description or ""
    if len(description) > preview_chars:
        description = description[:preview_chars] + "..."
    company = job.company
    return JobSummary(
        id=job.id,
        title=job.title,
        company=company.name if company and company.name else DEFAULT_COMPANY_NAME,
        company_logo=company.logo if company else None,
        location=job.location,
        salary=job.salary,
        experience_level=job.experience_level,
        job_type=job.job_type,
        description=description,
    )


class JobQueryBuilder:
    def __init__(
        self,
        catalog: JobCatalog,
        max_results: int = MAX_RESULTS,
        preview_chars: int = 150,
        fallback_search: bool = True,
    ):
        self._catalog = catalog
        self._limit = max(1, min(max_results, MAX_RESULTS))
        self._preview_chars = preview_chars
        self._fallback_search = fallback_search

    def plan(self, intent: Intent, message: str) -> QueryPlan:
        if intent == "job_search":
            terms = extract_search_terms(message)
            return QueryPlan(query=self._query(text=terms), subject=terms or None)

        if intent == "location_query":
            location = parse_location(message)
            if location is None:
                return NO_QUERY
            return QueryPlan(query=self._query(location=location), subject=location)

        if intent == "salary_query":
            salary = parse_salary(message)
            if salary is None:
                return NO_QUERY
            return QueryPlan(query=self._query(min_salary=salary.value), min_salary=salary.value)

        if intent == "skills_query":
            skill = parse_skill(message)
            if skill is None:
                return NO_QUERY
            return QueryPlan(query=self._query(text=skill), subject=skill)

        if intent == "fallback" and self._fallback_search:
            words = extract_content_words(message)
            if not words:
                return NO_QUERY
            text = " ".join(words)
            return QueryPlan(query=self._query(text=text), subject=text)

        return NO_QUERY

    def search(self, query: JobQuery) -> List[JobSummary]:
        """Run ``query`` against the catalog; catalog failures yield no jobs."""

        try:
            jobs = self._catalog.find_jobs(query)
        except CatalogUnavailable:
            return []
        except Exception as e:
            logger.warning(
                "catalog.search_failed",
                extra={"extra": {"catalog": getattr(self._catalog, "name", "unknown"), "error": str(e)}},
            )
            return []
        return [summarize_job(job, self._preview_chars) for job in jobs[: query.limit]]

    def _query(self, **kwargs) -> JobQuery:
        return JobQuery(limit=self._limit, **kwargs)
