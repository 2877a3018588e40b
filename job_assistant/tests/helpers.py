from datetime import datetime, timedelta, timezone

from job_assistant.domain.models import CatalogJob, CompanyRef

BASE_TIME = datetime(2024, 5, 1, tzinfo=timezone.utc)


def make_job(
    job_id,
    title,
    location,
    salary=600000,
    experience_level=2,
    description="",
    days=0,
    company="Acme",
    job_type="Full-time",
):
    return CatalogJob(
        id=job_id,
        title=title,
        description=description or f"{title} role",
        location=location,
        salary=salary,
        experience_level=experience_level,
        job_type=job_type,
        created_at=BASE_TIME + timedelta(days=days),
        company=CompanyRef(name=company, logo=f"https://img.example/{company}.png") if company else None,
    )
