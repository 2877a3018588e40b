from pathlib import Path
from typing import Iterable, List

import yaml

from job_assistant.catalog.base import JobQuery, job_from_dict, job_matches
from job_assistant.domain.exceptions import CatalogUnavailable
from job_assistant.domain.models import CatalogJob
from job_assistant.infrastructure.logging.logger import logger


class InMemoryJobCatalog:
    """进程内职位目录，适合本地演示与测试。"""

    name = "memory"

    def __init__(self, jobs: Iterable[CatalogJob] = ()):
        self._jobs: List[CatalogJob] = list(jobs)

    @classmethod
    def from_file(cls, path: str | Path) -> "InMemoryJobCatalog":
        """从 YAML/JSON 文件加载职位列表。

        文件内容可以是职位列表，也可以是 {"jobs": [...]}。
        """

        p = Path(path).expanduser()
        try:
            data = yaml.safe_load(p.read_text(encoding="utf-8")) or []
        except (OSError, yaml.YAMLError) as e:
            logger.error("catalog.load_failed", extra={"extra": {"path": str(p), "error": str(e)}})
            raise CatalogUnavailable(code="CATALOG_LOAD_ERROR", message=str(e))
        if isinstance(data, dict):
            data = data.get("jobs") or []
        return cls(job_from_dict(item) for item in data if isinstance(item, dict))

    def find_jobs(self, query: JobQuery) -> List[CatalogJob]:
        matched = [job for job in self._jobs if job_matches(job, query)]
        matched.sort(key=lambda j: j.created_at, reverse=True)
        return matched[: query.limit]
